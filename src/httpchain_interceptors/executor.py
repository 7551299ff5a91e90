"""Execution of an assembled chain around a single dispatch call.

Two strategies share the same handler sequences:

- ``run_suspended`` folds every step, dispatch included, as awaited
  continuations. Nothing runs until the returned awaitable is awaited.
- ``run_direct`` calls the pre-send handlers in a plain loop at call time and
  dispatches immediately. The first failing pre-send handler stops the loop,
  dispatch still happens with the configuration it received.

Both return an awaitable and settle the post-receive handlers the same way.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .chain import AssembledChain, assemble_chain
from .constants import ExecutionMode, Phase
from .exceptions import DispatchError, PipelineError, PostHandlerError, PreHandlerError
from .models import HandlerPair, HandlerSequence, Interceptor, RequestConfig

logger = logging.getLogger(__name__)

Dispatch = Callable[[Any], Awaitable[Any]]

DISPATCH_NAME = "dispatch"


@dataclass(frozen=True)
class Outcome:
    """Settled state of the running chain: a value or a failure."""

    value: Any = None
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, value: Any) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome":
        return cls(error=error)


def wrap_failure(error: Exception, phase: Phase, name: str) -> PipelineError:
    """Attach phase information to a raw handler failure. Pipeline errors pass as they are."""
    if isinstance(error, PipelineError):
        return error

    match phase:
        case Phase.PRE_SEND:
            wrapped: PipelineError = PreHandlerError(f"Pre-send handler '{name}' failed: {str(error)}", name)
        case Phase.POST_RECEIVE:
            wrapped = PostHandlerError(f"Post-receive handler '{name}' failed: {str(error)}", name)
        case _:
            wrapped = DispatchError(f"Dispatch failed: {str(error)}")
    wrapped.__cause__ = error
    return wrapped


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


def _reject_awaitable(result: Any) -> Any:
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        raise TypeError("handler declared synchronous returned an awaitable")
    return result


def _isolated(config: Any) -> Any:
    # a handler that mutates and then raises must not leak into dispatch
    if isinstance(config, RequestConfig):
        return config.model_copy(deep=True)
    return config


async def settle_failure(error: Exception) -> Any:
    """Awaitable that raises the given failure."""
    raise error


async def _step(outcome: Outcome, pair: HandlerPair, phase: Phase) -> Outcome:
    handler = pair.on_rejected if outcome.failed else pair.on_fulfilled
    if handler is None:
        return outcome

    argument = outcome.error if outcome.failed else outcome.value
    logger.debug(f"Running {phase} handler {pair.name} ({'failure' if outcome.failed else 'success'} path)")
    try:
        result = await _resolve(handler(argument))
    except Exception as e:
        return Outcome.failure(wrap_failure(e, phase, pair.name))
    return Outcome.success(result)


async def _fold(outcome: Outcome, steps: Iterable[tuple[HandlerPair, Phase]]) -> Any:
    for pair, phase in steps:
        outcome = await _step(outcome, pair, phase)

    if outcome.failed:
        raise outcome.error
    return outcome.value


def _post_steps(post: HandlerSequence) -> list[tuple[HandlerPair, Phase]]:
    return [(pair, Phase.POST_RECEIVE) for pair in post]


async def _settle_post(pending: Awaitable[Any], post: HandlerSequence) -> Any:
    try:
        outcome = Outcome.success(await _resolve(pending))
    except Exception as e:
        outcome = Outcome.failure(wrap_failure(e, Phase.DISPATCH, DISPATCH_NAME))
    return await _fold(outcome, _post_steps(post))


async def run_suspended(chain: AssembledChain, config: Any, dispatch: Dispatch) -> Any:
    """Run pre-send handlers, dispatch and post-receive handlers as one awaited fold."""
    steps = [(pair, Phase.PRE_SEND) for pair in chain.pre]
    steps.append((HandlerPair(dispatch, None, DISPATCH_NAME), Phase.DISPATCH))
    steps.extend(_post_steps(chain.post))
    return await _fold(Outcome.success(config), steps)


def run_direct(chain: AssembledChain, config: Any, dispatch: Dispatch) -> Awaitable[Any]:
    """Run pre-send handlers synchronously, dispatch, and return the awaitable result.

    Pre-send handlers and the dispatch call happen before this function
    returns. Only the post-receive handlers wait for the returned awaitable.
    Each pre-send handler gets its own copy of a ``RequestConfig``, so a
    failing handler leaves the configuration it was given untouched.
    """
    current = config

    for index, pair in enumerate(chain.pre):
        if pair.on_fulfilled is None:
            continue

        try:
            current = _reject_awaitable(pair.on_fulfilled(_isolated(current)))
        except Exception as e:
            error = wrap_failure(e, Phase.PRE_SEND, pair.name)
            skipped = len(chain.pre) - index - 1

            if pair.on_rejected is None:
                logger.warning(f"{error.message}; dispatching without the remaining {skipped} pre-send handlers")
                break

            try:
                _reject_awaitable(pair.on_rejected(error))
            except Exception as handler_error:
                return settle_failure(wrap_failure(handler_error, Phase.PRE_SEND, pair.name))
            logger.debug(f"{error.message}; handled, skipping the remaining {skipped} pre-send handlers")
            break

    try:
        pending = dispatch(current)
    except Exception as e:
        pending = settle_failure(wrap_failure(e, Phase.DISPATCH, DISPATCH_NAME))

    return _settle_post(pending, chain.post)


def execute_chain(chain: AssembledChain, config: Any, dispatch: Dispatch) -> Awaitable[Any]:
    """Run an assembled chain with the strategy its synchronous flag selects."""
    logger.debug(f"Executing chain in {chain.mode} mode")

    match chain.mode:
        case ExecutionMode.DIRECT:
            return run_direct(chain, config, dispatch)
        case ExecutionMode.SUSPENDED:
            return run_suspended(chain, config, dispatch)


def run_pipeline(
    config: RequestConfig,
    pre_snapshot: Iterable[Interceptor],
    post_snapshot: Iterable[Interceptor],
    dispatch: Dispatch,
) -> Awaitable[Any]:
    """Assemble and execute the chain for one request.

    Returns a single awaitable that settles to the final value or raises the
    final failure, assembly failures included.
    """
    try:
        chain = assemble_chain(pre_snapshot, post_snapshot, config)
    except PipelineError as e:
        return settle_failure(e)
    return execute_chain(chain, config, dispatch)
