"""Assembly of the per-request handler chain.

Pre-send interceptors are prepended as they are traversed, so the one
registered last runs first, right before dispatch. Post-receive interceptors
are appended and run in registration order right after dispatch.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .constants import ExecutionMode
from .exceptions import ChainAssemblyError
from .models import HandlerPair, HandlerSequence, Interceptor, RequestConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssembledChain:
    """Handler sequences built for one request."""

    pre: HandlerSequence
    post: HandlerSequence
    synchronous: bool

    @property
    def mode(self) -> ExecutionMode:
        return ExecutionMode.DIRECT if self.synchronous else ExecutionMode.SUSPENDED


def assemble_chain(
    pre_snapshot: Iterable[Interceptor],
    post_snapshot: Iterable[Interceptor],
    config: RequestConfig,
) -> AssembledChain:
    """Build the pre-send and post-receive sequences for a request.

    Args:
        pre_snapshot: Pre-send interceptors in registration order
        post_snapshot: Post-receive interceptors in registration order
        config: Resolved request configuration, passed to activation predicates

    Returns:
        AssembledChain with both sequences and the synchronous flag

    Raises:
        ChainAssemblyError: If an activation predicate raises
    """
    pre: list[HandlerPair] = []
    synchronous = True

    for interceptor in pre_snapshot:
        try:
            active = interceptor.is_active(config)
        except Exception as e:
            raise ChainAssemblyError(f"Activation predicate of '{interceptor.name}' failed: {str(e)}") from e

        if not active:
            logger.debug(f"Skipping inactive interceptor {interceptor.name}")
            continue

        # every activated entry counts, no short-circuit
        synchronous = synchronous and interceptor.synchronous
        pre.insert(0, interceptor.pair)

    post = [interceptor.pair for interceptor in post_snapshot]

    chain = AssembledChain(pre=tuple(pre), post=tuple(post), synchronous=synchronous)
    logger.debug(f"Assembled chain: {len(chain.pre)} pre-send ({chain.mode}), {len(chain.post)} post-receive")
    return chain
