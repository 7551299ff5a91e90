import logging
from collections.abc import Iterator

from .models import ActivationPredicate, FailureHandler, Interceptor, SuccessHandler
from .userfunc import import_function

logger = logging.getLogger(__name__)


def handler_name(handler: object | None) -> str:
    if handler is None:
        return "<anonymous>"
    return getattr(handler, "__qualname__", None) or type(handler).__name__


class InterceptorRegistry:
    """Ordered collection of interceptors for one pipeline phase.

    Ids are slot indexes and stay valid for the lifetime of the registry:
    ejecting leaves a tombstone instead of compacting the list.
    Consumers never iterate the live slots, they take a snapshot.
    """

    def __init__(self) -> None:
        self._slots: list[Interceptor | None] = []
        self._version = 0

    @property
    def version(self) -> int:
        """Counter bumped on every effective mutation."""
        return self._version

    def use(
        self,
        on_fulfilled: SuccessHandler | None = None,
        on_rejected: FailureHandler | None = None,
        *,
        synchronous: bool = False,
        run_when: ActivationPredicate | None = None,
        name: str | None = None,
    ) -> int:
        """Register an interceptor and return its id."""
        interceptor = Interceptor(
            on_fulfilled=on_fulfilled,
            on_rejected=on_rejected,
            synchronous=synchronous,
            run_when=run_when,
            name=name or handler_name(on_fulfilled if on_fulfilled is not None else on_rejected),
        )
        self._slots.append(interceptor)
        self._version += 1
        logger.debug(f"Registered interceptor {interceptor.name} as #{len(self._slots) - 1}")
        return len(self._slots) - 1

    def use_named(
        self,
        on_fulfilled: str | None = None,
        on_rejected: str | None = None,
        *,
        synchronous: bool = False,
        name: str | None = None,
    ) -> int:
        """Register an interceptor whose handlers are given as 'module.path:function' names."""
        return self.use(
            import_function(on_fulfilled) if on_fulfilled else None,
            import_function(on_rejected) if on_rejected else None,
            synchronous=synchronous,
            name=name or on_fulfilled or on_rejected,
        )

    def eject(self, interceptor_id: int) -> None:
        """Remove an interceptor by id. Unknown or already ejected ids are ignored."""
        if 0 <= interceptor_id < len(self._slots) and self._slots[interceptor_id] is not None:
            self._slots[interceptor_id] = None
            self._version += 1
            logger.debug(f"Ejected interceptor #{interceptor_id}")

    def clear(self) -> None:
        """Remove all interceptors."""
        if any(slot is not None for slot in self._slots):
            self._slots = [None] * len(self._slots)
            self._version += 1

    def snapshot(self) -> tuple[Interceptor, ...]:
        """Live interceptors in registration order."""
        return tuple(slot for slot in self._slots if slot is not None)

    def __iter__(self) -> Iterator[Interceptor]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return sum(1 for slot in self._slots if slot is not None)
