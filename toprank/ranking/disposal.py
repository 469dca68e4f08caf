"""Disposal policies applied to elements leaving a ranking.

A policy is any callable taking the departing element. The ranking calls
it exactly once per element, after the element has been detached.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DisposalPolicy(Protocol):
    """Protocol for disposal policies."""

    def __call__(self, element: Any) -> None:
        """Release whatever the departing element owns.

        Args:
            element: Element that just left the ranking.
        """
        ...


def null_disposal(element: Any) -> None:
    """Default policy: the caller keeps responsibility for cleanup."""


class CloseDisposal:
    """Releases owned resources by calling ``close()`` on each element.

    Elements without a ``close`` attribute are rejected unless
    ``ignore_missing`` is set.
    """

    def __init__(self, ignore_missing: bool = False) -> None:
        """Initialize the policy.

        Args:
            ignore_missing: Skip elements that have no ``close`` method.
        """
        self._ignore_missing = ignore_missing

    def __call__(self, element: Any) -> None:
        close = getattr(element, "close", None)
        if close is None:
            if self._ignore_missing:
                return
            msg = f"{type(element).__name__} has no close() method"
            raise TypeError(msg)
        close()

    def __repr__(self) -> str:
        return f"CloseDisposal(ignore_missing={self._ignore_missing})"


class CallbackDisposal:
    """Adapts a plain callback, e.g. deregistering an element from an index."""

    def __init__(self, callback: Callable[[Any], object]) -> None:
        self._callback = callback

    def __call__(self, element: Any) -> None:
        self._callback(element)

    def __repr__(self) -> str:
        name = getattr(self._callback, "__qualname__", repr(self._callback))
        return f"CallbackDisposal({name})"
