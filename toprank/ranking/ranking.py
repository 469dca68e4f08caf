"""Bounded ranking that keeps only the top-N elements.

Elements are held in rank order, top first. Inserting into a full ranking
evicts the bottom element, which may be the newcomer itself. Every element
that leaves the ranking (eviction, removal, clear) goes through the
disposal policy exactly once.
"""

from bisect import bisect_left, bisect_right
from collections.abc import Callable, Iterator
from functools import cmp_to_key
from typing import Any, Generic, TypeVar, overload

from toprank.observability.logging import get_logger
from toprank.ranking.disposal import DisposalPolicy, null_disposal
from toprank.ranking.errors import DisposalError, EmptyRankingError, RankingClosedError
from toprank.ranking.metrics import RankingMetrics
from toprank.ranking.models import RankingConfig, SameValueBehavior


logger = get_logger()

T = TypeVar("T")


def _identity(element: Any) -> Any:
    return element


def _key_from_less(less: Callable[[Any, Any], bool]) -> Callable[[Any], Any]:
    """Turn a strict-weak-order predicate into a sort key factory."""

    def compare(one: Any, other: Any) -> int:
        if less(one, other):
            return -1
        if less(other, one):
            return 1
        return 0

    return cmp_to_key(compare)


class Ranking(Generic[T]):
    """Ordered container retaining at most ``capacity`` elements.

    Ordering is given either by ``less`` (a strict "ranks higher than"
    predicate, natural ``<`` by default) or by ``key``. Equal-ranked
    elements are placed according to ``behavior``. Ordering, behavior and
    disposal are fixed for the lifetime of the instance.

    Not thread-safe; guard all calls with one external lock if shared.
    """

    def __init__(
        self,
        capacity: int,
        *,
        less: Callable[[T, T], bool] | None = None,
        key: Callable[[T], Any] | None = None,
        behavior: SameValueBehavior = SameValueBehavior.ADD_AFTER_EQUAL,
        disposal: DisposalPolicy = null_disposal,
        metrics: RankingMetrics | None = None,
    ) -> None:
        """Initialize an empty ranking.

        Args:
            capacity: Maximum number of retained elements (0 is allowed).
            less: Predicate returning True when the first argument ranks
                above the second.
            key: Alternative to ``less``; elements rank by ``key(element)``.
            behavior: Placement among equal-ranked elements.
            disposal: Called once on every element that leaves the ranking.
            metrics: Optional metrics instance.

        Raises:
            ValueError: If capacity is negative or both orderings are given.
        """
        if capacity < 0:
            msg = f"capacity must be >= 0, got {capacity}"
            raise ValueError(msg)
        if less is not None and key is not None:
            msg = "pass either less or key, not both"
            raise ValueError(msg)

        self._capacity = capacity
        self._behavior = SameValueBehavior(behavior)
        self._disposal = disposal
        if less is not None:
            self._sort_key = _key_from_less(less)
        elif key is not None:
            self._sort_key = key
        else:
            self._sort_key = _identity

        # Parallel lists: _keys[i] is the cached sort key of _items[i].
        self._items: list[T] = []
        self._keys: list[Any] = []
        self._version = 0
        self._closed = False

        self._metrics = metrics or RankingMetrics.get_instance()
        self._log = logger.bind(
            component="ranking",
            capacity=capacity,
        )

    @classmethod
    def from_config(
        cls,
        config: RankingConfig,
        *,
        less: Callable[[T, T], bool] | None = None,
        key: Callable[[T], Any] | None = None,
        disposal: DisposalPolicy = null_disposal,
        metrics: RankingMetrics | None = None,
    ) -> "Ranking[T]":
        """Create a ranking from a validated configuration.

        Args:
            config: Capacity and tie-break behavior.
            less: Ordering predicate.
            key: Ordering key.
            disposal: Disposal policy.
            metrics: Optional metrics instance.

        Returns:
            Empty ranking.
        """
        return cls(
            config.capacity,
            less=less,
            key=key,
            behavior=config.behavior,
            disposal=disposal,
            metrics=metrics,
        )

    @property
    def capacity(self) -> int:
        """Get the maximum number of retained elements."""
        return self._capacity

    @property
    def behavior(self) -> SameValueBehavior:
        """Get the tie-break behavior."""
        return self._behavior

    @property
    def disposal(self) -> DisposalPolicy:
        """Get the disposal policy."""
        return self._disposal

    @property
    def closed(self) -> bool:
        """Check if the ranking has been closed."""
        return self._closed

    @property
    def is_full(self) -> bool:
        """Check if the next insert will evict an element."""
        return len(self._items) >= self._capacity

    def insert(self, element: T) -> bool:
        """Insert an element at its rank position.

        If the ranking overflows, the bottom element is evicted and
        disposed.

        Args:
            element: Element to insert.

        Returns:
            True if the element is retained, False if it was the one evicted.

        Raises:
            RankingClosedError: If the ranking has been closed.
            DisposalError: If disposing the evicted element failed. The
                ranking is already in its final state when this is raised.
        """
        if self._closed:
            raise RankingClosedError

        sort_key = self._sort_key(element)
        if self._behavior == SameValueBehavior.ADD_BEFORE_EQUAL:
            index = bisect_left(self._keys, sort_key)
        else:
            index = bisect_right(self._keys, sort_key)

        self._items.insert(index, element)
        self._keys.insert(index, sort_key)
        self._version += 1

        if len(self._items) <= self._capacity:
            self._metrics.record_insert(survived=True)
            return True

        survived = index < len(self._items) - 1
        evicted = self._items.pop()
        self._keys.pop()

        self._metrics.record_insert(survived=survived)
        self._metrics.record_eviction()
        if survived:
            self._log.debug("ranking_evicted", position=index, size=len(self._items))
        else:
            self._log.debug("ranking_rejected", size=len(self._items))

        self._dispose_one(evicted)
        return survived

    def remove_first(self, element: T) -> bool:
        """Remove the first element equal to ``element``.

        Args:
            element: Value to match with ``==``.

        Returns:
            True if an element was removed, False if none matched.

        Raises:
            DisposalError: If disposing the removed element failed.
        """
        return self._remove(lambda item: item == element, first_only=True) == 1

    def remove_all(self, element: T) -> int:
        """Remove every element equal to ``element``.

        Args:
            element: Value to match with ``==``.

        Returns:
            Number of elements removed.

        Raises:
            DisposalError: If disposing any removed element failed.
        """
        return self._remove(lambda item: item == element, first_only=False)

    def remove_first_identical(self, element: T) -> bool:
        """Remove the first occurrence of this exact object.

        Use for owning handles whose ``==`` does not mean "same resource".

        Args:
            element: Object to match by identity.

        Returns:
            True if the object was held and removed.

        Raises:
            DisposalError: If disposing the removed element failed.
        """
        return self._remove(lambda item: item is element, first_only=True) == 1

    def remove_all_identical(self, element: T) -> int:
        """Remove every occurrence of this exact object.

        The object is disposed once, however many occurrences are removed.

        Args:
            element: Object to match by identity.

        Returns:
            Number of occurrences removed.

        Raises:
            DisposalError: If disposing any removed element failed.
        """
        return self._remove(lambda item: item is element, first_only=False)

    def clear(self) -> None:
        """Dispose every element and empty the ranking.

        All elements are disposed even if some disposals fail. An instance
        held more than once is disposed once.

        Raises:
            DisposalError: With every failure, after the ranking is empty.
        """
        detached = self._items
        self._items = []
        self._keys = []
        if detached:
            self._version += 1

        self._log.debug("ranking_cleared", count=len(detached))
        self._dispose_many(detached)

    def close(self) -> None:
        """Clear the ranking and refuse further inserts. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self.clear()

    def __enter__(self) -> "Ranking[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def empty(self) -> bool:
        """Check if the ranking holds no elements."""
        return not self._items

    def size(self) -> int:
        """Get the number of retained elements."""
        return len(self._items)

    def top(self) -> T:
        """Get the highest-ranked element.

        Raises:
            EmptyRankingError: If the ranking is empty.
        """
        if not self._items:
            raise EmptyRankingError("top")
        return self._items[0]

    def bottom(self) -> T:
        """Get the lowest-ranked retained element.

        Raises:
            EmptyRankingError: If the ranking is empty.
        """
        if not self._items:
            raise EmptyRankingError("bottom")
        return self._items[-1]

    def to_list(self) -> list[T]:
        """Snapshot the elements in rank order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, element: object) -> bool:
        return element in self._items

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return self._iterate(self._version)

    def __repr__(self) -> str:
        return (
            f"Ranking(capacity={self._capacity}, "
            f"behavior={self._behavior.value}, elements={self._items!r})"
        )

    def _iterate(self, version: int) -> Iterator[T]:
        index = 0
        while index < len(self._items):
            if self._version != version:
                break
            yield self._items[index]
            index += 1
        if self._version != version:
            msg = "ranking mutated during iteration"
            raise RuntimeError(msg)

    def _remove(self, matches: Callable[[T], bool], first_only: bool) -> int:
        kept_items: list[T] = []
        kept_keys: list[Any] = []
        removed: list[T] = []

        for position, item in enumerate(self._items):
            if not matches(item):
                kept_items.append(item)
                kept_keys.append(self._keys[position])
                continue
            removed.append(item)
            if first_only:
                kept_items.extend(self._items[position + 1 :])
                kept_keys.extend(self._keys[position + 1 :])
                break

        if not removed:
            return 0

        self._items = kept_items
        self._keys = kept_keys
        self._version += 1
        self._metrics.record_removal(len(removed))
        self._log.debug("ranking_removed", count=len(removed), size=len(self._items))

        self._dispose_many(removed)
        return len(removed)

    def _dispose_one(self, element: T) -> None:
        try:
            self._disposal(element)
        except Exception as e:
            self._metrics.record_disposal(ok=False)
            self._log.error("ranking_disposal_failed", error=repr(e))
            raise DisposalError([(element, e)]) from e
        self._metrics.record_disposal(ok=True)

    def _dispose_many(self, elements: list[T]) -> None:
        # One call per instance: a handle held twice is released once.
        failures: list[tuple[Any, Exception]] = []
        seen: set[int] = set()
        for element in elements:
            if id(element) in seen:
                continue
            seen.add(id(element))
            try:
                self._disposal(element)
            except Exception as e:
                self._metrics.record_disposal(ok=False)
                self._log.error("ranking_disposal_failed", error=repr(e))
                failures.append((element, e))
            else:
                self._metrics.record_disposal(ok=True)

        if failures:
            raise DisposalError(failures) from failures[0][1]
