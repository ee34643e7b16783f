"""
Cyclic sampling pools for criteria-based quiz generation.

Each criteria key owns a shuffled permutation of the matching question ids
and a read cursor. Successive draws walk the permutation, so every matching
question is served once before any of them repeats. When a draw reaches the
end of the permutation the cycle is complete: a fresh permutation replaces
the old one and the caller is told so it can surface "all questions used,
reshuffling" to the user.

Pools live in memory for the lifetime of the owning workspace and are never
persisted.
"""
from __future__ import annotations

import hashlib
import random
import threading
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Iterable, Literal, TypeVar

from loguru import logger

from quizbank.core.errors import EmptyPoolError

T = TypeVar("T")

Shuffle = Callable[[list], None]
RebuildPolicy = Literal["size", "content"]


def create_seed(seed: str | int) -> int:
    """Create a reproducible integer seed from string or int."""
    if isinstance(seed, int):
        return seed

    hash_bytes = hashlib.sha256(str(seed).encode()).digest()
    return int.from_bytes(hash_bytes[:8], byteorder="big")


def _fingerprint(ids: Iterable[str]) -> str:
    return hashlib.sha256("\n".join(sorted(ids)).encode()).hexdigest()


@dataclass
class _Pool:
    order: list[str]
    cursor: int = 0
    fingerprint: str | None = None


@dataclass(frozen=True)
class PoolSnapshot:
    """Read-only view of a pool's state."""
    key: Hashable
    order: tuple[str, ...]
    cursor: int

    @property
    def size(self) -> int:
        return len(self.order)

    @property
    def remaining(self) -> int:
        """Items left before the current cycle completes."""
        return self.size - self.cursor


@dataclass
class DrawResult(Generic[T]):
    """Items drawn from a pool and whether the draw completed a cycle."""
    items: list[T]
    cycle_complete: bool
    cursor: int
    pool_size: int

    @property
    def ids(self) -> list[str]:
        return [getattr(item, "id", item) for item in self.items]


class CyclicSamplingPool(Generic[T]):
    """
    Store of per-criteria question pools.

    Handles:
    - Building a shuffled pool the first time a criteria key is drawn from
    - Rebuilding when the matching corpus changes (size, or content if configured)
    - Non-repeating batches that wrap across cycle boundaries
    - Reshuffling once every matching item has been served

    Draws are serialized with a single lock so the read-then-advance step
    of one caller never interleaves with another's.
    """

    def __init__(
        self,
        shuffle: Shuffle | None = None,
        seed: str | int | None = None,
        rebuild_policy: RebuildPolicy = "size",
        id_of: Callable[[T], str] | None = None,
    ):
        """
        Initialize the pool store.

        Args:
            shuffle: In-place shuffle for id lists (defaults to a seeded random.Random)
            seed: Seed for the default shuffle (ignored when shuffle is given)
            rebuild_policy: "size" rebuilds when the corpus size changes,
                "content" also rebuilds on same-size membership changes
            id_of: Extracts an item's identifier (defaults to item.id)
        """
        if rebuild_policy not in ("size", "content"):
            raise ValueError(f"Unknown rebuild policy: {rebuild_policy}")

        if shuffle is None:
            rng = random.Random(create_seed(seed) if seed is not None else None)
            shuffle = rng.shuffle

        self._shuffle = shuffle
        self._id_of = id_of or (lambda item: item.id)
        self.rebuild_policy = rebuild_policy
        self._pools: dict[Hashable, _Pool] = {}
        self._lock = threading.Lock()

    # ========================================
    # Drawing
    # ========================================

    def draw(
        self,
        criteria_key: Hashable,
        matching_items: Iterable[T],
        count: int,
    ) -> DrawResult[T]:
        """
        Draw the next batch of items for a criteria key.

        Args:
            criteria_key: Canonical key of the caller's filter
            matching_items: Every item currently matching the filter
            count: Requested batch size (capped at the pool size)

        Returns:
            DrawResult with items in draw order

        Raises:
            EmptyPoolError: If nothing matches
            ValueError: If count is below 1
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        by_id: dict[str, T] = {}
        for item in matching_items:
            by_id.setdefault(self._id_of(item), item)

        if not by_id:
            raise EmptyPoolError(str(criteria_key))

        ids = list(by_id)

        with self._lock:
            pool = self._pools.get(criteria_key)
            if self._needs_rebuild(pool, ids):
                pool = self._build(ids)
                self._pools[criteria_key] = pool
                logger.debug("Built pool of {} for {}", len(ids), criteria_key)

            length = len(pool.order)
            n = min(count, length)
            start = pool.cursor
            end = start + n

            drawn = pool.order[start:min(end, length)]
            cycle_complete = end >= length

            if cycle_complete:
                remainder = end - length
                pool = self._next_cycle(ids, drawn, remainder)
                self._pools[criteria_key] = pool
                drawn.extend(pool.order[:remainder])
                logger.debug("Pool for {} completed a cycle of {}", criteria_key, length)
            else:
                pool.cursor = end

            cursor = pool.cursor

        items = [by_id[item_id] for item_id in drawn if item_id in by_id]
        if len(items) < len(drawn):
            logger.debug(
                "Skipped {} pooled ids no longer matching {}",
                len(drawn) - len(items),
                criteria_key,
            )

        return DrawResult(
            items=items,
            cycle_complete=cycle_complete,
            cursor=cursor,
            pool_size=length,
        )

    def _needs_rebuild(self, pool: _Pool | None, ids: list[str]) -> bool:
        if pool is None or len(pool.order) != len(ids):
            return True
        if self.rebuild_policy == "content":
            return pool.fingerprint != _fingerprint(ids)
        return False

    def _build(self, ids: list[str]) -> _Pool:
        order = list(ids)
        self._shuffle(order)
        fingerprint = _fingerprint(ids) if self.rebuild_policy == "content" else None
        return _Pool(order=order, cursor=0, fingerprint=fingerprint)

    def _next_cycle(self, ids: list[str], drawn: list[str], remainder: int) -> _Pool:
        """
        Shuffle a new cycle whose first `remainder` ids are served immediately.

        Those leading ids are chosen from outside `drawn` so a batch that
        straddles two cycles never repeats an id.
        """
        pool = self._build(ids)
        if remainder == 0:
            return pool

        taken = set(drawn)
        head = [i for i in pool.order if i not in taken][:remainder]
        head_ids = set(head)
        pool.order = head + [i for i in pool.order if i not in head_ids]
        pool.cursor = remainder
        return pool

    # ========================================
    # Inspection & Lifecycle
    # ========================================

    def peek(self, criteria_key: Hashable) -> PoolSnapshot | None:
        """Get a snapshot of a pool without drawing from it."""
        with self._lock:
            pool = self._pools.get(criteria_key)
            if pool is None:
                return None
            return PoolSnapshot(key=criteria_key, order=tuple(pool.order), cursor=pool.cursor)

    def snapshots(self) -> list[PoolSnapshot]:
        """Snapshots of every pool in the store."""
        with self._lock:
            return [
                PoolSnapshot(key=key, order=tuple(pool.order), cursor=pool.cursor)
                for key, pool in self._pools.items()
            ]

    def reset(self, criteria_key: Hashable | None = None) -> int:
        """
        Discard one pool, or every pool when no key is given.

        Returns:
            Number of pools removed
        """
        with self._lock:
            if criteria_key is None:
                removed = len(self._pools)
                self._pools.clear()
            else:
                removed = 1 if self._pools.pop(criteria_key, None) is not None else 0

        if removed:
            logger.debug("Reset {} pool(s)", removed)
        return removed

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, criteria_key: object) -> bool:
        return criteria_key in self._pools
