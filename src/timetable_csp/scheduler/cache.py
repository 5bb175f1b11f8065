"""Memo table for availability queries."""

from collections import defaultdict

# (day, slot, faculty, batch, room, consecutive, lab)
CacheKey = tuple[int, int, int, int, int, bool, bool]


class FeasibilityCache:
    """Maps an availability query to its last computed answer.

    In selective mode the cache keeps two reverse indexes so a mutation
    can drop exactly the entries whose answer may change:

    - every key at the mutated (day, slot), for any faculty, batch or room
    - when a batch's lab-per-day flag toggles, every consecutive lab key
      for that batch on that day

    With ``selective=False`` every mutation clears the whole table.
    """

    def __init__(self, selective: bool = True) -> None:
        self.selective = selective
        self._entries: dict[CacheKey, bool] = {}
        # (day, slot) -> keys cached at that cell
        self._by_cell: dict[tuple[int, int], set[CacheKey]] = defaultdict(set)
        # (batch, day) -> consecutive lab keys for that batch
        self._lab_keys: dict[tuple[int, int], set[CacheKey]] = defaultdict(set)
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get(self, key: CacheKey) -> bool | None:
        """Return the cached answer, or None on a miss."""
        value = self._entries.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, key: CacheKey, value: bool) -> None:
        """Store an answer."""
        self._entries[key] = value
        if not self.selective:
            return
        day, slot, _faculty, batch, _room, consecutive, lab = key
        self._by_cell[(day, slot)].add(key)
        if consecutive and lab and batch >= 0:
            self._lab_keys[(batch, day)].add(key)

    def invalidate(self, day: int, slot: int, batch: int, lab_changed: bool = False) -> None:
        """Drop entries affected by a mutation at (day, slot).

        Args:
            day: Day of the mutated cell
            slot: Slot of the mutated cell
            batch: Batch of the mutated session (or the all-batches sentinel)
            lab_changed: True if the batch's lab-per-day flag toggled
        """
        if not self.selective:
            self.clear()
            return

        for key in self._by_cell.pop((day, slot), ()):
            self._discard(key)

        if lab_changed and batch >= 0:
            for key in self._lab_keys.pop((batch, day), ()):
                self._discard(key)

    def _discard(self, key: CacheKey) -> None:
        if self._entries.pop(key, None) is None:
            return
        day, slot, _faculty, batch, _room, consecutive, lab = key
        self._by_cell[(day, slot)].discard(key)
        if consecutive and lab and batch >= 0:
            self._lab_keys[(batch, day)].discard(key)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        self._by_cell.clear()
        self._lab_keys.clear()

    def reset_counters(self) -> None:
        self.hits = 0
        self.misses = 0
