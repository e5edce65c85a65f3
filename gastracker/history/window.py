from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from gastracker.config import DEFAULT_HISTORY_CAPACITY
from gastracker.models.prices import Sample

log = logging.getLogger("gastracker.history")


@dataclass(frozen=True)
class HistoryWindow:
    """
    Bounded set of past samples used as the statistical baseline.

    The window is a value: append() returns a new window instead of
    mutating this one. Stored order carries no meaning; every time-based
    query scans by timestamp. On timestamp ties the first sample in stored
    order wins (same rule as the built-in min/max).
    """
    samples: Tuple[Sample, ...] = ()
    capacity: int = DEFAULT_HISTORY_CAPACITY

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {self.capacity}")
        if len(self.samples) > self.capacity:
            raise ValueError(
                f"window holds {len(self.samples)} samples, capacity is {self.capacity}"
            )
        object.__setattr__(self, "samples", tuple(self.samples))

    @classmethod
    def empty(cls, capacity: int = DEFAULT_HISTORY_CAPACITY) -> "HistoryWindow":
        return cls((), capacity)

    @classmethod
    def from_samples(
        cls, samples: Iterable[Sample], capacity: int = DEFAULT_HISTORY_CAPACITY
    ) -> "HistoryWindow":
        """
        Build a window from loaded samples.

        If more than `capacity` samples were persisted (e.g. the capacity was
        lowered), only the most recent `capacity` are kept.
        """
        loaded = list(samples)
        if len(loaded) <= capacity:
            return cls(tuple(loaded), capacity)

        # Stable sort keeps stored order among equal timestamps.
        ordered = sorted(loaded, key=lambda s: s.ts)
        dropped = len(ordered) - capacity
        log.warning(
            "loaded %d samples, capacity is %d: dropping the %d oldest",
            len(loaded),
            capacity,
            dropped,
        )
        return cls(tuple(ordered[dropped:]), capacity)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def is_empty(self) -> bool:
        return not self.samples

    def prices(self) -> List[int]:
        return [s.price for s in self.samples]

    def most_recent(self) -> Optional[Sample]:
        """Sample with the greatest timestamp, or None when empty."""
        if not self.samples:
            return None
        return max(self.samples, key=lambda s: s.ts)

    def oldest(self) -> Optional[Sample]:
        """Sample with the smallest timestamp, or None when empty."""
        if not self.samples:
            return None
        return min(self.samples, key=lambda s: s.ts)

    def chronological(self) -> List[Sample]:
        return sorted(self.samples, key=lambda s: s.ts)

    def append(self, sample: Sample) -> Tuple["HistoryWindow", Optional[Sample]]:
        """
        Add one sample.

        Returns (new_window, evicted). When the new size would exceed the
        capacity exactly one sample, the oldest by timestamp, is evicted;
        otherwise evicted is None.
        """
        grown = self.samples + (sample,)
        if len(grown) <= self.capacity:
            return HistoryWindow(grown, self.capacity), None

        idx = min(range(len(grown)), key=lambda i: grown[i].ts)
        evicted = grown[idx]
        kept = grown[:idx] + grown[idx + 1:]
        return HistoryWindow(kept, self.capacity), evicted
