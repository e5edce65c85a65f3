from __future__ import annotations

from typing import Any, Dict, List, Optional

from gastracker.errors import StoreError
from gastracker.history.window import HistoryWindow
from gastracker.models.prices import Sample
from gastracker.storage.base import Store


class MemoryStore(Store):
    """
    In-process store.

    Keeps serialized records rather than Sample objects so every cycle
    round-trips through the same record contract as the file store.
    """

    def __init__(self, capacity: int, records: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(capacity)
        self.records: Optional[List[Dict[str, Any]]] = records

    def load(self) -> HistoryWindow:
        if self.records is None:
            return HistoryWindow.empty(self.capacity)
        try:
            samples = [Sample.from_record(r) for r in self.records]
        except ValueError as e:
            raise StoreError(f"while decoding in-memory history: {e}") from e
        return HistoryWindow.from_samples(samples, self.capacity)

    def save(self, window: HistoryWindow) -> None:
        self.records = [s.to_record() for s in window.chronological()]
