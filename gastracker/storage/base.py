from __future__ import annotations

from abc import ABC, abstractmethod

from gastracker.history.window import HistoryWindow


class Store(ABC):
    """
    History store contract (interface).

    - load(): the persisted window, or an empty one when nothing was saved
      yet; StoreError on any other failure
    - save(): replace the persisted window; StoreError on failure
    """

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity

    @abstractmethod
    def load(self) -> HistoryWindow:
        raise NotImplementedError

    @abstractmethod
    def save(self, window: HistoryWindow) -> None:
        raise NotImplementedError
