from __future__ import annotations

from abc import ABC, abstractmethod


class PriceSource(ABC):
    """
    Price source contract (interface).

    Any source must implement:
    - fetch_current_price(): the current medium gas price as a positive int,
      raising FetchError on any network, status or payload problem
    """

    @abstractmethod
    def fetch_current_price(self) -> int:
        raise NotImplementedError

    def close(self) -> None:
        """Release any held connections. No-op by default."""
