from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class CycleReport(BaseModel):
    """
    Outcome of one tracker cycle.

    bootstrap:
      True when no history existed before this cycle (no statistics,
      sample recorded as Average, nothing to compare against)

    previous_category:
      category of the most recent sample before this cycle (None on bootstrap)

    notified / notify_error:
      whether a category-change notification went out, and why it failed

    evicted_timestamp:
      ISO timestamp of the sample dropped to keep the window within capacity

    audit:
      short explanation strings for each decision taken during the cycle
    """

    price: int
    timestamp: str
    category: str
    previous_category: Optional[str] = None
    bootstrap: bool = False
    mean: Optional[float] = None
    stddev: Optional[float] = None
    notified: bool = False
    notify_error: Optional[str] = None
    evicted_timestamp: Optional[str] = None
    window_size: int = 0
    audit: List[str] = []
