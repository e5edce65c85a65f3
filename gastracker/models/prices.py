from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


class Category(str, Enum):
    """
    Price band of one observation relative to the rolling history.

    AVERAGE is the neutral resting state. The value is the label used when
    samples are persisted.
    """

    HIGH = "High"
    AVERAGE = "Average"
    LOW = "Low"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: Any) -> "Category":
        """Strict label lookup; anything unmapped is an error, never a default."""
        try:
            return cls(label)
        except ValueError:
            raise ValueError(f"unknown price category {label!r}") from None


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def parse_timestamp(raw: Any) -> datetime:
    """Parse a persisted ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(raw, str):
        raise ValueError(f"timestamp must be an ISO-8601 string, got {raw!r}")
    # Python < 3.11 does not accept a trailing "Z".
    return _as_utc(datetime.fromisoformat(raw.strip().replace("Z", "+00:00")))


@dataclass(frozen=True)
class Sample:
    """
    Sample = one observed gas price.

    price: medium (proposed) gas price, a positive integer
    ts: when the price was observed (timezone-aware; naive means UTC)
    category: band assigned to the price when it was observed
    """
    price: int
    ts: datetime
    category: Category

    def __post_init__(self) -> None:
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise ValueError(f"price must be an integer, got {self.price!r}")
        if self.price <= 0:
            raise ValueError(f"price must be positive, got {self.price}")
        if not isinstance(self.ts, datetime):
            raise ValueError(f"timestamp must be a datetime, got {self.ts!r}")
        if not isinstance(self.category, Category):
            raise ValueError(f"category must be a Category, got {self.category!r}")
        object.__setattr__(self, "ts", _as_utc(self.ts))

    def to_record(self) -> Dict[str, Any]:
        return {
            "price": self.price,
            "timestamp": self.ts.isoformat(),
            "category": self.category.value,
        }

    @classmethod
    def from_record(cls, record: Any) -> "Sample":
        """
        Build a Sample from a persisted record:
          {"price": int, "timestamp": ISO-8601 str, "category": "High"|"Average"|"Low"}

        Raises ValueError on any missing or malformed field.
        """
        if not isinstance(record, dict):
            raise ValueError(f"sample record must be an object, got {type(record).__name__}")

        missing = [k for k in ("price", "timestamp", "category") if k not in record]
        if missing:
            raise ValueError(f"sample record missing field(s): {', '.join(missing)}")

        ts = parse_timestamp(record["timestamp"])

        return cls(
            price=record["price"],
            ts=ts,
            category=Category.from_label(record["category"]),
        )


@dataclass(frozen=True)
class PriceStatistics:
    """Mean and sample standard deviation over a window snapshot."""
    mean: float
    stddev: float
    count: int
