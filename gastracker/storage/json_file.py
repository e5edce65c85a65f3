from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, List

from gastracker.errors import StoreError
from gastracker.history.window import HistoryWindow
from gastracker.models.prices import Category, Sample
from gastracker.storage.base import Store

log = logging.getLogger("gastracker.storage")

# Older files kept one category for the whole history as an integer.
LEGACY_CATEGORIES = {0: Category.HIGH, 1: Category.AVERAGE, 2: Category.LOW}


def _parse_legacy(doc: dict) -> List[Sample]:
    """
    Legacy document:
      {"price_category": 0|1|2, "prices": [{"price": int, "timestamp": str}, ...]}

    Only the latest sample keeps price_category; the rest are AVERAGE.
    """
    raw_category = doc.get("price_category")
    if (
        isinstance(raw_category, bool)
        or not isinstance(raw_category, int)
        or raw_category not in LEGACY_CATEGORIES
    ):
        raise ValueError(f"unknown legacy price category {raw_category!r}")
    last_category = LEGACY_CATEGORIES[raw_category]

    rows = doc.get("prices") or []
    if not isinstance(rows, list):
        raise ValueError("legacy 'prices' must be a list")

    samples = [
        Sample.from_record({**row, "category": Category.AVERAGE.value})
        if isinstance(row, dict)
        else Sample.from_record(row)
        for row in rows
    ]
    if not samples:
        return samples

    latest_idx = max(range(len(samples)), key=lambda i: samples[i].ts)
    latest = samples[latest_idx]
    samples[latest_idx] = Sample(price=latest.price, ts=latest.ts, category=last_category)
    return samples


def parse_document(doc: Any) -> List[Sample]:
    """Decode a stored document (current or legacy layout) into samples."""
    if not isinstance(doc, dict):
        raise ValueError(f"expected a JSON object, got {type(doc).__name__}")

    if "price_category" in doc:
        return _parse_legacy(doc)

    rows = doc.get("prices")
    if not isinstance(rows, list):
        raise ValueError("'prices' must be a list")
    return [Sample.from_record(row) for row in rows]


class JsonFileStore(Store):
    """
    Whole-window JSON file:
      {"prices": [{"price": 31, "timestamp": "...", "category": "Average"}, ...]}

    A missing file means no history yet. Saves write a sibling temp file and
    rename it over the target so a failed write never truncates the history.
    """

    def __init__(self, path: Path, capacity: int) -> None:
        super().__init__(capacity)
        self.path = Path(path)

    def load(self) -> HistoryWindow:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            log.info("no gas price history at %s, starting empty", self.path)
            return HistoryWindow.empty(self.capacity)
        except OSError as e:
            raise StoreError(f"while reading {self.path}: {e}") from e

        try:
            # UnicodeDecodeError is a ValueError too.
            samples = parse_document(json.loads(raw.decode("utf-8")))
        except ValueError as e:
            raise StoreError(f"while decoding {self.path}: {e}") from e

        log.info("read %d gas price records from %s", len(samples), self.path)
        return HistoryWindow.from_samples(samples, self.capacity)

    def save(self, window: HistoryWindow) -> None:
        doc = {"prices": [s.to_record() for s in window.chronological()]}
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(doc, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            raise StoreError(f"while writing {self.path}: {e}") from e

        log.info("wrote %d gas price records to %s", len(window), self.path)
