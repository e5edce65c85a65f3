from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterator

from botocore.exceptions import BotoCoreError, ClientError

from gastracker.errors import StoreError
from gastracker.history.window import HistoryWindow
from gastracker.models.prices import Sample, parse_timestamp
from gastracker.storage.base import Store

log = logging.getLogger("gastracker.storage")

DEFAULT_TABLE_NAME = "gasPrices"

# "timestamp" is a DynamoDB reserved word.
_KEY_NAMES = {"#ts": "timestamp"}


def to_item(sample: Sample) -> Dict[str, Dict[str, str]]:
    return {
        "price": {"N": str(sample.price)},
        "timestamp": {"S": sample.ts.isoformat()},
        "category": {"S": sample.category.value},
    }


def from_item(item: Dict[str, Any]) -> Sample:
    """Decode one table item; raises ValueError on anything malformed."""
    try:
        record = {
            "price": int(item["price"]["N"]),
            "timestamp": item["timestamp"]["S"],
            "category": item["category"]["S"],
        }
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed gas price item {item!r}") from e
    return Sample.from_record(record)


class DynamoDBStore(Store):
    """
    One table item per sample, keyed by the "timestamp" string attribute:
      {"timestamp": S, "price": N, "category": S}

    An empty table means no history yet. save() makes the table match the
    window: missing samples are put first, then items no longer in the window
    (normally the single evicted sample) are deleted. A failure part-way
    leaves extra items, which the next load trims, never a gap.
    """

    def __init__(self, client, capacity: int, table_name: str = DEFAULT_TABLE_NAME) -> None:
        super().__init__(capacity)
        self.client = client
        self.table_name = table_name

    def _scan(self, **kwargs: Any) -> Iterator[Dict[str, Any]]:
        params: Dict[str, Any] = {"TableName": self.table_name, **kwargs}
        while True:
            result = self.client.scan(**params)
            yield from result.get("Items", [])

            last_key = result.get("LastEvaluatedKey")
            if not last_key:
                return
            params["ExclusiveStartKey"] = last_key

    def load(self) -> HistoryWindow:
        try:
            items = list(self._scan())
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"while scanning table {self.table_name}: {e}") from e

        try:
            samples = [from_item(item) for item in items]
        except ValueError as e:
            raise StoreError(f"while decoding table {self.table_name}: {e}") from e

        log.info("read %d gas price records from table %s", len(samples), self.table_name)
        return HistoryWindow.from_samples(samples, self.capacity)

    def _stored_keys(self) -> Dict[datetime, str]:
        """Parsed timestamp -> key string exactly as stored."""
        keys: Dict[datetime, str] = {}
        for item in self._scan(ProjectionExpression="#ts", ExpressionAttributeNames=_KEY_NAMES):
            raw = item["timestamp"]["S"]
            keys[parse_timestamp(raw)] = raw
        return keys

    def save(self, window: HistoryWindow) -> None:
        wanted = {s.ts: s for s in window.chronological()}

        try:
            stored = self._stored_keys()

            for ts, sample in wanted.items():
                if ts not in stored:
                    self.client.put_item(TableName=self.table_name, Item=to_item(sample))

            for ts in sorted(stored.keys() - wanted.keys()):
                self.client.delete_item(
                    TableName=self.table_name,
                    Key={"timestamp": {"S": stored[ts]}},
                )
                log.info("deleted gas price with timestamp %s", stored[ts])
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"while writing table {self.table_name}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"malformed key in table {self.table_name}: {e!r}") from e

        log.info("wrote %d gas price records to table %s", len(window), self.table_name)
