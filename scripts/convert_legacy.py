import argparse
import sys
from pathlib import Path

from gastracker.config import DEFAULT_HISTORY_CAPACITY
from gastracker.errors import ConfigurationError, StoreError
from gastracker.storage.dynamodb import DynamoDBStore
from gastracker.storage.json_file import JsonFileStore
from gastracker.storage.loader import dynamodb_client


def main() -> int:
    """
    Rewrite a gas price history file in the per-sample record layout, or
    upload it into a DynamoDB table.

    Old files hold {"price_category": 0|1|2, "prices": [{price, timestamp}]};
    the latest sample gets that category, every other sample Average.
    """
    parser = argparse.ArgumentParser()
    parser.add_argument("path", help="History file to convert, e.g. ~/.gas_prices.json")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--out", default="", help="Write here instead of overwriting the input")
    target.add_argument("--dynamodb-table", default="", help="Upload into this DynamoDB table")
    parser.add_argument("--region", default=None, help="AWS region for --dynamodb-table")
    parser.add_argument("--capacity", type=int, default=DEFAULT_HISTORY_CAPACITY)
    args = parser.parse_args()

    src = JsonFileStore(Path(args.path).expanduser(), args.capacity)

    try:
        if args.dynamodb_table:
            dst = DynamoDBStore(
                dynamodb_client(args.region), args.capacity, table_name=args.dynamodb_table
            )
            target_name = f"table {args.dynamodb_table}"
        else:
            dst = JsonFileStore(Path(args.out).expanduser(), args.capacity) if args.out else src
            target_name = str(dst.path)

        window = src.load()
        dst.save(window)
    except (ConfigurationError, StoreError) as e:
        print(f"conversion failed: {e}", file=sys.stderr)
        return 1

    latest = window.most_recent()
    print(f"wrote {len(window)} samples to {target_name}")
    if latest is not None:
        print(f"current band: {latest.category} (price {latest.price} at {latest.ts.isoformat()})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
