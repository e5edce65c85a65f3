from __future__ import annotations

import boto3
from botocore.exceptions import BotoCoreError

from gastracker.config import Settings
from gastracker.errors import ConfigurationError
from gastracker.storage.base import Store
from gastracker.storage.dynamodb import DynamoDBStore
from gastracker.storage.json_file import JsonFileStore
from gastracker.storage.memory import MemoryStore

# One in-memory store per process, so STORE=MEMORY keeps history across cycles.
_memory_store: MemoryStore | None = None


def dynamodb_client(region: str | None = None):
    """
    DynamoDB client from the shared AWS config (~/.aws/config, env vars).

    Creating the client does no network I/O; a missing region is a
    configuration error.
    """
    try:
        return boto3.client("dynamodb", region_name=region)
    except BotoCoreError as e:
        raise ConfigurationError(f"while creating DynamoDB client: {e}") from e


def get_store(settings: Settings) -> Store:
    """
    Store factory.

    Reads STORE from config and returns the selected backend.
    """
    global _memory_store

    name = settings.store.strip().upper()

    if name == "FILE":
        return JsonFileStore(settings.gas_prices_path, settings.history_capacity)

    if name == "MEMORY":
        if _memory_store is None or _memory_store.capacity != settings.history_capacity:
            _memory_store = MemoryStore(settings.history_capacity)
        return _memory_store

    if name == "DYNAMODB":
        return DynamoDBStore(
            dynamodb_client(settings.aws_region),
            settings.history_capacity,
            table_name=settings.dynamodb_table,
        )

    raise ConfigurationError(
        f"Unknown STORE='{settings.store}'. Expected: FILE, MEMORY or DYNAMODB"
    )
