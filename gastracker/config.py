# gastracker/config.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from gastracker.errors import ConfigurationError

# Loads variables from a local .env file into environment variables (dev only).
load_dotenv()

DEFAULT_HISTORY_CAPACITY = 7 * 24  # 7 days of data, assuming one cycle per hour.


@dataclass(frozen=True)
class Settings:
    # App config
    app_env: str
    log_level: str
    store: str
    notifier: str
    history_capacity: int
    cycle_interval_seconds: int

    # Price source (Etherscan gas oracle)
    etherscan_api_key: str
    etherscan_base_url: str
    etherscan_timeout_seconds: float

    # File store
    gas_prices_path: Path

    # DynamoDB store
    dynamodb_table: str
    aws_region: Optional[str]

    # Email notifier
    notifier_from: Optional[str]
    notifier_to: Optional[str]
    notifier_password: Optional[str]
    smtp_host: str
    smtp_port: int


def _positive_int(name: str, default: str) -> int:
    raw = os.getenv(name, default).strip()
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _positive_float(name: str, default: str) -> float:
    raw = os.getenv(name, default).strip()
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def get_settings() -> Settings:
    """
    Reads env vars and returns a Settings object.

    Raises ConfigurationError when anything required is missing, so callers
    fail before touching the network, disk or mail relay.
    """
    api_key = os.getenv("ETHERSCAN_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("ETHERSCAN_API_KEY is not set")

    notifier = os.getenv("NOTIFIER", "EMAIL").strip().upper()
    notifier_from = _optional("GAS_NOTIFIER_FROM")
    notifier_to = _optional("GAS_NOTIFIER_TO")
    notifier_password = _optional("GAS_NOTIFIER_PASSWORD")

    raw_path = os.getenv("GAS_PRICES_PATH", "").strip()
    prices_path = Path(raw_path).expanduser() if raw_path else Path.home() / ".gas_prices.json"

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        store=os.getenv("STORE", "FILE").strip().upper(),
        notifier=notifier,
        history_capacity=_positive_int("HISTORY_CAPACITY", str(DEFAULT_HISTORY_CAPACITY)),
        cycle_interval_seconds=_positive_int("CYCLE_INTERVAL_SECONDS", "3600"),
        etherscan_api_key=api_key,
        etherscan_base_url=os.getenv("ETHERSCAN_BASE_URL", "https://api.etherscan.io/api").rstrip("/"),
        etherscan_timeout_seconds=_positive_float("ETHERSCAN_TIMEOUT_SECONDS", "20"),
        gas_prices_path=prices_path,
        dynamodb_table=os.getenv("DYNAMODB_TABLE", "gasPrices").strip() or "gasPrices",
        aws_region=_optional("AWS_REGION") or _optional("AWS_DEFAULT_REGION"),
        notifier_from=notifier_from,
        notifier_to=notifier_to,
        notifier_password=notifier_password,
        smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
        smtp_port=_positive_int("SMTP_PORT", "587"),
    )
