from __future__ import annotations

import logging
from typing import Optional

import httpx

from gastracker.errors import FetchError
from gastracker.providers.base import PriceSource

log = logging.getLogger("etherscan_provider")

DEFAULT_BASE_URL = "https://api.etherscan.io/api"


class EtherscanPriceSource(PriceSource):
    """
    Etherscan gas oracle.

    GET {base_url}?module=gastracker&action=gasoracle&apikey=...

    Response body:
      {"status": "1", "message": "OK",
       "result": {"LastBlock": "...", "SafeGasPrice": "...",
                  "ProposeGasPrice": "...", "FastGasPrice": "..."}}

    The tracked price is ProposeGasPrice ("medium gas").
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 20.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout_s)

    def close(self) -> None:
        self._client.close()

    def fetch_current_price(self) -> int:
        params = {
            "module": "gastracker",
            "action": "gasoracle",
            "apikey": self.api_key,
        }

        try:
            resp = self._client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise FetchError(f"while requesting etherscan API: {e!r}") from e

        if resp.status_code != httpx.codes.OK:
            raise FetchError(f"response error: {resp.status_code} {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise FetchError("while decoding response body") from e

        if not isinstance(data, dict):
            raise FetchError(f"unexpected response payload type {type(data).__name__}")

        status = data.get("status")
        message = data.get("message")
        if status != "1" or message != "OK":
            raise FetchError(f"error response body: {status} {message}")

        result = data.get("result")
        raw = result.get("ProposeGasPrice") if isinstance(result, dict) else None
        if raw is None:
            raise FetchError("response body has no result.ProposeGasPrice")

        try:
            price = int(str(raw).strip(), 10)
        except ValueError:
            raise FetchError(f"while parsing gas price {raw!r}") from None

        if price <= 0:
            raise FetchError(f"gas price must be positive, got {price}")

        log.debug("etherscan ProposeGasPrice=%s", price)
        return price
