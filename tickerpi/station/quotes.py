import json
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from tickerpi.station.interfaces import FetchError, HttpClient, NetworkLink


logger = logging.getLogger(__name__)

NAN = float("nan")

QUOTE_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "tickerpi/0.1",
}


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Quote:
    symbol: str = ""
    last: float = NAN
    bid: float = NAN
    ask: float = NAN
    volume: float = NAN
    trade_timestamp: str = ""
    direction: Direction = Direction.UNKNOWN


def _as_float(value):
    if isinstance(value, bool):
        return NAN
    try:
        number = float(value)
    except (TypeError, ValueError):
        return NAN
    return number if math.isfinite(number) else NAN


def parse_quote(body, symbol):
    """Build a Quote for `symbol` from a JSON document keyed by symbol.

    Returns None when the body is not a JSON object or has no object under
    `symbol`. Any delta indicator other than "up" maps to Direction.DOWN.
    """
    try:
        document = json.loads(body)
    except ValueError:
        return None
    if not isinstance(document, dict):
        return None

    entry = document.get(symbol)
    if not isinstance(entry, dict):
        return None

    trade_time = entry.get("lastTradeTime")
    return Quote(
        symbol=symbol,
        last=_as_float(entry.get("last")),
        bid=_as_float(entry.get("bid")),
        ask=_as_float(entry.get("ask")),
        volume=_as_float(entry.get("volume")),
        trade_timestamp="" if trade_time is None else str(trade_time),
        direction=Direction.UP if entry.get("deltaIndicator") == "up" else Direction.DOWN,
    )


@dataclass
class QuoteFetcher:
    http: HttpClient
    network: NetworkLink
    url: str
    auth_param: str
    token: str
    headers: Mapping[str, str] = field(default_factory=lambda: dict(QUOTE_HEADERS))

    def fetch_quote(self, symbol) -> Optional[Quote]:
        if not self.network.is_connected():
            logger.warning("Quote fetch for %s skipped: network unreachable", symbol)
            return None

        try:
            response = self.http.get(
                self.url,
                params={self.auth_param: self.token},
                headers=self.headers,
            )
        except FetchError as exc:
            logger.warning("Quote fetch for %s failed: %s", symbol, exc)
            return None

        if not response.ok:
            logger.warning("Quote fetch for %s returned HTTP %s", symbol, response.status_code)
            return None

        quote = parse_quote(response.text, symbol)
        if quote is None:
            logger.warning("Quote response did not contain an object for %s", symbol)
        return quote
