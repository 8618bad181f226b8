"""Historical market returns shown next to the investment-return input.

Nothing in the projection engine reads this data; it is display context only.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

TICKERS = ("VOO", "QQQ", "VTI", "BND")
MARKET_DATA_FILE = ".rentobuy_market_data.json"


class YahooChartClient:
    """Thin wrapper around the Yahoo Finance chart API for daily adjusted closes."""

    BASE_URL = "https://query2.finance.yahoo.com/v8/finance/chart"
    USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_daily_closes(
        self, ticker: str, start: datetime, end: datetime
    ) -> List[Tuple[date, float]]:
        params = {
            "period1": int(start.timestamp()),
            "period2": int(end.timestamp()),
            "interval": "1d",
        }
        response = self.session.get(
            f"{self.BASE_URL}/{ticker}",
            params=params,
            headers={"User-Agent": self.USER_AGENT},
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()

        results = (data.get("chart") or {}).get("result") or []
        if not results:
            raise RuntimeError(f"Yahoo chart query returned no data for {ticker}")

        result = results[0]
        timestamps = result.get("timestamp") or []
        closes = result["indicators"]["adjclose"][0]["adjclose"]
        if len(timestamps) != len(closes):
            raise RuntimeError(f"Yahoo chart data length mismatch for {ticker}")

        return [
            (datetime.fromtimestamp(ts, tz=timezone.utc).date(), float(close))
            for ts, close in zip(timestamps, closes)
            if close is not None
        ]


def annual_returns(closes: List[Tuple[date, float]]) -> Dict[str, float]:
    """Percent change from the first to the last close of each calendar year."""
    first_last: Dict[str, List[float]] = {}
    for day, price in closes:
        year = str(day.year)
        if year not in first_last:
            first_last[year] = [price, price]
        first_last[year][1] = price

    return {
        year: (last - first) / first * 100
        for year, (first, last) in first_last.items()
        if first > 0
    }


@dataclass
class MarketData:
    """Year -> annual return % for each reference instrument."""

    last_updated: str = ""
    returns: Dict[str, Dict[str, float]] = field(
        default_factory=lambda: {ticker: {} for ticker in TICKERS}
    )

    @property
    def is_empty(self) -> bool:
        return not any(self.returns.get(ticker) for ticker in TICKERS)

    def to_json(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"last_updated": self.last_updated}
        for ticker in TICKERS:
            payload[ticker.lower()] = self.returns.get(ticker, {})
        return payload

    @classmethod
    def from_json(cls, payload: Dict[str, object]) -> "MarketData":
        returns: Dict[str, Dict[str, float]] = {}
        for ticker in TICKERS:
            raw = payload.get(ticker.lower()) or {}
            if not isinstance(raw, dict):
                logger.warning("Ignoring malformed cached returns for %s", ticker)
                raw = {}
            returns[ticker] = _year_returns(ticker, raw)
        return cls(last_updated=str(payload.get("last_updated") or ""), returns=returns)


def _year_returns(ticker: str, raw: Dict[object, object]) -> Dict[str, float]:
    """Keep entries with an integer year key and a numeric value."""
    returns: Dict[str, float] = {}
    for year, value in raw.items():
        try:
            returns[str(int(str(year)))] = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed cached return %s/%r", ticker, year)
    return returns


@dataclass(frozen=True)
class MarketAverages:
    voo: float
    qqq: float
    vti: float
    bnd: float

    @property
    def mix_60_40(self) -> float:
        return self.vti * 0.6 + self.bnd * 0.4


def market_averages(data: MarketData, current_year: int) -> Optional[MarketAverages]:
    """Average the last ten complete years for which every instrument has data."""
    voo = data.returns.get("VOO", {})
    years = [
        year
        for year in voo
        if current_year - 10 <= int(year) < current_year
        and all(year in data.returns.get(ticker, {}) for ticker in TICKERS)
    ]
    if not years:
        return None

    def average(ticker: str) -> float:
        return sum(data.returns[ticker][year] for year in years) / len(years)

    return MarketAverages(
        voo=average("VOO"), qqq=average("QQQ"), vti=average("VTI"), bnd=average("BND")
    )


@dataclass
class MarketDataCache:
    """JSON cache of annual returns, refreshed at most once a day."""

    path: Path
    client: YahooChartClient = field(default_factory=YahooChartClient)
    pause_seconds: float = 1.0
    sleep: Callable[[float], None] = time.sleep

    def load(self) -> MarketData:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return MarketData()
        if not isinstance(payload, dict):
            return MarketData()
        return MarketData.from_json(payload)

    def save(self, data: MarketData) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data.to_json(), indent=2), encoding="utf-8")

    def needs_update(self, data: MarketData, today: date) -> bool:
        if str(today.year) not in data.returns.get("VOO", {}):
            return True
        try:
            last_updated = datetime.strptime(data.last_updated, "%Y-%m-%d").date()
        except ValueError:
            return True
        return (today - last_updated).days >= 1

    def refresh(self, today: Optional[date] = None) -> MarketData:
        """Return cached data, fetching the last eleven years when stale."""
        today = today or date.today()
        data = self.load()
        if not self.needs_update(data, today):
            return data

        logger.info("Updating market data from Yahoo Finance")
        end = datetime(today.year, today.month, today.day, tzinfo=timezone.utc)
        start = end - timedelta(days=11 * 366)
        for i, ticker in enumerate(TICKERS):
            closes = self.client.fetch_daily_closes(ticker, start, end)
            data.returns.setdefault(ticker, {}).update(annual_returns(closes))
            if i < len(TICKERS) - 1 and self.pause_seconds:
                self.sleep(self.pause_seconds)

        data.last_updated = today.isoformat()
        self.save(data)
        return data


def load_market_data(cache: MarketDataCache, today: Optional[date] = None) -> MarketData:
    """Best-effort refresh; any failure yields an empty data set."""
    try:
        return cache.refresh(today)
    except (requests.RequestException, RuntimeError, KeyError, IndexError, ValueError, OSError) as exc:
        logger.warning("Could not fetch market data: %s", exc)
        return MarketData()
