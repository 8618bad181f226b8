"""Parsers for human-entered amounts, durations and rate lists.

Amounts accept ``K``/``M``/``B`` suffixes and a trailing ``%`` ("500K",
"1.2m", "-10%"). Durations use the ``<n>y<n>m`` form ("30y", "5y6m", "6m").
"""

from __future__ import annotations

import re
from typing import List

_MULTIPLIERS = {"k": 1_000.0, "m": 1_000_000.0, "b": 1_000_000_000.0}
_DURATION_RE = re.compile(r"^(?:(?P<years>\d+)y)?(?:(?P<months>\d+)m)?$")
_TRUE_VALUES = {"1", "y", "yes", "true", "on"}


def parse_amount(text: str) -> float:
    """Parse a monetary amount or percentage. Empty text is 0."""
    value = (text or "").strip().lower()
    if not value:
        return 0.0

    value = value.rstrip("%").strip()
    multiplier = 1.0
    if value and value[-1] in _MULTIPLIERS:
        multiplier = _MULTIPLIERS[value[-1]]
        value = value[:-1].strip()

    try:
        return float(value.replace(",", "")) * multiplier
    except ValueError as exc:
        raise ValueError(f"Could not parse amount '{text}'") from exc


def parse_duration(text: str) -> int:
    """Parse ``<n>y<n>m`` into a month count; the result must be positive."""
    value = (text or "").strip().lower().replace(" ", "")
    match = _DURATION_RE.match(value)
    if not value or match is None:
        raise ValueError(f"Invalid duration format '{text}' (expected e.g. 30y, 5y6m, 6m)")

    months = int(match.group("years") or 0) * 12 + int(match.group("months") or 0)
    if months <= 0:
        raise ValueError("duration must be greater than 0")
    return months


def parse_rate_list(text: str) -> List[float]:
    """Split comma-separated amounts; the last entry applies to every later year."""
    value = (text or "").strip()
    if not value:
        return [0.0]

    rates: List[float] = []
    for part in value.split(","):
        try:
            rates.append(parse_amount(part))
        except ValueError as exc:
            raise ValueError(f"invalid rate '{part.strip()}'") from exc
    return rates or [0.0]


def parse_toggle(text: str) -> bool:
    return (text or "").strip().lower() in _TRUE_VALUES


def format_duration(months: int) -> str:
    if months % 12 == 0:
        return f"{months // 12}y"
    if months < 12:
        return f"{months}m"
    return f"{months // 12}y{months % 12}m"
