from __future__ import annotations

from .schemas import RateSchedule


def value_at(base: float, schedule: RateSchedule, months: int) -> float:
    """Compound ``base`` year by year through ``schedule``.

    Whole years use that year's rate; a trailing partial year applies the next
    year's rate with a fractional exponent.
    """
    years, remainder = divmod(max(months, 0), 12)

    value = base
    for year in range(years):
        value *= 1 + schedule.rate_for_year(year) / 100
    if remainder > 0:
        value *= (1 + schedule.rate_for_year(years) / 100) ** (remainder / 12.0)
    return value
