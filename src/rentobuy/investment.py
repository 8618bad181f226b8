"""Month-by-month investment simulations.

Both modes walk the cost series one month at a time because contributions
change every month; neither has a closed form.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .schemas import KeepPosition


def monthly_growth_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100.0 / 12.0


def dollar_cost_average(
    initial: float,
    contributions: Sequence[float],
    annual_rate_pct: float,
    months: int,
) -> float:
    """Value after adding each month's contribution and compounding once.

    ``months`` is clamped to the length of ``contributions``. A month's
    contribution compounds for the rest of the horizon only, so over short
    periods the effective return is below the nominal annual rate.
    """
    return dollar_cost_average_series(initial, contributions, annual_rate_pct, months)[-1]


def dollar_cost_average_series(
    initial: float,
    contributions: Sequence[float],
    annual_rate_pct: float,
    months: int,
) -> Tuple[float, ...]:
    """Running values; entry 0 is ``initial`` and entry ``i`` follows month ``i``."""
    rate = monthly_growth_rate(annual_rate_pct)
    months = max(0, min(months, len(contributions)))

    value = initial
    values: List[float] = [value]
    for i in range(months):
        value += contributions[i]
        value *= 1 + rate
        values.append(value)
    return tuple(values)


def simulate_keep_position(costs: Sequence[float], annual_rate_pct: float) -> KeepPosition:
    """Track invested surplus against out-of-pocket cost for the keep arm.

    Net income (a negative cost) is invested. A positive cost is paid from the
    invested balance first and only the uncovered remainder counts as real
    cost. The invested balance compounds every month either way.
    """
    rate = monthly_growth_rate(annual_rate_pct)

    invested = 0.0
    real_cost = 0.0
    invested_series: List[float] = []
    real_cost_series: List[float] = []
    net_series: List[float] = []
    for cost in costs:
        if cost < 0:
            invested += -cost
        elif cost > 0:
            drawn = min(cost, invested)
            invested -= drawn
            real_cost += cost - drawn

        invested *= 1 + rate
        invested_series.append(invested)
        real_cost_series.append(real_cost)
        net_series.append(invested - real_cost)

    return KeepPosition(
        invested=tuple(invested_series),
        real_cost=tuple(real_cost_series),
        net_position=tuple(net_series),
    )
