from __future__ import annotations

from typing import List

from .amortization import amortize
from .errors import ProjectionDomainError
from .schemas import (
    DEFAULT_HORIZON_MONTHS,
    CostProjection,
    ScenarioConfig,
    SellVsKeepConfig,
)


def project_costs(
    config: ScenarioConfig, horizon_months: int = DEFAULT_HORIZON_MONTHS
) -> CostProjection:
    """Build the month-indexed owning and renting cost series.

    Recurring owner costs, rent and rental income step up by the inflation rate
    at every year boundary; the loan payment stays fixed and stops after the
    term. For sell-vs-keep the owning series is the keep arm's net monthly
    cost, which is negative when rental income exceeds the costs.
    """
    if horizon_months <= 0:
        raise ProjectionDomainError("projection horizon must be greater than 0")

    loan = amortize(
        config.loan.amount,
        config.loan.monthly_rate,
        config.loan.effective_term_months,
        horizon_months,
    )
    term_months = config.loan.effective_term_months
    inflation = 1 + config.economic.inflation_rate / 100

    recurring = config.recurring.monthly_total
    if isinstance(config, SellVsKeepConfig):
        income = config.monthly_rental_income
        renting = config.renting.monthly_total if config.renting else 0.0
    else:
        income = 0.0
        renting = config.renting.monthly_total

    buying_costs: List[float] = []
    renting_costs: List[float] = []
    for i in range(horizon_months):
        if i > 0 and i % 12 == 0:
            recurring *= inflation
            income *= inflation
            renting *= inflation

        payment = loan.payment if i < term_months else 0.0
        buying_costs.append(payment + recurring - income)
        renting_costs.append(renting)

    return CostProjection(
        buying=tuple(buying_costs),
        renting=tuple(renting_costs),
        loan=loan,
    )
