from __future__ import annotations

from typing import List

from .errors import ProjectionDomainError
from .schemas import DEFAULT_HORIZON_MONTHS, LoanSeries


def monthly_payment(principal: float, monthly_rate: float, months: int) -> float:
    """Fixed payment that retires ``principal`` over ``months`` payments.

    M = P * [r(1+r)^n] / [(1+r)^n - 1], or straight-line when ``r`` is 0.
    """
    if months <= 0:
        raise ProjectionDomainError(
            "loan duration must be greater than 0", field="loan_duration"
        )
    if monthly_rate == 0:
        return principal / months

    factor = (1 + monthly_rate) ** months
    return principal * (monthly_rate * factor) / (factor - 1)


def amortize(
    principal: float,
    monthly_rate: float,
    months: int,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
) -> LoanSeries:
    """Walk the loan month by month over the whole horizon.

    The final payment may leave a tiny negative balance from floating-point
    drift; it is kept as-is. Months after the term hold a zero balance and the
    final cumulative totals.
    """
    if horizon_months <= 0:
        raise ProjectionDomainError("projection horizon must be greater than 0")

    if principal <= 0:
        zeros = tuple(0.0 for _ in range(horizon_months))
        return LoanSeries(
            principal=0.0,
            payment=0.0,
            balance=zeros,
            cumulative_principal=zeros,
            cumulative_interest=zeros,
        )

    payment = monthly_payment(principal, monthly_rate, months)
    balance_series: List[float] = []
    principal_series: List[float] = []
    interest_series: List[float] = []

    balance = principal
    total_principal = 0.0
    total_interest = 0.0
    for i in range(horizon_months):
        if i < months:
            interest = balance * monthly_rate
            principal_paid = payment - interest
            balance -= principal_paid
            total_principal += principal_paid
            total_interest += interest
            balance_series.append(balance)
        else:
            balance_series.append(0.0)
        principal_series.append(total_principal)
        interest_series.append(total_interest)

    return LoanSeries(
        principal=principal,
        payment=payment,
        balance=tuple(balance_series),
        cumulative_principal=tuple(principal_series),
        cumulative_interest=tuple(interest_series),
    )
