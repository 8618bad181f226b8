from __future__ import annotations

from typing import Optional

from .amortization import amortize
from .appreciation import value_at
from .schemas import (
    DEFAULT_HORIZON_MONTHS,
    LoanSeries,
    SaleOutcome,
    ScenarioConfig,
)


def exemption_year_index(at_month: int) -> int:
    """Tax-free-limit schedule index for a sale after ``at_month`` months.

    Completed years minus one, floored at zero: a sale at month 12 uses the
    first entry, a sale at month 24 the second.
    """
    return max(at_month // 12 - 1, 0)


def sale_outcome(
    config: ScenarioConfig, at_month: int, loan: Optional[LoanSeries] = None
) -> SaleOutcome:
    """Price, costs, payoff and tax for selling the asset after ``at_month`` months.

    Selling costs are deducted from the gain before the exemption applies.
    """
    if loan is None:
        loan = amortize(
            config.loan.amount,
            config.loan.monthly_rate,
            config.loan.effective_term_months,
            max(DEFAULT_HORIZON_MONTHS, at_month, 1),
        )

    selling = config.selling
    sale_price = value_at(config.sale_price_base, config.appreciation, at_month)
    selling_costs = sale_price * (selling.agent_commission / 100) + selling.staging_costs
    loan_payoff = loan.balance_after(at_month)

    capital_gain = sale_price - config.purchase_price - selling_costs
    exemption = selling.tax_free_limits.rate_for_year(exemption_year_index(at_month))
    taxable_gain = max(0.0, capital_gain - exemption)
    tax = taxable_gain * (selling.capital_gains_tax / 100)

    return SaleOutcome(
        sale_price=sale_price,
        selling_costs=selling_costs,
        loan_payoff=loan_payoff,
        capital_gain=capital_gain,
        tax=tax,
        net_proceeds=sale_price - selling_costs - loan_payoff - tax,
    )
