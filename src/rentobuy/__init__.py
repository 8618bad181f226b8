"""
Rent vs. buy and sell vs. keep comparison toolkit.

The projection engine turns a validated scenario config into month-indexed
cost, loan and investment series, then reduces each month to a net-worth
figure for both arms of the decision. It is a pure function of its inputs.
"""

from .errors import ProjectionDomainError
from .model import compare_scenarios, net_worth_at, project
from .sale import sale_outcome
from .schemas import (
    BuyVsRentConfig,
    BuyVsRentSnapshot,
    ComparisonResult,
    EconomicAssumptions,
    LoanTerms,
    RateSchedule,
    RecurringCosts,
    RentingTerms,
    SaleOutcome,
    ScenarioKind,
    SellingTerms,
    SellVsKeepConfig,
    SellVsKeepSnapshot,
)

__all__ = [
    "BuyVsRentConfig",
    "BuyVsRentSnapshot",
    "ComparisonResult",
    "EconomicAssumptions",
    "LoanTerms",
    "ProjectionDomainError",
    "RateSchedule",
    "RecurringCosts",
    "RentingTerms",
    "SaleOutcome",
    "ScenarioKind",
    "SellingTerms",
    "SellVsKeepConfig",
    "SellVsKeepSnapshot",
    "compare_scenarios",
    "net_worth_at",
    "project",
    "sale_outcome",
]
