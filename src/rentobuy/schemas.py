from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Sequence, Tuple, Union

from .errors import ProjectionDomainError

DEFAULT_HORIZON_MONTHS = 360
RECOVERABLE_DEPOSIT_SHARE = 0.75


class ScenarioKind(str, Enum):
    BUY_VS_RENT = "buy_vs_rent"
    SELL_VS_KEEP = "sell_vs_keep"


@dataclass(frozen=True)
class RateSchedule:
    """Year-indexed values where the last entry repeats forever."""

    values: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.values) == 0:
            raise ProjectionDomainError("rate schedule must have at least one entry")
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))

    @classmethod
    def of(cls, values: Union[float, Sequence[float]]) -> "RateSchedule":
        if isinstance(values, (int, float)):
            return cls((float(values),))
        return cls(tuple(values))

    def rate_for_year(self, year: int) -> float:
        index = min(max(year, 0), len(self.values) - 1)
        return self.values[index]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class EconomicAssumptions:
    inflation_rate: float = 0.0  # annual percentage
    include_extended_periods: bool = False


@dataclass(frozen=True)
class LoanTerms:
    amount: float = 0.0
    annual_rate: float = 0.0  # annual percentage, e.g., 6.5
    term_months: int = 0

    def __post_init__(self) -> None:
        if self.amount > 0 and self.term_months <= 0:
            raise ProjectionDomainError(
                "loan duration must be greater than 0", field="loan_duration"
            )

    @property
    def has_loan(self) -> bool:
        return self.amount > 0

    @property
    def monthly_rate(self) -> float:
        if not self.has_loan:
            return 0.0
        return self.annual_rate / 100.0 / 12.0

    @property
    def effective_term_months(self) -> int:
        return self.term_months if self.has_loan else 0


@dataclass(frozen=True)
class RecurringCosts:
    """Owner-side costs that keep running after the loan is paid off."""

    annual_insurance_tax: float = 0.0
    other_annual_costs: float = 0.0
    monthly_expenses: float = 0.0

    @property
    def monthly_total(self) -> float:
        return (
            self.annual_insurance_tax + self.other_annual_costs
        ) / 12.0 + self.monthly_expenses


@dataclass(frozen=True)
class RentingTerms:
    deposit: float = 0.0
    monthly_rent: float = 0.0
    annual_rent_costs: float = 0.0
    other_annual_costs: float = 0.0

    @property
    def monthly_total(self) -> float:
        return self.monthly_rent + (self.annual_rent_costs + self.other_annual_costs) / 12.0

    @property
    def recoverable_deposit(self) -> float:
        return self.deposit * RECOVERABLE_DEPOSIT_SHARE


@dataclass(frozen=True)
class SellingTerms:
    enabled: bool = False
    agent_commission: float = 0.0  # percentage of sale price
    staging_costs: float = 0.0
    capital_gains_tax: float = 0.0  # percentage
    tax_free_limits: RateSchedule = field(default_factory=lambda: RateSchedule((0.0,)))


@dataclass(frozen=True)
class BuyVsRentConfig:
    """Parameters for comparing a purchase financed by ``loan`` against renting."""

    kind: ClassVar[ScenarioKind] = ScenarioKind.BUY_VS_RENT

    purchase_price: float
    loan: LoanTerms = field(default_factory=LoanTerms)
    recurring: RecurringCosts = field(default_factory=RecurringCosts)
    appreciation: RateSchedule = field(default_factory=lambda: RateSchedule((0.0,)))
    renting: RentingTerms = field(default_factory=RentingTerms)
    investment_return_rate: float = 0.0  # annual percentage
    selling: SellingTerms = field(default_factory=SellingTerms)
    economic: EconomicAssumptions = field(default_factory=EconomicAssumptions)

    def __post_init__(self) -> None:
        if self.purchase_price <= 0:
            raise ProjectionDomainError(
                "purchase price must be greater than 0", field="purchase_price"
            )

    @property
    def down_payment(self) -> float:
        return self.purchase_price - self.loan.amount

    @property
    def sale_price_base(self) -> float:
        return self.purchase_price


@dataclass(frozen=True)
class SellVsKeepConfig:
    """Parameters for selling an owned asset today versus keeping it.

    ``loan`` describes what is still owed, ``purchase_price`` is the original
    cost basis used for capital gains and ``current_market_value`` is what the
    asset would sell for today. ``renting`` is ``None`` when the seller does not
    need to rent after the sale.
    """

    kind: ClassVar[ScenarioKind] = ScenarioKind.SELL_VS_KEEP

    purchase_price: float
    current_market_value: float
    loan: LoanTerms = field(default_factory=LoanTerms)
    recurring: RecurringCosts = field(default_factory=RecurringCosts)
    monthly_rental_income: float = 0.0
    appreciation: RateSchedule = field(default_factory=lambda: RateSchedule((0.0,)))
    investment_return_rate: float = 0.0
    selling: SellingTerms = field(default_factory=lambda: SellingTerms(enabled=True))
    renting: Optional[RentingTerms] = None
    economic: EconomicAssumptions = field(default_factory=EconomicAssumptions)

    def __post_init__(self) -> None:
        if self.current_market_value <= 0:
            raise ProjectionDomainError(
                "current market value must be greater than 0",
                field="current_market_value",
            )
        if self.purchase_price <= 0:
            raise ProjectionDomainError(
                "purchase price must be greater than 0", field="purchase_price"
            )

    @property
    def sale_price_base(self) -> float:
        return self.current_market_value


ScenarioConfig = Union[BuyVsRentConfig, SellVsKeepConfig]


@dataclass(frozen=True)
class LoanSeries:
    """Month-indexed amortization state; index ``i`` is the end of month ``i+1``."""

    principal: float
    payment: float
    balance: Tuple[float, ...]
    cumulative_principal: Tuple[float, ...]
    cumulative_interest: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.balance)

    def index_for(self, month: int) -> int:
        return min(month, len(self.balance)) - 1

    def balance_after(self, month: int) -> float:
        """Remaining balance once ``month`` payments are made; month 0 is the principal."""
        if month <= 0 or not self.balance:
            return self.principal
        return self.balance[self.index_for(month)]


@dataclass(frozen=True)
class CostProjection:
    buying: Tuple[float, ...]
    renting: Tuple[float, ...]
    loan: LoanSeries

    @property
    def horizon_months(self) -> int:
        return len(self.buying)

    def clamp(self, month: int) -> int:
        return max(0, min(month, self.horizon_months))


@dataclass(frozen=True)
class KeepPosition:
    invested: Tuple[float, ...]
    real_cost: Tuple[float, ...]
    net_position: Tuple[float, ...]

    def net_after(self, month: int) -> float:
        if month <= 0 or not self.net_position:
            return 0.0
        return self.net_position[min(month, len(self.net_position)) - 1]


@dataclass(frozen=True)
class SaleOutcome:
    sale_price: float
    selling_costs: float
    loan_payoff: float
    capital_gain: float
    tax: float
    net_proceeds: float


@dataclass(frozen=True)
class BuyVsRentSnapshot:
    month: int
    asset_value: float
    loan_balance: float
    buying_net_worth: float
    renting_net_worth: float
    cumulative_savings: float
    market_return: float
    buying_expenditure: float
    renting_expenditure: float
    sale: Optional[SaleOutcome] = None

    @property
    def difference(self) -> float:
        """Positive when renting comes out ahead."""
        return self.renting_net_worth - self.buying_net_worth

    @property
    def better_option(self) -> str:
        if self.buying_net_worth > self.renting_net_worth:
            return "buying"
        if self.renting_net_worth > self.buying_net_worth:
            return "renting"
        return "tie"


@dataclass(frozen=True)
class SellVsKeepSnapshot:
    month: int
    asset_value: float
    sell_net_worth: float
    keep_net_worth: float
    keep_sale: SaleOutcome
    keep_invested: float
    keep_real_cost: float

    @property
    def difference(self) -> float:
        """Positive when selling comes out ahead."""
        return self.sell_net_worth - self.keep_net_worth

    @property
    def better_option(self) -> str:
        if self.keep_net_worth > self.sell_net_worth:
            return "keeping"
        if self.sell_net_worth > self.keep_net_worth:
            return "selling"
        return "tie"


@dataclass(frozen=True)
class Projection:
    """Everything one run derives from a config; built once, read many times."""

    config: ScenarioConfig
    costs: CostProjection
    keep: Optional[KeepPosition] = None

    @property
    def horizon_months(self) -> int:
        return self.costs.horizon_months


@dataclass(frozen=True)
class ComparisonResult:
    projection: Projection
    snapshots: Tuple[Union[BuyVsRentSnapshot, SellVsKeepSnapshot], ...] = ()

    @property
    def kind(self) -> ScenarioKind:
        return self.projection.config.kind

    @property
    def final(self) -> Optional[Union[BuyVsRentSnapshot, SellVsKeepSnapshot]]:
        return self.snapshots[-1] if self.snapshots else None

    @property
    def better_option(self) -> str:
        return self.final.better_option if self.final else "tie"
