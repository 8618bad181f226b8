"""Form field catalogue and conversion of raw field text into scenario configs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, TypeVar

from .errors import ProjectionDomainError
from .parsing import parse_amount, parse_duration, parse_rate_list, parse_toggle
from .schemas import (
    BuyVsRentConfig,
    EconomicAssumptions,
    LoanTerms,
    RateSchedule,
    RecurringCosts,
    RentingTerms,
    ScenarioConfig,
    ScenarioKind,
    SellingTerms,
    SellVsKeepConfig,
)

T = TypeVar("T")


@dataclass(frozen=True)
class FormField:
    key: str
    label: str
    help: str
    group: str
    toggle: bool = False


ECONOMIC_FIELDS = [
    FormField("inflation_rate", "Inflation Rate (%)", "Annual inflation for all recurring costs", "ECONOMIC ASSUMPTIONS"),
    FormField("include_30year", "Include 30-Year Projections", "Show 15y, 20y, 30y periods (default: 10y max)", "ECONOMIC ASSUMPTIONS", toggle=True),
]

_APPRECIATION_HELP = (
    "Annual rate (can be negative). Comma-separated values apply to the first "
    "years, the last value to all remaining years (e.g., '10,5,3')"
)

_SELLING_FIELDS = [
    FormField("agent_commission", "Agent Commission (%)", "Percentage of sale price paid to agents", "SELLING"),
    FormField("staging_costs", "Staging/Selling Costs ($)", "Fixed costs to prepare and sell", "SELLING"),
    FormField("tax_free_limit", "Tax-Free Gains Limit ($)", "Capital gains exempt from tax; comma-separated values per sale year", "SELLING"),
    FormField("capital_gains_tax", "Capital Gains Tax Rate (%)", "Long-term capital gains tax rate", "SELLING"),
]

_RENTING_FIELDS = [
    FormField("rent_deposit", "Rental Deposit ($)", "Initial rental deposit", "RENTING"),
    FormField("monthly_rent", "Monthly Rent ($)", "Base monthly rent amount", "RENTING"),
    FormField("annual_rent_costs", "Annual Rent Costs ($)", "Yearly rental-related costs", "RENTING"),
    FormField("other_annual_costs", "Other Annual Costs ($)", "Additional yearly costs for renting", "RENTING"),
]

BUY_VS_RENT_FIELDS: List[FormField] = ECONOMIC_FIELDS + [
    FormField("purchase_price", "Asset Purchase Price ($)", "Initial purchase price of the asset", "BUYING"),
    FormField("loan_amount", "Loan Amount ($)", "Total mortgage/loan amount", "BUYING"),
    FormField("loan_rate", "Loan Rate (%)", "Annual interest rate (e.g., 6.5)", "BUYING"),
    FormField("loan_duration", "Loan Duration", "Loan term (e.g., 5y, 30y)", "BUYING"),
    FormField("annual_insurance", "Annual Tax & Insurance ($)", "Yearly insurance and property tax", "BUYING"),
    FormField("annual_taxes", "Other Annual Costs ($)", "HOA fees, maintenance, etc.", "BUYING"),
    FormField("monthly_expenses", "Monthly Expenses ($)", "Monthly HOA, utilities, etc.", "BUYING"),
    FormField("appreciation_rate", "Appreciation Rate (%)", _APPRECIATION_HELP, "BUYING"),
] + _RENTING_FIELDS + [
    FormField("investment_return_rate", "Investment Return Rate (%)", "Expected return on investments", "RENTING"),
    FormField("include_selling", "Include Selling Analysis", "Net worth uses proceeds after selling", "SELLING", toggle=True),
] + _SELLING_FIELDS

SELL_VS_KEEP_FIELDS: List[FormField] = ECONOMIC_FIELDS + [
    FormField("purchase_price", "Original Purchase Price ($)", "What you paid; the capital gains basis", "ASSET"),
    FormField("current_market_value", "Current Market Value ($)", "What the asset would sell for today", "ASSET"),
    FormField("loan_amount", "Remaining Loan Balance ($)", "Amount still owed", "ASSET"),
    FormField("loan_rate", "Loan Rate (%)", "Annual interest rate (e.g., 6.5)", "ASSET"),
    FormField("loan_duration", "Remaining Loan Term", "Time left on the loan (e.g., 25y6m)", "ASSET"),
    FormField("annual_insurance", "Annual Tax & Insurance ($)", "Yearly insurance and property tax", "ASSET"),
    FormField("annual_taxes", "Other Annual Costs ($)", "HOA fees, maintenance, etc.", "ASSET"),
    FormField("monthly_expenses", "Monthly Expenses ($)", "Monthly HOA, utilities, etc.", "ASSET"),
    FormField("monthly_rental_income", "Monthly Rental Income ($)", "Rent collected if you keep and lease it out", "ASSET"),
    FormField("appreciation_rate", "Appreciation Rate (%)", _APPRECIATION_HELP, "ASSET"),
    FormField("investment_return_rate", "Investment Return Rate (%)", "Expected return on invested proceeds", "ASSET"),
] + _SELLING_FIELDS + [
    FormField("rent_after_sale", "Rent After Selling", "Seller pays rent from the invested proceeds", "RENTING", toggle=True),
] + _RENTING_FIELDS

FIELDS: Dict[ScenarioKind, List[FormField]] = {
    ScenarioKind.BUY_VS_RENT: BUY_VS_RENT_FIELDS,
    ScenarioKind.SELL_VS_KEEP: SELL_VS_KEEP_FIELDS,
}


def _field(raw: Mapping[str, str], key: str, parser: Callable[[str], T]) -> T:
    try:
        return parser(raw.get(key, "") or "")
    except ValueError as exc:
        raise ProjectionDomainError(f"Invalid {key.replace('_', ' ')}: {exc}", field=key) from exc


def _amount(raw: Mapping[str, str], key: str) -> float:
    return _field(raw, key, parse_amount)


def _schedule(raw: Mapping[str, str], key: str) -> RateSchedule:
    return RateSchedule(tuple(_field(raw, key, parse_rate_list)))


def _loan(raw: Mapping[str, str]) -> LoanTerms:
    amount = _amount(raw, "loan_amount")
    if amount <= 0:
        return LoanTerms()
    return LoanTerms(
        amount=amount,
        annual_rate=_amount(raw, "loan_rate"),
        term_months=_field(raw, "loan_duration", parse_duration),
    )


def _recurring(raw: Mapping[str, str]) -> RecurringCosts:
    return RecurringCosts(
        annual_insurance_tax=_amount(raw, "annual_insurance"),
        other_annual_costs=_amount(raw, "annual_taxes"),
        monthly_expenses=_amount(raw, "monthly_expenses"),
    )


def _renting(raw: Mapping[str, str]) -> RentingTerms:
    return RentingTerms(
        deposit=_amount(raw, "rent_deposit"),
        monthly_rent=_amount(raw, "monthly_rent"),
        annual_rent_costs=_amount(raw, "annual_rent_costs"),
        other_annual_costs=_amount(raw, "other_annual_costs"),
    )


def _selling(raw: Mapping[str, str], enabled: bool) -> SellingTerms:
    if not enabled:
        return SellingTerms()
    return SellingTerms(
        enabled=True,
        agent_commission=_amount(raw, "agent_commission"),
        staging_costs=_amount(raw, "staging_costs"),
        capital_gains_tax=_amount(raw, "capital_gains_tax"),
        tax_free_limits=_schedule(raw, "tax_free_limit"),
    )


def _economic(raw: Mapping[str, str]) -> EconomicAssumptions:
    return EconomicAssumptions(
        inflation_rate=_amount(raw, "inflation_rate"),
        include_extended_periods=parse_toggle(raw.get("include_30year", "")),
    )


def build_config(kind: ScenarioKind, raw: Mapping[str, str]) -> ScenarioConfig:
    """Parse the text entered for each field into a validated config."""
    if kind is ScenarioKind.BUY_VS_RENT:
        return BuyVsRentConfig(
            purchase_price=_amount(raw, "purchase_price"),
            loan=_loan(raw),
            recurring=_recurring(raw),
            appreciation=_schedule(raw, "appreciation_rate"),
            renting=_renting(raw),
            investment_return_rate=_amount(raw, "investment_return_rate"),
            selling=_selling(raw, parse_toggle(raw.get("include_selling", ""))),
            economic=_economic(raw),
        )

    renting = _renting(raw) if parse_toggle(raw.get("rent_after_sale", "")) else None
    return SellVsKeepConfig(
        purchase_price=_amount(raw, "purchase_price"),
        current_market_value=_amount(raw, "current_market_value"),
        loan=_loan(raw),
        recurring=_recurring(raw),
        monthly_rental_income=_amount(raw, "monthly_rental_income"),
        appreciation=_schedule(raw, "appreciation_rate"),
        investment_return_rate=_amount(raw, "investment_return_rate"),
        selling=_selling(raw, True),
        renting=renting,
        economic=_economic(raw),
    )
