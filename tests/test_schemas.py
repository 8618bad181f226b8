import pytest

from rentobuy.errors import ProjectionDomainError
from rentobuy.schemas import (
    BuyVsRentConfig,
    LoanTerms,
    RateSchedule,
    RecurringCosts,
    RentingTerms,
    ScenarioKind,
    SellVsKeepConfig,
)


def test_rate_schedule_clamps_year():
    schedule = RateSchedule((10, 5, 3))
    assert schedule.rate_for_year(0) == 10
    assert schedule.rate_for_year(2) == 3
    assert schedule.rate_for_year(50) == 3
    assert schedule.rate_for_year(-1) == 10


def test_rate_schedule_requires_entries():
    with pytest.raises(ProjectionDomainError):
        RateSchedule(())


def test_rate_schedule_of_scalar():
    assert RateSchedule.of(4) == RateSchedule((4.0,))
    assert len(RateSchedule.of([1, 2])) == 2


@pytest.mark.parametrize("price", [0, -1])
def test_purchase_price_must_be_positive(price):
    with pytest.raises(ProjectionDomainError) as excinfo:
        BuyVsRentConfig(purchase_price=price)
    assert excinfo.value.field == "purchase_price"


def test_current_market_value_must_be_positive():
    with pytest.raises(ProjectionDomainError) as excinfo:
        SellVsKeepConfig(purchase_price=100_000, current_market_value=0)
    assert excinfo.value.field == "current_market_value"


def test_loan_with_amount_requires_term():
    with pytest.raises(ProjectionDomainError) as excinfo:
        LoanTerms(amount=100_000, annual_rate=5, term_months=0)
    assert excinfo.value.field == "loan_duration"


def test_no_loan_ignores_rate_and_term():
    loan = LoanTerms(amount=0, annual_rate=5, term_months=0)
    assert not loan.has_loan
    assert loan.monthly_rate == 0.0
    assert loan.effective_term_months == 0


def test_derived_monthly_totals():
    assert RecurringCosts(1_200, 2_400, 50).monthly_total == pytest.approx(350)
    renting = RentingTerms(deposit=4_000, monthly_rent=2_000, annual_rent_costs=1_200)
    assert renting.monthly_total == pytest.approx(2_100)
    assert renting.recoverable_deposit == pytest.approx(3_000)


def test_scenario_kinds():
    assert BuyVsRentConfig(purchase_price=1).kind is ScenarioKind.BUY_VS_RENT
    config = SellVsKeepConfig(purchase_price=1, current_market_value=2)
    assert config.kind is ScenarioKind.SELL_VS_KEEP
    assert config.selling.enabled
