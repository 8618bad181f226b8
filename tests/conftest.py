from __future__ import annotations

import pytest

from rentobuy.schemas import (
    BuyVsRentConfig,
    LoanTerms,
    RateSchedule,
    RentingTerms,
    SellingTerms,
    SellVsKeepConfig,
)


@pytest.fixture
def buy_vs_rent_config() -> BuyVsRentConfig:
    return BuyVsRentConfig(
        purchase_price=500_000,
        loan=LoanTerms(amount=400_000, annual_rate=0.0, term_months=120),
        renting=RentingTerms(deposit=4_000, monthly_rent=2_000),
    )


@pytest.fixture
def sell_vs_keep_config() -> SellVsKeepConfig:
    return SellVsKeepConfig(
        purchase_price=1_000_000,
        current_market_value=2_200_000,
        loan=LoanTerms(amount=300_000, annual_rate=5.0, term_months=240),
        selling=SellingTerms(
            enabled=True,
            agent_commission=6,
            staging_costs=10_000,
            capital_gains_tax=20,
            tax_free_limits=RateSchedule((250_000,)),
        ),
    )
