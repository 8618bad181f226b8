import pytest

from rentobuy.errors import ProjectionDomainError
from rentobuy.inputs import FIELDS, build_config
from rentobuy.schemas import BuyVsRentConfig, ScenarioKind, SellVsKeepConfig

BUY_INPUTS = {
    "inflation_rate": "3%",
    "include_30year": "1",
    "purchase_price": "500K",
    "loan_amount": "400k",
    "loan_rate": "6.5",
    "loan_duration": "30y",
    "annual_insurance": "6k",
    "annual_taxes": "1.2k",
    "monthly_expenses": "200",
    "appreciation_rate": "-5,3",
    "rent_deposit": "4k",
    "monthly_rent": "2.5k",
    "annual_rent_costs": "",
    "other_annual_costs": "600",
    "investment_return_rate": "7",
    "include_selling": "yes",
    "agent_commission": "5%",
    "staging_costs": "10k",
    "tax_free_limit": "250k,500k",
    "capital_gains_tax": "20",
}


def test_build_buy_vs_rent_config():
    config = build_config(ScenarioKind.BUY_VS_RENT, BUY_INPUTS)

    assert isinstance(config, BuyVsRentConfig)
    assert config.purchase_price == 500_000
    assert config.down_payment == 100_000
    assert config.loan.term_months == 360
    assert config.loan.annual_rate == 6.5
    assert config.recurring.monthly_total == pytest.approx(7_200 / 12 + 200)
    assert config.appreciation.values == (-5.0, 3.0)
    assert config.renting.monthly_total == pytest.approx(2_550)
    assert config.economic.inflation_rate == 3.0
    assert config.economic.include_extended_periods
    assert config.selling.enabled
    assert config.selling.tax_free_limits.values == (250_000.0, 500_000.0)


def test_selling_fields_ignored_when_disabled():
    raw = dict(BUY_INPUTS, include_selling="0", agent_commission="oops")
    config = build_config(ScenarioKind.BUY_VS_RENT, raw)
    assert not config.selling.enabled


def test_no_loan_skips_rate_and_duration():
    raw = dict(BUY_INPUTS, loan_amount="", loan_duration="", loan_rate="")
    config = build_config(ScenarioKind.BUY_VS_RENT, raw)
    assert not config.loan.has_loan
    assert config.down_payment == 500_000


def test_empty_appreciation_defaults_to_zero():
    config = build_config(ScenarioKind.BUY_VS_RENT, dict(BUY_INPUTS, appreciation_rate=""))
    assert config.appreciation.values == (0.0,)


@pytest.mark.parametrize(
    "key, value",
    [("purchase_price", "0"), ("purchase_price", "abc"), ("loan_duration", "0y"), ("monthly_rent", "x")],
)
def test_invalid_fields_are_named(key, value):
    with pytest.raises(ProjectionDomainError) as excinfo:
        build_config(ScenarioKind.BUY_VS_RENT, dict(BUY_INPUTS, **{key: value}))
    assert excinfo.value.field == key


def test_build_sell_vs_keep_config():
    raw = {
        "purchase_price": "900k",
        "current_market_value": "2.2M",
        "loan_amount": "300k",
        "loan_rate": "3",
        "loan_duration": "20y",
        "monthly_rental_income": "4k",
        "agent_commission": "6",
        "staging_costs": "10k",
        "tax_free_limit": "250k",
        "capital_gains_tax": "20",
        "rent_after_sale": "1",
        "monthly_rent": "3k",
    }
    config = build_config(ScenarioKind.SELL_VS_KEEP, raw)

    assert isinstance(config, SellVsKeepConfig)
    assert config.sale_price_base == 2_200_000
    assert config.purchase_price == 900_000
    assert config.monthly_rental_income == 4_000
    assert config.selling.enabled
    assert config.renting is not None
    assert config.renting.monthly_rent == 3_000


def test_sell_vs_keep_without_post_sale_renting():
    raw = {"purchase_price": "1", "current_market_value": "2", "monthly_rent": "3k"}
    assert build_config(ScenarioKind.SELL_VS_KEEP, raw).renting is None


def test_field_catalogues_have_unique_keys():
    for fields in FIELDS.values():
        keys = [f.key for f in fields]
        assert len(keys) == len(set(keys))
