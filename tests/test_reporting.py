import pytest

from rentobuy.model import compare_scenarios
from rentobuy.reporting import (
    buy_vs_rent_table,
    canonical_periods,
    format_currency,
    render_table,
    sale_table,
    sell_vs_keep_table,
)


def _labels(periods):
    return [(p.label, p.months) for p in periods]


def test_base_periods_with_matching_loan_term():
    periods = canonical_periods(120)
    assert [p.months for p in periods] == [12 * y for y in range(1, 11)]
    assert periods[-1].label == "X 10y"
    assert periods[-1].loan_term


def test_loan_term_inserted_in_order():
    periods = canonical_periods(66)
    assert _labels(periods)[4:7] == [("5y", 60), ("X 5y6m", 66), ("6y", 72)]


def test_long_loan_term_appended_and_extended_periods():
    assert _labels(canonical_periods(300))[-1] == ("X 25y", 300)
    extended = canonical_periods(300, include_extended=True)
    assert [p.months for p in extended][-4:] == [180, 240, 300, 360]


def test_no_loan_term():
    assert len(canonical_periods(0)) == 10
    assert len(canonical_periods(0, include_extended=True)) == 13


@pytest.mark.parametrize(
    "amount, compact, full",
    [
        (999.94, "999.9", "$999.9"),
        (1_500, "1.5K", "$1,500.0"),
        (2_528_270, "2.5M", "$2,528,270.0"),
        (-42_000, "-42.0K", "-$42,000.0"),
    ],
)
def test_format_currency(amount, compact, full):
    assert format_currency(amount) == compact
    assert format_currency(amount, full=True) == full


def test_render_table_aligns_columns():
    text = render_table("T", [["Period", "Value"], ["1y", "1.0K"], ["10y", "12.5K"]], "note")
    lines = text.splitlines()
    assert lines[1] == "T"
    assert "| 1y     |  1.0K |" in lines
    assert lines[-1] == "  note"


def test_buy_vs_rent_report(buy_vs_rent_config):
    periods = canonical_periods(120)
    result = compare_scenarios(buy_vs_rent_config, [p.months for p in periods])
    text = buy_vs_rent_table(result.snapshots, periods, 7.0)
    assert "NET WORTH PROJECTIONS: BUY VS RENT" in text
    assert "NET X 10y" in text


def test_sell_vs_keep_report(sell_vs_keep_config):
    periods = canonical_periods(240, include_extended=True)
    result = compare_scenarios(sell_vs_keep_config, [p.months for p in periods])
    assert "SELL - KEEP" in sell_vs_keep_table(result.snapshots, periods)
    assert "SALE X 20y" in sale_table(result.snapshots, periods)
