import pytest
from hypothesis import given
from hypothesis import strategies as st

from rentobuy.amortization import amortize, monthly_payment
from rentobuy.errors import ProjectionDomainError


def test_thirty_year_payment():
    payment = monthly_payment(400_000, 0.065 / 12, 360)
    assert payment == pytest.approx(2528.27, abs=0.01)


def test_zero_rate_is_straight_line():
    assert monthly_payment(120_000, 0.0, 120) == pytest.approx(1_000.0)


@pytest.mark.parametrize("months", [0, -12])
def test_non_positive_term_is_domain_error(months):
    with pytest.raises(ProjectionDomainError) as excinfo:
        monthly_payment(100_000, 0.005, months)
    assert excinfo.value.field == "loan_duration"


def test_loan_closes_at_term():
    series = amortize(400_000, 0.065 / 12, 360)
    assert len(series) == 360
    assert series.balance[-1] == pytest.approx(0.0, abs=1e-6)
    assert series.cumulative_principal[-1] == pytest.approx(400_000, rel=1e-9)
    total_paid = series.payment * 360
    assert series.cumulative_interest[-1] == pytest.approx(total_paid - 400_000, rel=1e-9)


def test_first_month_split():
    series = amortize(400_000, 0.065 / 12, 360)
    interest = 400_000 * 0.065 / 12
    assert series.cumulative_interest[0] == pytest.approx(interest)
    assert series.cumulative_principal[0] == pytest.approx(series.payment - interest)
    assert series.balance[0] == pytest.approx(400_000 - (series.payment - interest))


def test_months_after_term_hold_zero_balance_and_totals():
    series = amortize(100_000, 0.004, 60, horizon_months=120)
    assert len(series) == 120
    assert all(balance == 0.0 for balance in series.balance[60:])
    assert series.cumulative_principal[119] == series.cumulative_principal[59]
    assert series.cumulative_interest[119] == series.cumulative_interest[59]


def test_zero_principal_gives_zero_series():
    series = amortize(0.0, 0.005, 0, horizon_months=24)
    assert series.payment == 0.0
    assert series.balance == (0.0,) * 24
    assert series.balance_after(0) == 0.0


def test_balance_after_clamps_to_last_index():
    series = amortize(100_000, 0.004, 360)
    assert series.balance_after(0) == 100_000
    assert series.balance_after(12) == series.balance[11]
    assert series.balance_after(10_000) == series.balance[-1]


def test_horizon_must_be_positive():
    with pytest.raises(ProjectionDomainError):
        amortize(100_000, 0.004, 360, horizon_months=0)


@given(
    principal=st.floats(min_value=1_000, max_value=5_000_000),
    monthly_rate=st.floats(min_value=0.0001, max_value=0.02),
    months=st.integers(min_value=1, max_value=480),
)
def test_principal_portions_sum_to_principal(principal, monthly_rate, months):
    series = amortize(principal, monthly_rate, months, horizon_months=months)
    assert series.cumulative_principal[-1] == pytest.approx(principal, rel=1e-6)
    assert abs(series.balance[-1]) <= principal * 1e-6
