"""Plain-text report tables for projection results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .data_sources import TICKERS, MarketData, market_averages
from .parsing import format_duration
from .schemas import BuyVsRentSnapshot, Projection, SellVsKeepSnapshot

BASE_PERIOD_YEARS = tuple(range(1, 11))
EXTENDED_PERIOD_YEARS = (15, 20, 30)


@dataclass(frozen=True)
class Period:
    label: str
    months: int
    loan_term: bool = False


def canonical_periods(loan_term_months: int = 0, include_extended: bool = False) -> List[Period]:
    """Yearly report periods, with the loan term slotted in at its position.

    A standard period equal to the loan term is replaced by the loan-term row.
    """
    years = BASE_PERIOD_YEARS + (EXTENDED_PERIOD_YEARS if include_extended else ())
    term = Period(f"X {format_duration(loan_term_months)}", loan_term_months, True) if loan_term_months > 0 else None

    periods: List[Period] = []
    for year in years:
        months = year * 12
        if term is not None and term.months <= months:
            periods.append(term)
            if term.months == months:
                term = None
                continue
            term = None
        periods.append(Period(f"{year}y", months))
    if term is not None:
        periods.append(term)
    return periods


def format_currency(amount: float, full: bool = False) -> str:
    """Compact K/M format, or ``$1,234.5`` when ``full`` is set."""
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    if full:
        return f"{sign}${amount:,.1f}"
    if amount >= 1_000_000:
        return f"{sign}{amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"{sign}{amount / 1_000:.1f}K"
    return f"{sign}{amount:.1f}"


def render_table(title: str, rows: Sequence[Sequence[str]], notes: str = "") -> str:
    """First row is the header; numeric columns are right-aligned."""
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]

    def line(row: Sequence[str]) -> str:
        cells = [
            cell.ljust(widths[col]) if col == 0 else cell.rjust(widths[col])
            for col, cell in enumerate(row)
        ]
        return "| " + " | ".join(cells) + " |"

    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    out = ["", title, rule, line(rows[0]), rule]
    out.extend(line(row) for row in rows[1:])
    out.append(rule)
    if notes:
        out.append(f"  {notes}")
    return "\n".join(out)


def expenditure_table(
    snapshots: Sequence[BuyVsRentSnapshot], periods: Sequence[Period], inflation_rate: float, full: bool = False
) -> str:
    rows = [["Period", "Buying Expend.", "Renting Expend.", "Difference"]]
    for period, snap in zip(periods, snapshots):
        rows.append([
            f"EXP {period.label}",
            format_currency(snap.buying_expenditure, full),
            format_currency(snap.renting_expenditure, full),
            format_currency(snap.buying_expenditure - snap.renting_expenditure, full),
        ])
    notes = f"Note: recurring costs (insurance, taxes, rent, HOA) are inflated annually at {inflation_rate:.1f}%."
    return render_table("TOTAL EXPENDITURE COMPARISON", rows, notes)


def amortization_table(projection: Projection, periods: Sequence[Period], full: bool = False) -> str:
    loan = projection.costs.loan
    rows = [["Period", "Principal Paid", "Interest Paid", "Loan Balance"]]
    for period in periods:
        index = loan.index_for(period.months)
        rows.append([
            f"LOAN {period.label}",
            format_currency(loan.cumulative_principal[index], full),
            format_currency(loan.cumulative_interest[index], full),
            format_currency(loan.balance[index], full),
        ])
    notes = (
        f"Note: fixed monthly payment of {format_currency(loan.payment, full)}; "
        "early payments are mostly interest."
    )
    return render_table("LOAN AMORTIZATION DETAILS", rows, notes)


def sale_table(
    snapshots: Sequence[Union[BuyVsRentSnapshot, SellVsKeepSnapshot]],
    periods: Sequence[Period], full: bool = False
) -> str:
    rows = [["Period", "Sale Price", "Selling Cost", "Loan Payoff", "Cap Gains", "Tax", "Net Proceeds"]]
    for period, snap in zip(periods, snapshots):
        sale = snap.keep_sale if isinstance(snap, SellVsKeepSnapshot) else snap.sale
        if sale is None:
            continue
        rows.append([
            f"SALE {period.label}",
            format_currency(sale.sale_price, full),
            format_currency(sale.selling_costs, full),
            format_currency(sale.loan_payoff, full),
            format_currency(sale.capital_gain, full),
            format_currency(sale.tax, full),
            format_currency(sale.net_proceeds, full),
        ])
    notes = (
        "Note: appreciation compounds year by year; the last rate applies to all "
        "remaining years. Capital gains are net of selling costs."
    )
    return render_table("SALE PROCEEDS ANALYSIS", rows, notes)


def buy_vs_rent_table(
    snapshots: Sequence[BuyVsRentSnapshot], periods: Sequence[Period], investment_rate: float, full: bool = False
) -> str:
    rows = [["Period", "Asset Value", "Buying NW", "Cum Savings", "Market Return", "Renting NW", "RENT - BUY"]]
    for period, snap in zip(periods, snapshots):
        rows.append([
            f"NET {period.label}",
            format_currency(snap.asset_value, full),
            format_currency(snap.buying_net_worth, full),
            format_currency(snap.cumulative_savings, full),
            format_currency(snap.market_return, full),
            format_currency(snap.renting_net_worth, full),
            format_currency(snap.difference, full),
        ])
    notes = (
        f"Note: savings are invested monthly (dollar-cost averaging) at {investment_rate:.0f}% a year. "
        "Renting NW includes 75% of the deposit. Positive RENT - BUY means renting wins."
    )
    return render_table("NET WORTH PROJECTIONS: BUY VS RENT", rows, notes)


def sell_vs_keep_table(
    snapshots: Sequence[SellVsKeepSnapshot], periods: Sequence[Period], full: bool = False
) -> str:
    rows = [["Period", "Asset Value", "Keep Invested", "Keep Real Cost", "Keep NW", "Sell NW", "SELL - KEEP"]]
    for period, snap in zip(periods, snapshots):
        rows.append([
            f"NET {period.label}",
            format_currency(snap.asset_value, full),
            format_currency(snap.keep_invested, full),
            format_currency(snap.keep_real_cost, full),
            format_currency(snap.keep_net_worth, full),
            format_currency(snap.sell_net_worth, full),
            format_currency(snap.difference, full),
        ])
    notes = (
        "Note: Keep NW = proceeds if sold then + invested surplus - uncovered costs. "
        "Sell NW = today's proceeds invested monthly. Positive SELL - KEEP means selling wins."
    )
    return render_table("NET WORTH PROJECTIONS: SELL VS KEEP", rows, notes)


def market_table(data: MarketData, current_year: int) -> Optional[str]:
    voo = data.returns.get("VOO", {})
    years = sorted(year for year in voo if int(year) >= current_year - 10)
    if not years:
        return None

    rows = [["Period"] + list(TICKERS) + ["60/40 Mix"]]
    for year in years:
        values = [data.returns.get(ticker, {}).get(year, 0.0) for ticker in TICKERS]
        mix = values[2] * 0.6 + values[3] * 0.4
        rows.append([f"MRKT {year}"] + [f"{v:.2f}%" for v in values] + [f"{mix:.2f}%"])

    averages = market_averages(data, current_year)
    if averages is not None:
        rows.append(
            ["MRKT Avg"]
            + [f"{v:.2f}%" for v in (averages.voo, averages.qqq, averages.vti, averages.bnd)]
            + [f"{averages.mix_60_40:.2f}%"]
        )
    return render_table("MARKET DATA", rows)


def market_summary(data: MarketData, current_year: int) -> Optional[str]:
    averages = market_averages(data, current_year)
    if averages is None:
        return None
    return (
        f"Market Averages (10y): VOO {averages.voo:.1f}%, QQQ {averages.qqq:.1f}%, "
        f"VTI {averages.vti:.1f}%, BND {averages.bnd:.1f}%, 60/40 {averages.mix_60_40:.1f}%"
    )
