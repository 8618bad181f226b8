from __future__ import annotations

from typing import Iterable, List, Union

from .appreciation import value_at
from .costs import project_costs
from .investment import dollar_cost_average, simulate_keep_position
from .sale import sale_outcome
from .schemas import (
    DEFAULT_HORIZON_MONTHS,
    BuyVsRentConfig,
    BuyVsRentSnapshot,
    ComparisonResult,
    Projection,
    ScenarioConfig,
    SellVsKeepConfig,
    SellVsKeepSnapshot,
)


def project(config: ScenarioConfig, horizon_months: int = DEFAULT_HORIZON_MONTHS) -> Projection:
    costs = project_costs(config, horizon_months)
    keep = None
    if isinstance(config, SellVsKeepConfig):
        keep = simulate_keep_position(costs.buying, config.investment_return_rate)
    return Projection(config=config, costs=costs, keep=keep)


def compare_scenarios(
    config: ScenarioConfig,
    months: Iterable[int],
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
) -> ComparisonResult:
    """Project ``config`` once and take a net-worth snapshot at each month."""
    projection = project(config, horizon_months)
    snapshots = tuple(net_worth_at(projection, month) for month in months)
    return ComparisonResult(projection=projection, snapshots=snapshots)


def net_worth_at(
    projection: Projection, month: int
) -> Union[BuyVsRentSnapshot, SellVsKeepSnapshot]:
    if isinstance(projection.config, BuyVsRentConfig):
        return buy_vs_rent_snapshot(projection, month)
    return sell_vs_keep_snapshot(projection, month)


def buy_vs_rent_snapshot(projection: Projection, month: int) -> BuyVsRentSnapshot:
    config = projection.config
    if not isinstance(config, BuyVsRentConfig):
        raise TypeError(f"expected a buy-vs-rent projection, got {config.kind.value}")
    costs = projection.costs
    month = costs.clamp(month)

    asset_value = value_at(config.purchase_price, config.appreciation, month)
    loan_balance = costs.loan.balance_after(month)

    sale = None
    if config.selling.enabled:
        sale = sale_outcome(config, month, costs.loan)
        buying_net_worth = sale.net_proceeds
    else:
        buying_net_worth = asset_value - loan_balance

    # Renter invests the down payment (less deposit) and every month's saving.
    savings = [b - r for b, r in zip(costs.buying, costs.renting)]
    initial = config.down_payment - config.renting.deposit
    recoverable = config.renting.recoverable_deposit
    renting_net_worth = (
        dollar_cost_average(initial, savings, config.investment_return_rate, month)
        + recoverable
    )
    cumulative_savings = initial + sum(savings[:month])

    return BuyVsRentSnapshot(
        month=month,
        asset_value=asset_value,
        loan_balance=loan_balance,
        buying_net_worth=buying_net_worth,
        renting_net_worth=renting_net_worth,
        cumulative_savings=cumulative_savings,
        market_return=renting_net_worth - cumulative_savings - recoverable,
        buying_expenditure=config.down_payment + sum(costs.buying[:month]),
        renting_expenditure=config.renting.deposit + sum(costs.renting[:month]),
        sale=sale,
    )


def sell_vs_keep_snapshot(projection: Projection, month: int) -> SellVsKeepSnapshot:
    config = projection.config
    if not isinstance(config, SellVsKeepConfig):
        raise TypeError(f"expected a sell-vs-keep projection, got {config.kind.value}")
    costs = projection.costs
    keep = projection.keep
    if keep is None:
        keep = simulate_keep_position(costs.buying, config.investment_return_rate)
    month = costs.clamp(month)

    # Sell arm: today's proceeds are invested and pay any post-sale rent.
    sold_today = sale_outcome(config, 0, costs.loan)
    deposit = config.renting.deposit if config.renting else 0.0
    recoverable = config.renting.recoverable_deposit if config.renting else 0.0
    contributions: List[float] = [-rent for rent in costs.renting]
    sell_net_worth = (
        dollar_cost_average(
            sold_today.net_proceeds - deposit,
            contributions,
            config.investment_return_rate,
            month,
        )
        + recoverable
    )

    keep_sale = sale_outcome(config, month, costs.loan)
    index = month - 1
    return SellVsKeepSnapshot(
        month=month,
        asset_value=keep_sale.sale_price,
        sell_net_worth=sell_net_worth,
        keep_net_worth=keep_sale.net_proceeds + keep.net_after(month),
        keep_sale=keep_sale,
        keep_invested=keep.invested[index] if month > 0 else 0.0,
        keep_real_cost=keep.real_cost[index] if month > 0 else 0.0,
    )
