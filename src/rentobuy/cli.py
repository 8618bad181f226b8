from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import typer

from .data_sources import MARKET_DATA_FILE, MarketData, MarketDataCache, load_market_data
from .errors import ProjectionDomainError
from .inputs import FIELDS, build_config
from .model import compare_scenarios
from .reporting import (
    amortization_table,
    buy_vs_rent_table,
    canonical_periods,
    expenditure_table,
    market_summary,
    market_table,
    render_table,
    sale_table,
    sell_vs_keep_table,
)
from .schemas import ScenarioConfig, ScenarioKind
from .storage import InputStore

logger = logging.getLogger(__name__)

app = typer.Typer(help="Compare buying against renting, or selling against keeping.")


def _default_state_dir() -> Path:
    return Path(os.environ.get("RENTOBUY_HOME", "."))


def _default_market_data() -> bool:
    return os.environ.get("RENTOBUY_MARKET_DATA", "1").strip().lower() not in ("0", "false", "no")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _prompt_inputs(kind: ScenarioKind, saved: Dict[str, str], market_info: Optional[str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    group = None
    for form_field in FIELDS[kind]:
        if form_field.group != group:
            group = form_field.group
            typer.secho(f"\n{group}", bold=True)
        default = saved.get(form_field.key, "")
        if form_field.toggle:
            checked = default.strip().lower() in ("1", "y", "yes", "true", "on")
            values[form_field.key] = "1" if typer.confirm(form_field.label, default=checked) else "0"
            continue
        if form_field.key == "investment_return_rate" and market_info:
            typer.echo(f"  {market_info}")
        values[form_field.key] = typer.prompt(
            form_field.label, default=default, show_default=bool(default)
        )
    return values


def _input_summary(kind: ScenarioKind, inputs: Dict[str, str]) -> str:
    rows: List[List[str]] = [["Parameter", "Value"]]
    for form_field in FIELDS[kind]:
        value = inputs.get(form_field.key, "")
        if form_field.toggle:
            value = "Yes" if value.strip().lower() in ("1", "y", "yes", "true", "on") else "No"
        rows.append([form_field.label, value or "0"])
    return render_table("INPUT PARAMETERS", rows)


def _report(config: ScenarioConfig, full: bool) -> None:
    periods = canonical_periods(
        config.loan.effective_term_months, config.economic.include_extended_periods
    )
    result = compare_scenarios(config, [period.months for period in periods])
    snapshots = result.snapshots

    if config.kind is ScenarioKind.BUY_VS_RENT:
        typer.echo(expenditure_table(snapshots, periods, config.economic.inflation_rate, full))
    if config.loan.has_loan:
        typer.echo(amortization_table(result.projection, periods, full))
    if config.selling.enabled:
        typer.echo(sale_table(snapshots, periods, full))
    if config.kind is ScenarioKind.BUY_VS_RENT:
        typer.echo(buy_vs_rent_table(snapshots, periods, config.investment_return_rate, full))
    else:
        typer.echo(sell_vs_keep_table(snapshots, periods, full))
    typer.echo(f"\nBetter outcome at the last period: {result.better_option}")


def _run(
    kind: ScenarioKind,
    *,
    use_defaults: bool,
    full_numbers: bool,
    profile: Optional[str],
    save_profile: Optional[str],
    market_data: bool,
    state_dir: Path,
    verbose: bool,
) -> None:
    _configure_logging(verbose)
    store = InputStore(state_dir)
    current_year = date.today().year

    data = MarketData()
    if market_data:
        data = load_market_data(MarketDataCache(state_dir / MARKET_DATA_FILE))
    market_info = market_summary(data, current_year)

    if profile:
        try:
            saved = store.load_profile(profile, kind)
        except (FileNotFoundError, ValueError) as exc:
            typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
    else:
        saved = store.load_inputs(kind)

    if use_defaults:
        if not saved:
            typer.secho(
                "Error: --defaults used but no saved inputs found. Run without the flag first.",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)
        inputs = saved
    else:
        inputs = _prompt_inputs(kind, saved, market_info)
        store.save_inputs(kind, inputs)

    if save_profile:
        path = store.save_profile(save_profile, kind, inputs)
        logger.info("Saved profile to %s", path)

    try:
        config = build_config(kind, inputs)
    except ProjectionDomainError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(_input_summary(kind, inputs))
    if market_info:
        typer.echo(f"  {market_info}")
    table = market_table(data, current_year)
    if table:
        typer.echo(table)
    _report(config, full_numbers)


_DEFAULTS_OPTION = typer.Option(False, "--defaults", help="Use saved inputs without prompting.")
_FULL_OPTION = typer.Option(False, "--full-numbers", help="Show full numbers instead of K/M.")
_PROFILE_OPTION = typer.Option(None, help="Load inputs from a named profile.")
_SAVE_PROFILE_OPTION = typer.Option(None, help="Save the inputs under this profile name.")
_MARKET_OPTION = typer.Option(
    default_factory=_default_market_data,
    help="Fetch historical market averages (env RENTOBUY_MARKET_DATA=0 disables).",
)
_STATE_DIR_OPTION = typer.Option(
    default_factory=_default_state_dir,
    help="Directory for saved inputs, profiles and the market data cache (env RENTOBUY_HOME).",
)
_VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


@app.command("buy-vs-rent")
def buy_vs_rent(
    use_defaults: bool = _DEFAULTS_OPTION,
    full_numbers: bool = _FULL_OPTION,
    profile: Optional[str] = _PROFILE_OPTION,
    save_profile: Optional[str] = _SAVE_PROFILE_OPTION,
    market_data: bool = _MARKET_OPTION,
    state_dir: Path = _STATE_DIR_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """
    Project buying an asset with a loan against renting and investing the difference.
    """
    _run(
        ScenarioKind.BUY_VS_RENT,
        use_defaults=use_defaults,
        full_numbers=full_numbers,
        profile=profile,
        save_profile=save_profile,
        market_data=market_data,
        state_dir=state_dir,
        verbose=verbose,
    )


@app.command("sell-vs-keep")
def sell_vs_keep(
    use_defaults: bool = _DEFAULTS_OPTION,
    full_numbers: bool = _FULL_OPTION,
    profile: Optional[str] = _PROFILE_OPTION,
    save_profile: Optional[str] = _SAVE_PROFILE_OPTION,
    market_data: bool = _MARKET_OPTION,
    state_dir: Path = _STATE_DIR_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """
    Project selling an owned asset today against keeping it.
    """
    _run(
        ScenarioKind.SELL_VS_KEEP,
        use_defaults=use_defaults,
        full_numbers=full_numbers,
        profile=profile,
        save_profile=save_profile,
        market_data=market_data,
        state_dir=state_dir,
        verbose=verbose,
    )


@app.command()
def profiles(state_dir: Path = _STATE_DIR_OPTION) -> None:
    """List saved input profiles."""
    names = InputStore(state_dir).list_profiles()
    if not names:
        typer.echo("No saved profiles.")
        return
    for name in names:
        typer.echo(name)


if __name__ == "__main__":
    app()
