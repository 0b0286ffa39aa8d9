# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Main CLI application for verdant."""

from __future__ import annotations

import logging
from datetime import date

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from verdant import __version__
from verdant.config import Settings, load_settings
from verdant.data.ingestion import ingest_file
from verdant.data.seed import DEMO_BUILDING_ID
from verdant.data.store import TenantNotFoundError, UnitNotFoundError
from verdant.reporting.export import export_filename
from verdant.reporting.terminal import TerminalRenderer
from verdant.service import PortfolioService

_seed_option = click.option(
    "--seed", "-s", type=int, default=None, help="Random seed for reproducibility"
)
_readings_option = click.option(
    "--readings", "-r", type=click.Path(dir_okay=False), default=None,
    help="Extra meter readings to ingest (CSV or JSON)",
)
_building_option = click.option(
    "--building", "-b", default=DEMO_BUILDING_ID, show_default=True,
    help="Building identifier",
)


def _fail(console: Console, message: str) -> None:
    console.print(f"[red]{message}[/]")
    raise SystemExit(1)


def _build_service(
    ctx: click.Context, seed: int | None, readings: str | None
) -> PortfolioService:
    """Seed the demo portfolio, ingest extra readings, and run the batch."""
    console: Console = ctx.obj["console"]
    settings: Settings = ctx.obj["settings"]

    extra = None
    if readings:
        try:
            extra = ingest_file(readings)
        except (FileNotFoundError, ValueError) as exc:
            _fail(console, str(exc))
        console.print(f"  [green]Ingested:[/] {len(extra)} readings from {readings}")

    with console.status("[bold cyan]Scoring portfolio..."):
        return PortfolioService.demo(seed=seed, settings=settings, extra_readings=extra)


@click.group()
@click.version_option(version=__version__)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Show log output")
@click.option(
    "--config", "-c", type=click.Path(dir_okay=False), default=None,
    help="Settings YAML file (defaults to $VERDANT_CONFIG)",
)
@click.pass_context
def cli(ctx: click.Context, no_color: bool, verbose: bool, config: str | None) -> None:
    """verdant: Carbon Performance Index and rent-discount engine

    Score rental units against their monthly emissions quota and map the
    score to a rent-discount tier:

    \b
      Tier 1 (CPI >= 90):  5% discount
      Tier 2 (CPI >= 70):  2% discount
      Tier 3 (CPI >= 50):  0.5% discount
    """
    ctx.ensure_object(dict)
    console = Console(no_color=no_color)
    ctx.obj["console"] = console

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )

    try:
        ctx.obj["settings"] = load_settings(config)
    except (FileNotFoundError, ValidationError) as exc:
        _fail(console, f"Invalid configuration: {exc}")


@cli.command()
@_seed_option
@_readings_option
@click.pass_context
def recompute(ctx: click.Context, seed: int | None, readings: str | None) -> None:
    """Run the batch recompute and show the tier distribution."""
    console: Console = ctx.obj["console"]
    service = _build_service(ctx, seed, readings)
    summary = service.recompute()
    TerminalRenderer(console).render_recompute(summary)


@cli.command()
@_building_option
@_seed_option
@_readings_option
@click.pass_context
def overview(
    ctx: click.Context, building: str, seed: int | None, readings: str | None
) -> None:
    """Show the landlord overview for a building."""
    console: Console = ctx.obj["console"]
    service = _build_service(ctx, seed, readings)
    TerminalRenderer(console).render_overview(service.building_overview(building))


@cli.command()
@_building_option
@_seed_option
@_readings_option
@click.pass_context
def units(
    ctx: click.Context, building: str, seed: int | None, readings: str | None
) -> None:
    """List units with their score, usage and discount tier."""
    console: Console = ctx.obj["console"]
    service = _build_service(ctx, seed, readings)
    TerminalRenderer(console).render_units(service.list_units(building))


@cli.command()
@click.argument("tenant_id")
@click.option(
    "--suggestions/--no-suggestions", default=True, help="Show saving suggestions"
)
@_seed_option
@_readings_option
@click.pass_context
def tenant(
    ctx: click.Context,
    tenant_id: str,
    suggestions: bool,
    seed: int | None,
    readings: str | None,
) -> None:
    """Show a tenant's dashboard: score, progress, rewards."""
    console: Console = ctx.obj["console"]
    service = _build_service(ctx, seed, readings)
    try:
        summary = service.tenant_summary(tenant_id)
        usage = service.tenant_usage(tenant_id)
        tips = service.suggestions(tenant_id) if suggestions else None
    except (TenantNotFoundError, UnitNotFoundError) as exc:
        _fail(console, str(exc))
    TerminalRenderer(console).render_tenant(summary, usage, tips)


@cli.command("set-quota")
@click.argument("unit_id")
@click.option("--quota", "-q", type=click.FloatRange(min=0), default=None,
              help="New monthly quota in kg CO2e")
@click.option("--clear", is_flag=True, help="Remove the quota so the baseline applies")
@click.option("--medical/--no-medical", default=None, help="Set the medical accommodation flag")
@_seed_option
@_readings_option
@click.pass_context
def set_quota(
    ctx: click.Context,
    unit_id: str,
    quota: float | None,
    clear: bool,
    medical: bool | None,
    seed: int | None,
    readings: str | None,
) -> None:
    """Edit a unit's quota or medical flag and re-score it."""
    console: Console = ctx.obj["console"]
    if quota is not None and clear:
        _fail(console, "--quota and --clear are mutually exclusive")
    if quota is None and not clear and medical is None:
        _fail(console, "Nothing to change: pass --quota, --clear or --medical/--no-medical")

    service = _build_service(ctx, seed, readings)
    changes = {}
    if quota is not None or clear:
        changes["quota_emissions_kg"] = quota
    if medical is not None:
        changes["medical_accommodation"] = medical

    try:
        view = service.update_unit(unit_id, **changes)
    except UnitNotFoundError as exc:
        _fail(console, str(exc))

    console.print(
        f"  [green]Updated:[/] {view.id} target {view.target_kg:,.2f} kg, "
        f"CPI {view.performance_score}, discount {view.discount_tier}"
    )
    TerminalRenderer(console).render_units([view])


@cli.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Output CSV path (defaults to verdant-report-<building>-<date>.csv)")
@_building_option
@_seed_option
@_readings_option
@click.pass_context
def export(
    ctx: click.Context,
    output: str | None,
    building: str,
    seed: int | None,
    readings: str | None,
) -> None:
    """Export a building's unit report as CSV."""
    console: Console = ctx.obj["console"]
    service = _build_service(ctx, seed, readings)
    path = output or export_filename(building, date.today())

    with open(path, "w", newline="") as f:
        f.write(service.export_csv(building))
    console.print(f"  [green]CSV report exported to:[/green] {path}")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
@_seed_option
@_readings_option
@click.pass_context
def serve(
    ctx: click.Context, host: str, port: int, seed: int | None, readings: str | None
) -> None:
    """Start the REST API server."""
    console: Console = ctx.obj["console"]
    service = _build_service(ctx, seed, readings)
    console.print(f"[bold cyan]Starting API server on {host}:{port}...[/]")

    from verdant.api.server import create_app
    import uvicorn

    app = create_app(service=service, settings=ctx.obj["settings"])
    uvicorn.run(app, host=host, port=port)
