"""Rich terminal report renderer.

Composes Rich tables, panels, and ASCII charts into the landlord and
tenant views printed by the CLI.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from verdant.data.models import (
    BuildingOverview,
    RecomputeSummary,
    Suggestion,
    TenantSummary,
    TenantUsage,
    UnitView,
)
from verdant.reporting.ascii_charts import mini_gauge, score_gauge, sparkline, usage_bar


def _tier_color(label: str) -> str:
    if label.startswith("Tier 1"):
        return "green"
    if label.startswith("Tier 2"):
        return "cyan"
    if label.startswith("Tier 3"):
        return "yellow"
    return "red"


class TerminalRenderer:
    """Renders portfolio views to the terminal using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_recompute(self, summary: RecomputeSummary) -> None:
        self.console.print()
        self.console.print(Rule("[bold]RECOMPUTE[/bold]"))
        self.console.print(
            f"  Period starting [bold]{summary.period_start:%Y-%m-%d}[/bold]: "
            f"{summary.unit_count} units, {summary.reading_count} readings, "
            f"{summary.tenants_synced} tenants synced"
        )
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Tier", min_width=8)
        table.add_column("Units", justify="right")
        for tier in ("Tier 1", "Tier 2", "Tier 3", "None"):
            color = _tier_color(tier)
            table.add_row(
                f"[{color}]{tier}[/{color}]", str(summary.tier_counts.get(tier, 0))
            )
        self.console.print(table)

    def render_overview(self, overview: BuildingOverview) -> None:
        """Render the building header, headline metrics, and unit table."""
        header = Text()
        header.append("CARBON PERFORMANCE", style="bold cyan")
        header.append(" | ", style="dim")
        header.append(overview.building_id, style="bold")
        header.append(f" | {overview.total_units} units", style="")
        header.append(f" | period from {overview.period_start:%Y-%m-%d}", style="dim")

        self.console.print()
        self.console.print(Panel(header, title="Building Overview"))
        self.console.print()
        self.console.print(
            f"  [bold]AVERAGE CPI[/bold]: {score_gauge(overview.average_score, width=30)}"
        )
        self.console.print(
            f"  [bold]CO2e THIS MONTH[/bold]: {overview.total_co2e_this_month:,.2f} kg"
        )
        self.render_units(overview.units)

    def render_units(self, units: list[UnitView]) -> None:
        self.console.print()
        self.console.print(Rule("[bold]UNITS[/bold]"))

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Unit", style="bold")
        table.add_column("Tenant")
        table.add_column("Current kg", justify="right")
        table.add_column("Target kg", justify="right")
        table.add_column("Usage", min_width=20)
        table.add_column("CPI", min_width=14)
        table.add_column("Tier", justify="center")

        for view in units:
            color = _tier_color(view.discount_tier)
            table.add_row(
                view.id,
                view.tenant.name if view.tenant else "[dim]vacant[/dim]",
                f"{view.current_period_emissions_kg:,.1f}",
                f"{view.target_kg:,.1f}",
                usage_bar(view.usage_vs_quota_pct, width=10),
                mini_gauge(view.performance_score),
                f"[{color}]{view.discount_tier}[/{color}]",
            )

        self.console.print(table)

    def render_tenant(
        self,
        summary: TenantSummary,
        usage: TenantUsage | None = None,
        suggestions: list[Suggestion] | None = None,
    ) -> None:
        color = _tier_color(summary.discount_tier)
        rewards = summary.rewards

        table = Table(show_header=False, padding=(0, 2), box=None)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Eco Score", score_gauge(summary.performance_score, width=20))
        table.add_row(
            "This month",
            f"{summary.current_period_emissions_kg:,.2f} / {summary.target_kg:,.2f} kg CO2e",
        )
        table.add_row("Progress", usage_bar(summary.progress_pct, width=20))
        table.add_row(
            "Discount",
            f"[{color}]{summary.discount_fraction:.1%} ({summary.discount_tier})[/{color}]",
        )
        table.add_row("Saved so far", f"${rewards.lifetime_saved_estimate:,.2f}")
        table.add_row("Streak", f"{rewards.streak_days} days")
        table.add_row("Badges", ", ".join(rewards.badges) or "[dim]none yet[/dim]")
        if usage and usage.readings:
            table.add_row(
                "Daily kg CO2e",
                sparkline([p.emissions_kg for p in usage.readings], width=30),
            )

        self.console.print()
        self.console.print(
            Panel(table, title=f"[bold]{summary.tenant_id}[/bold] | {summary.unit_id}")
        )

        breakdown = Table(show_header=True, header_style="bold", padding=(0, 1))
        breakdown.add_column("End use")
        breakdown.add_column("kg CO2e", justify="right")
        for name, value in summary.breakdown.model_dump().items():
            breakdown.add_row(name.upper() if name == "hvac" else name.title(), f"{value:,.2f}")
        self.console.print(breakdown)

        if suggestions:
            self.render_suggestions(suggestions)

    def render_suggestions(self, suggestions: list[Suggestion]) -> None:
        self.console.print()
        self.console.print(Rule("[bold]SUGGESTIONS[/bold]"))
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("ID", style="dim")
        table.add_column("Suggestion", min_width=30)
        table.add_column("Saves", justify="right")
        table.add_column("Difficulty", justify="center")
        table.add_column("XP", justify="right")
        for s in suggestions:
            diff_color = {"Easy": "green", "Medium": "yellow", "Hard": "red"}.get(
                s.difficulty, "white"
            )
            table.add_row(
                s.id,
                s.title,
                f"{s.impact_kg:,.1f} kg",
                f"[{diff_color}]{s.difficulty}[/{diff_color}]",
                str(s.xp),
            )
        self.console.print(table)
