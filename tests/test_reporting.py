# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for CSV export, ASCII charts and the terminal renderer."""

from __future__ import annotations

import csv
import io
from datetime import date

from rich.console import Console

from verdant.data.models import BuildingType, TenantContact, UnitView
from verdant.reporting.ascii_charts import mini_gauge, score_gauge, sparkline, usage_bar
from verdant.reporting.export import CSV_HEADERS, export_filename, render_csv, unit_row
from verdant.reporting.terminal import TerminalRenderer


def _view(**overrides) -> UnitView:
    fields = {
        "id": "unit_101",
        "building_type": BuildingType.residential,
        "floor_area": 600.0,
        "occupancy_count": 1,
        "medical_accommodation": False,
        "baseline_emissions_kg": 200.0,
        "quota_emissions_kg": 180.0,
        "current_period_emissions_kg": 97.2,
        "target_kg": 180.0,
        "usage_vs_quota_pct": 54.0,
        "performance_score": 92,
        "discount_fraction": 0.05,
        "discount_tier": "Tier 1 (5%)",
        "tenant": TenantContact(name="Avery Morgan", email="avery@example.com"),
    }
    fields.update(overrides)
    return UnitView(**fields)


class TestCSVExport:

    def test_filename(self):
        assert export_filename("bldg_01", date(2025, 3, 20)) == (
            "verdant-report-bldg_01-2025-03-20.csv"
        )

    def test_row_formatting(self):
        assert unit_row(_view()) == [
            "unit_101", "Residential", "Avery Morgan", "600", "1", "No",
            "200.00", "97.20", "180.00", "54.0", "92", "5.0", "Tier 1 (5%)",
        ]

    def test_vacant_row(self):
        row = unit_row(_view(tenant=None, medical_accommodation=True))
        assert row[2] == "N/A"
        assert row[5] == "Yes"

    def test_every_cell_quoted(self):
        text = render_csv([_view()])
        header, row = text.splitlines()
        assert header == ",".join(f'"{h}"' for h in CSV_HEADERS)
        assert row.startswith('"unit_101","Residential","Avery Morgan"')

    def test_round_trips_through_csv_reader(self):
        rows = list(csv.reader(io.StringIO(render_csv([_view(), _view(id="unit_102")]))))
        assert rows[0] == CSV_HEADERS
        assert [r[0] for r in rows[1:]] == ["unit_101", "unit_102"]

    def test_empty_building(self):
        assert render_csv([]).strip() == ",".join(f'"{h}"' for h in CSV_HEADERS)


class TestASCIICharts:

    def test_score_gauge_color(self):
        assert score_gauge(92).startswith("[green]")
        assert score_gauge(30).startswith("[red]")
        assert score_gauge(92).endswith("92/100")

    def test_gauge_clamped(self):
        assert mini_gauge(150).endswith(" 100")

    def test_usage_bar_inverted(self):
        assert usage_bar(40).startswith("[green]")
        assert usage_bar(90).startswith("[red]")
        assert usage_bar(130).endswith("130.0%")

    def test_sparkline(self):
        assert sparkline([]) == ""
        assert len(sparkline(list(range(60)), width=30)) == 30


class TestTerminalRenderer:

    def _render(self, fn, *args) -> str:
        console = Console(file=io.StringIO(), width=140, no_color=True)
        fn(TerminalRenderer(console), *args)
        return console.file.getvalue()

    def test_units_table(self):
        output = self._render(TerminalRenderer.render_units, [_view(), _view(id="unit_511", tenant=None)])
        assert "UNITS" in output
        assert "unit_101" in output
        assert "vacant" in output
