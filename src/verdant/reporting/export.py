# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""CSV export of a building's unit table."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import date

from verdant.data.models import UnitView

CSV_HEADERS = [
    "Unit ID",
    "Building Type",
    "Tenant Name",
    "Area (sqft)",
    "Occupancy",
    "Medical Accommodation",
    "Baseline CO2e (kg)",
    "Current CO2e (kg)",
    "Quota (kg)",
    "Usage vs Quota (%)",
    "CPI Score",
    "Discount (%)",
    "Discount Tier",
]


def export_filename(building_id: str, on: date | None = None) -> str:
    on = on or date.today()
    return f"verdant-report-{building_id}-{on.isoformat()}.csv"


def unit_row(view: UnitView) -> list[str]:
    return [
        view.id,
        view.building_type.value,
        view.tenant.name if view.tenant else "N/A",
        f"{view.floor_area:g}",
        str(view.occupancy_count),
        "Yes" if view.medical_accommodation else "No",
        f"{view.baseline_emissions_kg:.2f}",
        f"{view.current_period_emissions_kg:.2f}",
        f"{view.target_kg:.2f}",
        f"{view.usage_vs_quota_pct:.1f}",
        str(view.performance_score),
        f"{view.discount_fraction * 100:.1f}",
        view.discount_tier,
    ]


def render_csv(views: Iterable[UnitView]) -> str:
    """Header plus one fully-quoted row per unit, newline separated."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for view in views:
        writer.writerow(unit_row(view))
    return buffer.getvalue()
