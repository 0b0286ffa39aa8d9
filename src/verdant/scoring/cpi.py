# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Carbon Performance Index (CPI) formulas.

Two strategies are available:

``quota_plateau`` (default)
    Usage of the target up to 50% scores a perfect 100.  Above that,
    every additional percentage point costs two points, reaching 0 at
    100% usage.  Over-consumption is clamped at 0.

``normalized_improvement``
    Actual and target emissions are both divided by floor area and the
    occupancy factor; the score is the fractional improvement of actual
    over target, scaled to 0-100.

Degenerate targets (<= 0) score 0 under both strategies.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from verdant.scoring.emissions import normalize_emissions

PLATEAU_USAGE_PCT = 50.0
PENALTY_PER_POINT = 2.0


class ScoringStrategy(str, Enum):
    """Selectable CPI formula."""

    quota_plateau = "quota_plateau"
    normalized_improvement = "normalized_improvement"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going toward +infinity."""
    return int(math.floor(value + 0.5))


def resolve_target(baseline_kg: float, quota_kg: Optional[float]) -> float:
    """The quota when set and positive, otherwise the baseline."""
    if quota_kg is not None and quota_kg > 0:
        return quota_kg
    return baseline_kg


def usage_percentage(period_emissions_kg: float, target_kg: float) -> float:
    """Period emissions as a percentage of the target (0.0 for target <= 0)."""
    if target_kg <= 0:
        return 0.0
    return (period_emissions_kg / target_kg) * 100


def usage_vs_quota_pct(current_emissions_kg: float, target_kg: float) -> float:
    """User-facing usage percentage, rounded to one decimal."""
    return round(usage_percentage(current_emissions_kg, target_kg), 1)


def plateau_score(period_emissions_kg: float, target_kg: float) -> int:
    if target_kg <= 0:
        return 0
    usage = usage_percentage(period_emissions_kg, target_kg)
    if usage <= PLATEAU_USAGE_PCT:
        return 100
    return max(0, round_half_up(200 - PENALTY_PER_POINT * usage))


def improvement_score(
    period_emissions_kg: float,
    target_kg: float,
    floor_area: float,
    occupancy_count: int,
    medical_flag: bool,
) -> int:
    normalized_target = normalize_emissions(
        target_kg, floor_area, occupancy_count, medical_flag
    )
    if normalized_target <= 0:
        return 0
    normalized_actual = normalize_emissions(
        period_emissions_kg, floor_area, occupancy_count, medical_flag
    )
    improvement = (normalized_target - normalized_actual) / normalized_target
    return round_half_up(100 * min(1.0, max(0.0, improvement)))


def compute_score(
    period_emissions_kg: float,
    baseline_kg: float,
    quota_kg: Optional[float] = None,
    *,
    strategy: ScoringStrategy = ScoringStrategy.quota_plateau,
    floor_area: float = 1.0,
    occupancy_count: int = 1,
    medical_flag: bool = False,
) -> int:
    """Compute the 0-100 Carbon Performance Index.

    Args:
        period_emissions_kg: Emissions aggregated over the active period.
        baseline_kg: The unit's baseline, used when no positive quota is set.
        quota_kg: Optional quota override.
        strategy: Formula to apply.  Area and occupancy arguments are only
            read by ``normalized_improvement``.

    Returns:
        An integer score in ``[0, 100]``.  Never raises for numeric edge
        cases.
    """
    target = resolve_target(baseline_kg, quota_kg)
    if strategy == ScoringStrategy.normalized_improvement:
        return improvement_score(
            period_emissions_kg, target, floor_area, occupancy_count, medical_flag
        )
    return plateau_score(period_emissions_kg, target)
