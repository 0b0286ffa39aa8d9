# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Batch scoring orchestrator.

Determines the active billing period, aggregates each unit's in-period
readings, and writes emissions, score and discount back onto the unit.
The full-population pass and the single-unit pass share one scoring
path, so both yield identical results for the same period start.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from verdant.data.models import EnergyReading, Unit, UnitScore, as_utc, utcnow
from verdant.scoring.cpi import ScoringStrategy, compute_score
from verdant.scoring.emissions import compute_emissions
from verdant.scoring.thresholds import (
    DEFAULT_TIER_SCHEDULE,
    TierSchedule,
    discount_for_score,
)

logger = logging.getLogger(__name__)

# Grid intensity assumed for units without in-period readings (kgCO2e/kWh).
DEFAULT_GRID_INTENSITY = 0.42


# ---------------------------------------------------------------------------
# Period and grouping helpers
# ---------------------------------------------------------------------------

def month_start(moment: datetime) -> datetime:
    """First instant of the UTC calendar month containing *moment*."""
    return as_utc(moment).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def active_period_start(
    readings: Iterable[EnergyReading], now: datetime | None = None
) -> datetime:
    """Start of the month holding the latest reading across all units.

    Falls back to the month of *now* (wall clock by default) when there
    are no readings.
    """
    latest: datetime | None = None
    for reading in readings:
        if latest is None or reading.timestamp > latest:
            latest = reading.timestamp
    if latest is None:
        return month_start(now or utcnow())
    return month_start(latest)


def readings_since(
    readings: Iterable[EnergyReading], period_start: datetime
) -> list[EnergyReading]:
    period_start = as_utc(period_start)
    return [r for r in readings if r.timestamp >= period_start]


def group_readings_by_unit(
    readings: Iterable[EnergyReading],
) -> dict[str, list[EnergyReading]]:
    """Map each unit id to its readings, preserving input order."""
    grouped: dict[str, list[EnergyReading]] = {}
    for reading in readings:
        grouped.setdefault(reading.unit_id, []).append(reading)
    return grouped


def aggregate_period_emissions(
    readings: Sequence[EnergyReading],
    default_intensity: float = DEFAULT_GRID_INTENSITY,
) -> float:
    """Total kWh times the mean grid intensity of *readings*."""
    total_kwh = sum(r.energy_consumed_kwh for r in readings)
    if readings:
        avg_intensity = sum(r.grid_carbon_intensity for r in readings) / len(readings)
    else:
        avg_intensity = default_intensity
    return compute_emissions(total_kwh, avg_intensity)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class ScoringEngine:
    """Recomputes carbon performance for units.

    Usage::

        engine = ScoringEngine()
        scores = engine.recompute_all(units, readings)
    """

    def __init__(
        self,
        strategy: ScoringStrategy = ScoringStrategy.quota_plateau,
        tiers: TierSchedule = DEFAULT_TIER_SCHEDULE,
        default_intensity: float = DEFAULT_GRID_INTENSITY,
    ) -> None:
        self.strategy = ScoringStrategy(strategy)
        self.tiers = tiers
        self.default_intensity = default_intensity

    def score(self, unit: Unit, unit_readings: Sequence[EnergyReading]) -> UnitScore:
        """Score *unit* from readings already restricted to it and the period."""
        emissions = aggregate_period_emissions(unit_readings, self.default_intensity)
        score = compute_score(
            emissions,
            unit.baseline_emissions_kg,
            unit.quota_emissions_kg,
            strategy=self.strategy,
            floor_area=unit.floor_area,
            occupancy_count=unit.occupancy_count,
            medical_flag=unit.medical_accommodation,
        )
        return UnitScore(
            unit_id=unit.id,
            period_emissions_kg=emissions,
            performance_score=score,
            discount_fraction=discount_for_score(score, self.tiers),
            reading_count=len(unit_readings),
        )

    @staticmethod
    def apply(unit: Unit, result: UnitScore, now: datetime) -> None:
        """Write the derived fields of *result* onto *unit*."""
        unit.current_period_emissions_kg = result.period_emissions_kg
        unit.performance_score = result.performance_score
        unit.discount_fraction = result.discount_fraction
        unit.last_updated_at = now

    def recompute_all(
        self,
        units: Sequence[Unit],
        readings: Sequence[EnergyReading],
        now: datetime | None = None,
    ) -> list[UnitScore]:
        """Recompute every unit in one pass and mutate them in place.

        All scores are computed before any unit is written, so a failure
        part-way leaves the collection untouched.
        """
        now = now or utcnow()
        period_start = active_period_start(readings, now)
        grouped = group_readings_by_unit(readings_since(readings, period_start))

        results = [self.score(unit, grouped.get(unit.id, [])) for unit in units]
        for unit, result in zip(units, results):
            self.apply(unit, result, now)

        orphans = set(grouped) - {u.id for u in units}
        if orphans:
            logger.debug(
                "Ignored in-period readings for %d unknown unit(s): %s",
                len(orphans), ", ".join(sorted(orphans)),
            )
        logger.info(
            "Recomputed %d units for period starting %s (%d readings in period)",
            len(units), period_start.date().isoformat(),
            sum(len(g) for g in grouped.values()),
        )
        return results

    def recompute_one(
        self,
        unit: Unit,
        readings: Iterable[EnergyReading],
        period_start: datetime,
        now: datetime | None = None,
    ) -> UnitScore:
        """Recompute a single unit against an explicit period start."""
        unit_readings = readings_since(
            (r for r in readings if r.unit_id == unit.id), period_start
        )
        result = self.score(unit, unit_readings)
        self.apply(unit, result, now or utcnow())
        return result


# ---------------------------------------------------------------------------
# Functional entry points
# ---------------------------------------------------------------------------

def recompute_all(
    units: Sequence[Unit],
    readings: Sequence[EnergyReading],
    now: datetime | None = None,
) -> list[UnitScore]:
    """Recompute all units with the default scoring configuration."""
    return ScoringEngine().recompute_all(units, readings, now)


def recompute_one(
    unit: Unit,
    readings: Iterable[EnergyReading],
    period_start: datetime,
    now: datetime | None = None,
) -> UnitScore:
    """Recompute one unit with the default scoring configuration."""
    return ScoringEngine().recompute_one(unit, readings, period_start, now)
