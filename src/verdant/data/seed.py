# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Simulated portfolio generator.

Builds a demo building with tenanted units spread across every discount
tier, a block of vacant units, and daily readings for the current month
plus one month of history.  Current-month consumption is scaled so each
tenanted unit lands on its designed score once the batch recompute runs.

All randomness flows through a seeded :class:`numpy.random.Generator`
so that identical seeds always produce identical portfolios.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import NamedTuple

import numpy as np

from verdant.data.models import BuildingType, EnergyReading, Tenant, RewardState, Unit
from verdant.data.store import InMemoryStore

DEMO_BUILDING_ID = "bldg_01"
DEFAULT_QUOTA_RATIO = 0.9


class UnitSpec(NamedTuple):
    unit_id: str
    building_type: BuildingType
    floor_area: float
    occupancy: int
    medical: bool
    baseline_kg: float
    design_score: int | None  # None = vacant


class TenantSpec(NamedTuple):
    tenant_id: str
    unit_id: str
    name: str
    email: str


_R = BuildingType.residential
_C = BuildingType.commercial

UNIT_SPECS: list[UnitSpec] = [
    # Tier 1
    UnitSpec("unit_101", _R, 600, 1, False, 200, 92),
    UnitSpec("unit_204", _R, 950, 3, True, 450, 100),
    UnitSpec("unit_401", _R, 700, 2, False, 280, 98),
    UnitSpec("unit_501", _R, 750, 2, False, 250, 96),
    UnitSpec("unit_502", _R, 550, 1, True, 180, 93),
    UnitSpec("unit_503", _C, 850, 2, False, 380, 90),
    # Tier 2
    UnitSpec("unit_102", _R, 800, 2, False, 320, 88),
    UnitSpec("unit_302", _R, 1100, 3, False, 420, 85),
    UnitSpec("unit_504", _R, 680, 2, False, 270, 82),
    UnitSpec("unit_505", _C, 1050, 3, False, 400, 78),
    UnitSpec("unit_506", _R, 920, 3, True, 420, 75),
    UnitSpec("unit_507", _R, 580, 1, False, 170, 72),
    # Tier 3
    UnitSpec("unit_103", _R, 650, 1, False, 190, 68),
    UnitSpec("unit_205", _R, 850, 2, False, 300, 65),
    UnitSpec("unit_508", _C, 950, 4, False, 440, 60),
    UnitSpec("unit_509", _R, 780, 2, False, 310, 55),
    # No discount
    UnitSpec("unit_203", _R, 900, 2, False, 360, 40),
    UnitSpec("unit_301", _C, 1200, 4, False, 550, 35),
    UnitSpec("unit_402", _C, 1000, 3, False, 480, 28),
    UnitSpec("unit_510", _C, 1150, 5, False, 520, 20),
    # Vacant
    UnitSpec("unit_511", _R, 650, 1, False, 200, None),
    UnitSpec("unit_512", _R, 800, 2, False, 300, None),
    UnitSpec("unit_513", _C, 900, 2, False, 350, None),
    UnitSpec("unit_514", _R, 720, 2, False, 260, None),
    UnitSpec("unit_515", _C, 1100, 4, False, 480, None),
    UnitSpec("unit_516", _R, 580, 1, False, 190, None),
    UnitSpec("unit_517", _R, 850, 3, True, 400, None),
    UnitSpec("unit_518", _C, 980, 3, False, 420, None),
    UnitSpec("unit_519", _R, 690, 2, False, 250, None),
    UnitSpec("unit_520", _C, 1050, 4, False, 460, None),
]

TENANT_SPECS: list[TenantSpec] = [
    TenantSpec("tenant_01", "unit_101", "Avery Morgan", "avery@example.com"),
    TenantSpec("tenant_02", "unit_102", "Priya Natarajan", "priya@example.com"),
    TenantSpec("tenant_03", "unit_103", "Tomás Ortega", "tomas@example.com"),
    TenantSpec("tenant_04", "unit_204", "Hannah Okafor", "hannah@example.com"),
    TenantSpec("tenant_05", "unit_205", "Jun Watanabe", "jun@example.com"),
    TenantSpec("tenant_06", "unit_203", "Leah Brennan", "leah@example.com"),
    TenantSpec("tenant_07", "unit_301", "Marcus Hale", "marcus@example.com"),
    TenantSpec("tenant_08", "unit_302", "Sofia Lindqvist", "sofia@example.com"),
    TenantSpec("tenant_09", "unit_401", "Omar Haddad", "omar@example.com"),
    TenantSpec("tenant_10", "unit_402", "Grace Whitfield", "grace@example.com"),
    TenantSpec("tenant_11", "unit_501", "Ethan Kowalski", "ethan@example.com"),
    TenantSpec("tenant_12", "unit_502", "Nadia Petrova", "nadia@example.com"),
    TenantSpec("tenant_13", "unit_503", "Samuel Adeyemi", "samuel@example.com"),
    TenantSpec("tenant_14", "unit_504", "Chloe Fontaine", "chloe@example.com"),
    TenantSpec("tenant_15", "unit_505", "Diego Alvarez", "diego@example.com"),
    TenantSpec("tenant_16", "unit_506", "Mei Lin", "mei@example.com"),
    TenantSpec("tenant_17", "unit_507", "Rowan Fitzgerald", "rowan@example.com"),
    TenantSpec("tenant_18", "unit_508", "Isabel Duarte", "isabel@example.com"),
    TenantSpec("tenant_19", "unit_509", "Kwame Mensah", "kwame@example.com"),
    TenantSpec("tenant_20", "unit_510", "Elena Rossi", "elena@example.com"),
]


def usage_for_score(score: int) -> float:
    """Usage percentage of the target that yields *score* on the plateau formula."""
    if score >= 100:
        return 50.0
    return (200 - score) / 2


class PortfolioSeeder:
    """Generate a fully-populated :class:`InMemoryStore` for the demo building.

    Parameters
    ----------
    seed:
        Optional RNG seed for reproducibility.
    as_of:
        Last day with readings; defaults to today (UTC).  The current
        period runs from the first of that month through *as_of*.
    quota_ratio:
        Quota assigned to every unit as a fraction of its baseline.
    """

    def __init__(
        self,
        seed: int | None = None,
        as_of: date | None = None,
        quota_ratio: float = DEFAULT_QUOTA_RATIO,
        building_id: str = DEMO_BUILDING_ID,
    ) -> None:
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.as_of = as_of or datetime.now(timezone.utc).date()
        self.quota_ratio = quota_ratio
        self.building_id = building_id

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self) -> InMemoryStore:
        units = [self._build_unit(spec) for spec in UNIT_SPECS]
        readings: list[EnergyReading] = []
        for spec, unit in zip(UNIT_SPECS, units):
            if spec.design_score is None:
                continue
            readings.extend(self._history_readings(unit))
            readings.extend(self._current_readings(unit, spec.design_score))
        tenants = [self._build_tenant(spec) for spec in TENANT_SPECS]
        return InMemoryStore(units=units, tenants=tenants, readings=readings)

    # ------------------------------------------------------------------
    # Units and tenants
    # ------------------------------------------------------------------

    def _build_unit(self, spec: UnitSpec) -> Unit:
        return Unit(
            id=spec.unit_id,
            building_id=self.building_id,
            building_type=spec.building_type,
            floor_area=spec.floor_area,
            occupancy_count=spec.occupancy,
            medical_accommodation=spec.medical,
            baseline_emissions_kg=spec.baseline_kg,
            quota_emissions_kg=round(spec.baseline_kg * self.quota_ratio, 2),
        )

    def _build_tenant(self, spec: TenantSpec) -> Tenant:
        design = next(u.design_score for u in UNIT_SPECS if u.unit_id == spec.unit_id)
        if design is not None and design >= 70:
            streak = int(self.rng.integers(5, 20))
        else:
            streak = int(self.rng.integers(0, 5))
        return Tenant(
            id=spec.tenant_id,
            unit_id=spec.unit_id,
            display_name=spec.name,
            contact_email=spec.email,
            reward_state=RewardState(streak_days=streak),
        )

    # ------------------------------------------------------------------
    # Readings
    # ------------------------------------------------------------------

    def _current_readings(self, unit: Unit, design_score: int) -> list[EnergyReading]:
        start = self.as_of.replace(day=1)
        days = [start + timedelta(days=i) for i in range(self.as_of.day)]
        target_emissions = unit.target_kg * usage_for_score(design_score) / 100
        return self._daily_readings(unit.id, days, target_emissions)

    def _history_readings(self, unit: Unit) -> list[EnergyReading]:
        last = self.as_of.replace(day=1) - timedelta(days=1)
        start = last.replace(day=1)
        days = [start + timedelta(days=i) for i in range(last.day)]
        usage = float(self.rng.uniform(0.45, 1.05))
        return self._daily_readings(unit.id, days, unit.target_kg * usage)

    def _daily_readings(
        self, unit_id: str, days: list[date], target_emissions_kg: float
    ) -> list[EnergyReading]:
        """Daily readings whose period aggregate equals *target_emissions_kg*."""
        n = len(days)
        intensities = np.round(self.rng.uniform(0.38, 0.46, n), 4)
        weights = self.rng.uniform(0.7, 1.3, n)
        total_kwh = target_emissions_kg / float(intensities.mean())
        kwh = weights / weights.sum() * total_kwh
        return [
            EnergyReading(
                unit_id=unit_id,
                timestamp=datetime(d.year, d.month, d.day, tzinfo=timezone.utc),
                energy_consumed_kwh=float(k),
                grid_carbon_intensity=float(i),
            )
            for d, k, i in zip(days, kwh, intensities)
        ]
