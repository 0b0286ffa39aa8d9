# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Shared test fixtures for the verdant test suite."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from verdant.data.models import EnergyReading, Unit
from verdant.data.seed import PortfolioSeeder
from verdant.data.store import InMemoryStore
from verdant.service import PortfolioService

AS_OF = date(2025, 3, 20)


@pytest.fixture()
def make_unit():
    """Factory for a unit with a 300 kg baseline and no quota."""

    def _make(unit_id: str = "u1", **overrides) -> Unit:
        fields = {
            "id": unit_id,
            "building_id": "b1",
            "floor_area": 100.0,
            "occupancy_count": 1,
            "baseline_emissions_kg": 300.0,
        }
        fields.update(overrides)
        return Unit(**fields)

    return _make


@pytest.fixture()
def make_reading():
    """Factory for a reading on a given day of March 2025."""

    def _make(
        unit_id: str = "u1",
        kwh: float = 100.0,
        intensity: float = 0.4,
        day: int = 10,
        month: int = 3,
    ) -> EnergyReading:
        return EnergyReading(
            unit_id=unit_id,
            timestamp=datetime(2025, month, day, 12, 0, tzinfo=timezone.utc),
            energy_consumed_kwh=kwh,
            grid_carbon_intensity=intensity,
        )

    return _make


@pytest.fixture()
def demo_store() -> InMemoryStore:
    """The seeded demo building (seed 42, readings through 2025-03-20), not yet scored."""
    return PortfolioSeeder(seed=42, as_of=AS_OF).generate()


@pytest.fixture()
def service() -> PortfolioService:
    """A recomputed demo portfolio service (seed 42, readings through 2025-03-20)."""
    return PortfolioService.demo(seed=42, as_of=AS_OF)
