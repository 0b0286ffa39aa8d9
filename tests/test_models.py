# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for Pydantic data models."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from verdant.data.models import (
    BuildingType,
    DiscountTier,
    EnergyReading,
    RewardState,
    Tenant,
    UnitScore,
    UsageBreakdown,
)


class TestEnergyReading:

    def test_emissions_derived(self):
        reading = EnergyReading(
            unit_id="u1",
            timestamp=datetime(2025, 3, 1, tzinfo=timezone.utc),
            energy_consumed_kwh=50,
            grid_carbon_intensity=0.42,
        )
        assert reading.emissions_kg == pytest.approx(21.0)

    def test_supplied_emissions_replaced(self):
        reading = EnergyReading(
            unit_id="u1",
            timestamp=datetime(2025, 3, 1, tzinfo=timezone.utc),
            energy_consumed_kwh=10,
            grid_carbon_intensity=0.5,
            emissions_kg=999,
        )
        assert reading.emissions_kg == pytest.approx(5.0)

    def test_supplied_emissions_alias_replaced(self):
        reading = EnergyReading.model_validate(
            {"unitId": "u1", "timestamp": "2025-03-04T00:00:00Z",
             "kwh": 10, "gridIntensity": 0.5, "emissionsKg": 999}
        )
        assert reading.emissions_kg == pytest.approx(5.0)

    def test_camel_case_aliases(self):
        reading = EnergyReading.model_validate(
            {"unitId": "u9", "timestamp": "2025-03-04T00:00:00Z", "kwh": 10, "gridIntensity": 0.5}
        )
        assert reading.unit_id == "u9"
        assert reading.energy_consumed_kwh == 10
        assert reading.emissions_kg == pytest.approx(5.0)

    def test_naive_timestamp_is_utc(self):
        reading = EnergyReading(
            unit_id="u1",
            timestamp=datetime(2025, 3, 1, 8, 0),
            energy_consumed_kwh=1,
            grid_carbon_intensity=0.4,
        )
        assert reading.timestamp.tzinfo == timezone.utc

    def test_offset_timestamp_converted_to_utc(self):
        reading = EnergyReading.model_validate(
            {"unitId": "u1", "timestamp": "2025-04-01T02:00:00+05:00",
             "kwh": 1, "gridIntensity": 0.4}
        )
        assert reading.timestamp == datetime(2025, 3, 31, 21, 0, tzinfo=timezone.utc)
        assert reading.timestamp.utcoffset() == timedelta(0)

    def test_frozen(self):
        reading = EnergyReading(
            unit_id="u1",
            timestamp=datetime(2025, 3, 1, tzinfo=timezone.utc),
            energy_consumed_kwh=1,
            grid_carbon_intensity=0.4,
        )
        with pytest.raises(ValidationError):
            reading.energy_consumed_kwh = 2

    def test_negative_kwh_rejected(self):
        with pytest.raises(ValidationError):
            EnergyReading(
                unit_id="u1",
                timestamp=datetime(2025, 3, 1, tzinfo=timezone.utc),
                energy_consumed_kwh=-1,
                grid_carbon_intensity=0.4,
            )

    def test_negative_intensity_rejected(self):
        with pytest.raises(ValidationError):
            EnergyReading(
                unit_id="u1",
                timestamp=datetime(2025, 3, 1, tzinfo=timezone.utc),
                energy_consumed_kwh=1,
                grid_carbon_intensity=-0.1,
            )


class TestUnit:

    def test_defaults(self, make_unit):
        unit = make_unit()
        assert unit.building_type is BuildingType.residential
        assert unit.medical_accommodation is False
        assert unit.quota_emissions_kg is None
        assert unit.performance_score == 0
        assert unit.discount_fraction == 0.0

    def test_target_falls_back_to_baseline(self, make_unit):
        assert make_unit().target_kg == 300
        assert make_unit(quota_emissions_kg=0).target_kg == 300
        assert make_unit(quota_emissions_kg=180).target_kg == 180

    def test_target_in_dump(self, make_unit):
        assert make_unit(quota_emissions_kg=120).model_dump()["target_kg"] == 120

    def test_floor_area_must_be_positive(self, make_unit):
        with pytest.raises(ValidationError):
            make_unit(floor_area=0)

    def test_negative_occupancy_rejected(self, make_unit):
        with pytest.raises(ValidationError):
            make_unit(occupancy_count=-1)

    def test_negative_baseline_rejected(self, make_unit):
        with pytest.raises(ValidationError):
            make_unit(baseline_emissions_kg=-5)

    def test_negative_quota_rejected(self, make_unit):
        with pytest.raises(ValidationError):
            make_unit(quota_emissions_kg=-5)

    def test_score_validated_on_assignment(self, make_unit):
        unit = make_unit()
        with pytest.raises(ValidationError):
            unit.performance_score = 101

    @pytest.mark.parametrize("fraction", [0.0, 0.005, 0.02, 0.05])
    def test_known_discounts_accepted(self, make_unit, fraction):
        assert make_unit(discount_fraction=fraction).discount_fraction == fraction

    def test_unknown_discount_rejected(self, make_unit):
        with pytest.raises(ValidationError):
            make_unit(discount_fraction=0.03)

    def test_unknown_discount_rejected_on_assignment(self, make_unit):
        unit = make_unit()
        with pytest.raises(ValidationError):
            unit.discount_fraction = 0.5


class TestUnitScore:

    def test_unknown_discount_rejected(self):
        with pytest.raises(ValidationError):
            UnitScore(
                unit_id="u1", period_emissions_kg=10.0,
                performance_score=95, discount_fraction=0.1,
            )


class TestTenant:

    def test_reward_defaults(self):
        tenant = Tenant(
            id="t1", unit_id="u1", display_name="Sam", contact_email="sam@example.com"
        )
        assert tenant.reward_state == RewardState()
        assert tenant.reward_state.badges == []
        assert tenant.acknowledged_suggestion_ids == []


class TestEnums:

    def test_discount_tier_values(self):
        assert DiscountTier.tier1.value == "Tier 1"
        assert DiscountTier.none.value == "None"

    def test_discount_tier_colors(self):
        assert DiscountTier.tier1.color == "green"
        assert DiscountTier.tier2.color == "cyan"
        assert DiscountTier.tier3.color == "yellow"
        assert DiscountTier.none.color == "red"

    def test_building_type_values(self):
        assert BuildingType("Commercial") is BuildingType.commercial


class TestUsageBreakdown:

    def test_shares(self):
        breakdown = UsageBreakdown(hvac=45, lights=20, water=15, appliances=12, other=8)
        shares = breakdown.shares()
        assert shares["hvac"] == pytest.approx(0.45)
        assert sum(shares.values()) == pytest.approx(1.0)

    def test_shares_empty(self):
        breakdown = UsageBreakdown(hvac=0, lights=0, water=0, appliances=0, other=0)
        assert set(breakdown.shares().values()) == {0.0}
