# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Core Pydantic v2 data models for the carbon performance engine.

This module defines the records the scoring engine consumes (units,
tenants, energy readings) and the read-side views produced by the
service layer for the CLI and REST surfaces.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize *value* to an aware UTC datetime.

    Naive values are taken to already be UTC; aware values are converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Rent discount per tier, Tier 1 first.
DISCOUNT_FRACTIONS: tuple[float, ...] = (0.05, 0.02, 0.005, 0.0)


def _check_discount(value: float) -> float:
    if value not in DISCOUNT_FRACTIONS:
        raise ValueError(
            f"discount_fraction must be one of {sorted(DISCOUNT_FRACTIONS)}, got {value}"
        )
    return value


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BuildingType(str, Enum):
    """Occupancy class of a unit."""

    residential = "Residential"
    commercial = "Commercial"


class DiscountTier(str, Enum):
    """Discrete rent-discount band derived from the performance score."""

    tier1 = "Tier 1"
    tier2 = "Tier 2"
    tier3 = "Tier 3"
    none = "None"

    @property
    def color(self) -> str:
        """Terminal / report color associated with this tier."""
        if self is DiscountTier.tier1:
            return "green"
        if self is DiscountTier.tier2:
            return "cyan"
        if self is DiscountTier.tier3:
            return "yellow"
        return "red"


# ---------------------------------------------------------------------------
# Readings
# ---------------------------------------------------------------------------

class EnergyReading(BaseModel):
    """A single metered energy sample for one unit.

    Readings are immutable once ingested.  ``emissions_kg`` is always
    derived from consumption and grid intensity; a supplied value is
    replaced.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    unit_id: str = Field(..., alias="unitId", description="Unit this reading belongs to")
    timestamp: datetime = Field(..., description="UTC timestamp of the sample")
    energy_consumed_kwh: float = Field(
        ..., ge=0, alias="kwh", description="Energy consumed in kWh"
    )
    grid_carbon_intensity: float = Field(
        ..., ge=0, alias="gridIntensity",
        description="Grid carbon intensity in kgCO2e/kWh",
    )
    emissions_kg: float = Field(
        default=0.0, alias="emissionsKg", description="Carbon-equivalent mass in kg CO2e"
    )

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="before")
    @classmethod
    def _derive_emissions(cls, data):
        if not isinstance(data, dict):
            return data
        kwh = data.get("energy_consumed_kwh", data.get("kwh"))
        intensity = data.get("grid_carbon_intensity", data.get("gridIntensity"))
        try:
            emissions = float(kwh) * float(intensity)
        except (TypeError, ValueError):
            # Left to field validation to report.
            return data
        data = {k: v for k, v in data.items() if k != "emissionsKg"}
        data["emissions_kg"] = emissions
        return data


# ---------------------------------------------------------------------------
# Units and tenants
# ---------------------------------------------------------------------------

class Unit(BaseModel):
    """A rentable unit and its cached carbon-performance state.

    The last four fields are derived: the batch processor overwrites
    them together on every recompute.
    """

    model_config = {"frozen": False, "populate_by_name": True, "validate_assignment": True}

    id: str = Field(..., description="Unique unit identifier")
    building_id: str = Field(..., description="Building this unit belongs to")
    building_type: BuildingType = Field(
        default=BuildingType.residential, description="Residential or commercial"
    )
    floor_area: float = Field(..., gt=0, description="Floor area in square feet")
    occupancy_count: int = Field(..., ge=0, description="Number of occupants")
    medical_accommodation: bool = Field(
        default=False,
        description="Medical accommodation flag (raises the legacy occupancy factor)",
    )
    baseline_emissions_kg: float = Field(
        ..., ge=0, description="Historical monthly emissions reference in kg CO2e"
    )
    quota_emissions_kg: Optional[float] = Field(
        default=None, ge=0,
        description="Landlord-configured monthly cap; overrides the baseline when positive",
    )

    # Derived
    current_period_emissions_kg: float = Field(
        default=0.0, description="Emissions aggregated over the active period"
    )
    performance_score: int = Field(
        default=0, ge=0, le=100, description="Carbon Performance Index (0-100)"
    )
    discount_fraction: float = Field(
        default=0.0, description="Rent discount fraction derived from the score"
    )
    last_updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("discount_fraction")
    @classmethod
    def _known_discount(cls, value: float) -> float:
        return _check_discount(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def target_kg(self) -> float:
        """Scoring target: the quota when set and positive, else the baseline."""
        if self.quota_emissions_kg is not None and self.quota_emissions_kg > 0:
            return self.quota_emissions_kg
        return self.baseline_emissions_kg


class RewardState(BaseModel):
    """Gamification state mirrored from the tenant's unit."""

    model_config = {"frozen": False, "populate_by_name": True}

    current_discount: float = Field(default=0.0, ge=0)
    lifetime_saved_estimate: float = Field(
        default=0.0, ge=0, description="Estimated rent saved in USD"
    )
    streak_days: int = Field(default=0, ge=0)
    badges: list[str] = Field(default_factory=list)


class Tenant(BaseModel):
    """The occupant of a unit."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: str = Field(..., description="Unique tenant identifier")
    unit_id: str = Field(..., description="Unit the tenant occupies")
    display_name: str = Field(..., description="Tenant display name")
    contact_email: str = Field(..., description="Contact e-mail address")
    reward_state: RewardState = Field(default_factory=RewardState)
    acknowledged_suggestion_ids: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Scoring results
# ---------------------------------------------------------------------------

class UnitScore(BaseModel):
    """Derived values for one unit from a single scoring pass."""

    model_config = {"frozen": True}

    unit_id: str
    period_emissions_kg: float
    performance_score: int = Field(..., ge=0, le=100)
    discount_fraction: float
    reading_count: int = Field(default=0, ge=0)

    @field_validator("discount_fraction")
    @classmethod
    def _known_discount(cls, value: float) -> float:
        return _check_discount(value)


class RecomputeSummary(BaseModel):
    """Outcome of a full batch recompute."""

    period_start: datetime
    unit_count: int
    reading_count: int = Field(..., description="Readings inside the active period")
    tenants_synced: int = 0
    tier_counts: dict[str, int] = Field(default_factory=dict)
    computed_at: datetime = Field(default_factory=utcnow)


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

class TenantContact(BaseModel):
    name: str
    email: str


class UnitView(BaseModel):
    """Landlord-facing row for a unit."""

    id: str
    building_type: BuildingType
    floor_area: float
    occupancy_count: int
    medical_accommodation: bool
    baseline_emissions_kg: float
    quota_emissions_kg: Optional[float]
    current_period_emissions_kg: float
    target_kg: float
    usage_vs_quota_pct: float
    performance_score: int
    discount_fraction: float
    discount_tier: str = Field(..., description="Tier label such as 'Tier 1 (5%)'")
    tenant: Optional[TenantContact] = None


class BuildingOverview(BaseModel):
    """Building-level roll-up for the landlord dashboard."""

    building_id: str
    total_units: int
    total_co2e_this_month: float
    average_score: float
    period_start: datetime
    units: list[UnitView] = Field(default_factory=list)


class UsageBreakdown(BaseModel):
    """Simulated split of a unit's emissions by end use, in kg CO2e."""

    hvac: float
    lights: float
    water: float
    appliances: float
    other: float

    def shares(self) -> dict[str, float]:
        """Category shares as fractions of the total (0.0 when empty)."""
        values = self.model_dump()
        total = sum(values.values())
        if total <= 0:
            return {k: 0.0 for k in values}
        return {k: v / total for k, v in values.items()}


class TenantSummary(BaseModel):
    """Tenant-facing performance summary."""

    tenant_id: str
    unit_id: str
    performance_score: int
    current_period_emissions_kg: float
    target_kg: float
    progress_pct: float = Field(..., ge=0, le=100)
    discount_fraction: float
    discount_tier: str
    breakdown: UsageBreakdown
    rewards: RewardState


class UsagePoint(BaseModel):
    timestamp: datetime
    energy_consumed_kwh: float
    emissions_kg: float


class TenantUsage(BaseModel):
    unit_id: str
    readings: list[UsagePoint] = Field(default_factory=list)


class Suggestion(BaseModel):
    """An actionable tip for lowering a tenant's emissions."""

    id: str
    title: str
    description: str
    category: str
    impact_kg: float = Field(..., ge=0, description="Estimated kg CO2e saved per month")
    difficulty: str = Field(..., pattern=r"^(Easy|Medium|Hard)$")
    xp: int = Field(..., ge=0)
