# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Portfolio service: the operations behind the CLI and REST API.

Wraps an :class:`~verdant.data.store.InMemoryStore` and a configured
:class:`~verdant.scoring.engine.ScoringEngine`.  Every write and every
multi-record read runs under the store lock so callers never observe a
unit whose emissions, score and discount come from different passes.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any

from verdant.config import Settings
from verdant.data.models import (
    BuildingOverview,
    EnergyReading,
    RecomputeSummary,
    Suggestion,
    Tenant,
    TenantContact,
    TenantSummary,
    TenantUsage,
    Unit,
    UnitView,
    UsageBreakdown,
    UsagePoint,
    utcnow,
)
from verdant.data.seed import PortfolioSeeder
from verdant.data.store import InMemoryStore, UnitNotFoundError
from verdant.recommendations.engine import SuggestionEngine
from verdant.reporting.export import render_csv
from verdant.rewards import sync_rewards, sync_tenant
from verdant.scoring.cpi import usage_percentage, usage_vs_quota_pct
from verdant.scoring.engine import active_period_start, readings_since
from verdant.scoring.thresholds import get_tier_schedule, tier_for_score, tier_label

logger = logging.getLogger(__name__)

# Simulated end-use split of a unit's emissions.
BREAKDOWN_WEIGHTS = {
    "hvac": 0.45,
    "lights": 0.20,
    "water": 0.15,
    "appliances": 0.12,
    "other": 0.08,
}

_UNSET: Any = object()


def usage_breakdown(total_emissions_kg: float) -> UsageBreakdown:
    return UsageBreakdown(
        **{k: total_emissions_kg * w for k, w in BREAKDOWN_WEIGHTS.items()}
    )


class PortfolioService:
    """Landlord and tenant operations over a unit/tenant/reading store.

    Usage::

        service = PortfolioService.demo(seed=42)
        overview = service.building_overview("bldg_01")
    """

    def __init__(self, store: InMemoryStore, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings or Settings()
        self.engine = self.settings.scoring.build_engine()
        self.tiers = get_tier_schedule(self.settings.scoring.tiers)
        self.suggestion_engine = SuggestionEngine()

    @classmethod
    def demo(
        cls,
        seed: int | None = None,
        as_of: date | None = None,
        settings: Settings | None = None,
        extra_readings: list[EnergyReading] | None = None,
    ) -> "PortfolioService":
        """Seed the demo building, add *extra_readings*, and recompute."""
        settings = settings or Settings()
        store = PortfolioSeeder(
            seed=seed, as_of=as_of, quota_ratio=settings.seed.quota_ratio
        ).generate()
        if extra_readings:
            store.add_readings(extra_readings)
        service = cls(store, settings)
        service.recompute()
        return service

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def period_start(self, now: datetime | None = None) -> datetime:
        return active_period_start(self.store.readings, now)

    def recompute(self, now: datetime | None = None) -> RecomputeSummary:
        """Batch-recompute every unit, then sync tenant rewards."""
        now = now or utcnow()
        rewards = self.settings.rewards
        with self.store.lock:
            results = self.engine.recompute_all(self.store.units, self.store.readings, now)
            synced = sync_rewards(
                self.store.tenants, self.store.units,
                rewards.monthly_rent, rewards.months_credited,
            )
            period_start = active_period_start(self.store.readings, now)
            in_period = len(readings_since(self.store.readings, period_start))

        tier_counts: dict[str, int] = {}
        for result in results:
            tier = tier_for_score(result.performance_score, self.tiers).value
            tier_counts[tier] = tier_counts.get(tier, 0) + 1

        return RecomputeSummary(
            period_start=period_start,
            unit_count=len(results),
            reading_count=in_period,
            tenants_synced=synced,
            tier_counts=tier_counts,
            computed_at=now,
        )

    def add_readings(self, readings: list[EnergyReading]) -> int:
        return self.store.add_readings(readings)

    def update_unit(
        self,
        unit_id: str,
        quota_emissions_kg: float | None = _UNSET,
        medical_accommodation: bool | None = _UNSET,
    ) -> UnitView:
        """Edit a unit's quota and/or medical flag and re-score it alone.

        Passing ``quota_emissions_kg=None`` clears the override so the
        baseline becomes the target again.
        """
        rewards = self.settings.rewards
        with self.store.lock:
            unit = self.store.get_unit(unit_id)
            if quota_emissions_kg is not _UNSET:
                unit.quota_emissions_kg = quota_emissions_kg
            if medical_accommodation is not _UNSET and medical_accommodation is not None:
                unit.medical_accommodation = medical_accommodation

            period_start = active_period_start(self.store.readings)
            result = self.engine.recompute_one(unit, self.store.readings, period_start)
            tenant = self.store.find_tenant_for_unit(unit_id)
            if tenant is not None:
                sync_tenant(tenant, unit, rewards.monthly_rent, rewards.months_credited)
            view = self.unit_view(unit, tenant)

        logger.info(
            "Unit %s re-scored: score=%d discount=%.3f",
            unit_id, result.performance_score, result.discount_fraction,
        )
        return view

    # ------------------------------------------------------------------
    # Landlord views
    # ------------------------------------------------------------------

    def unit_view(self, unit: Unit, tenant: Tenant | None = None) -> UnitView:
        target = unit.target_kg
        return UnitView(
            id=unit.id,
            building_type=unit.building_type,
            floor_area=unit.floor_area,
            occupancy_count=unit.occupancy_count,
            medical_accommodation=unit.medical_accommodation,
            baseline_emissions_kg=unit.baseline_emissions_kg,
            quota_emissions_kg=unit.quota_emissions_kg,
            current_period_emissions_kg=unit.current_period_emissions_kg,
            target_kg=target,
            usage_vs_quota_pct=usage_vs_quota_pct(unit.current_period_emissions_kg, target),
            performance_score=unit.performance_score,
            discount_fraction=unit.discount_fraction,
            discount_tier=tier_label(tier_for_score(unit.performance_score, self.tiers)),
            tenant=(
                TenantContact(name=tenant.display_name, email=tenant.contact_email)
                if tenant else None
            ),
        )

    def list_units(self, building_id: str) -> list[UnitView]:
        with self.store.lock:
            units = self.store.find_units(building_id)
            tenants = {t.unit_id: t for t in self.store.find_tenants({u.id for u in units})}
            return [self.unit_view(u, tenants.get(u.id)) for u in units]

    def building_overview(self, building_id: str) -> BuildingOverview:
        with self.store.lock:
            views = self.list_units(building_id)
            period_start = self.period_start()
            month_readings = self.store.find_readings(
                {v.id for v in views}, since=period_start
            )

        total_co2e = sum(r.emissions_kg for r in month_readings)
        average = (
            sum(v.performance_score for v in views) / len(views) if views else 0.0
        )
        return BuildingOverview(
            building_id=building_id,
            total_units=len(views),
            total_co2e_this_month=round(total_co2e, 2),
            average_score=round(average, 1),
            period_start=period_start,
            units=views,
        )

    def export_csv(self, building_id: str) -> str:
        return render_csv(self.list_units(building_id))

    # ------------------------------------------------------------------
    # Tenant views
    # ------------------------------------------------------------------

    def _tenant_and_unit(self, tenant_id: str) -> tuple[Tenant, Unit]:
        tenant = self.store.get_tenant(tenant_id)
        unit = self.store.find_unit(tenant.unit_id)
        if unit is None:
            raise UnitNotFoundError(tenant.unit_id)
        return tenant, unit

    def tenant_summary(self, tenant_id: str) -> TenantSummary:
        with self.store.lock:
            tenant, unit = self._tenant_and_unit(tenant_id)
            target = unit.target_kg
            progress = usage_percentage(unit.current_period_emissions_kg, target)
            return TenantSummary(
                tenant_id=tenant.id,
                unit_id=unit.id,
                performance_score=unit.performance_score,
                current_period_emissions_kg=unit.current_period_emissions_kg,
                target_kg=target,
                progress_pct=max(0.0, min(100.0, progress)),
                discount_fraction=unit.discount_fraction,
                discount_tier=tier_label(tier_for_score(unit.performance_score, self.tiers)),
                breakdown=usage_breakdown(unit.current_period_emissions_kg),
                rewards=tenant.reward_state.model_copy(deep=True),
            )

    def tenant_usage(self, tenant_id: str, days: int = 30) -> TenantUsage:
        """Readings from the *days* leading up to the unit's latest reading."""
        with self.store.lock:
            tenant = self.store.get_tenant(tenant_id)
            readings = sorted(
                self.store.find_readings(tenant.unit_id), key=lambda r: r.timestamp
            )
        if not readings:
            return TenantUsage(unit_id=tenant.unit_id)

        cutoff = readings[-1].timestamp - timedelta(days=days)
        return TenantUsage(
            unit_id=tenant.unit_id,
            readings=[
                UsagePoint(
                    timestamp=r.timestamp,
                    energy_consumed_kwh=r.energy_consumed_kwh,
                    emissions_kg=r.emissions_kg,
                )
                for r in readings
                if r.timestamp >= cutoff
            ],
        )

    def acknowledge_suggestion(self, tenant_id: str, suggestion_id: str) -> list[str]:
        with self.store.lock:
            tenant = self.store.get_tenant(tenant_id)
            if suggestion_id not in tenant.acknowledged_suggestion_ids:
                tenant.acknowledged_suggestion_ids.append(suggestion_id)
            return list(tenant.acknowledged_suggestion_ids)

    def suggestions(self, tenant_id: str) -> list[Suggestion]:
        summary = self.tenant_summary(tenant_id)
        with self.store.lock:
            acknowledged = set(self.store.get_tenant(tenant_id).acknowledged_suggestion_ids)
        return self.suggestion_engine.generate(summary.breakdown, acknowledged)
