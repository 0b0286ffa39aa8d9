# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tenant reward synchronisation.

Tenants do not observe unit changes automatically; this step must run
after every recompute so ``reward_state`` mirrors the unit's discount.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from verdant.data.models import Tenant, Unit
from verdant.scoring.thresholds import badges_for_score

logger = logging.getLogger(__name__)


def lifetime_saved_estimate(
    discount_fraction: float, monthly_rent: float = 2000.0, months: int = 3
) -> float:
    """Rent saved at *discount_fraction* over *months*, in USD."""
    return round(discount_fraction * monthly_rent * months, 2)


def sync_tenant(
    tenant: Tenant, unit: Unit, monthly_rent: float = 2000.0, months: int = 3
) -> None:
    rewards = tenant.reward_state
    rewards.current_discount = unit.discount_fraction
    rewards.lifetime_saved_estimate = lifetime_saved_estimate(
        unit.discount_fraction, monthly_rent, months
    )
    rewards.badges = badges_for_score(unit.performance_score)


def sync_rewards(
    tenants: Iterable[Tenant],
    units: Iterable[Unit],
    monthly_rent: float = 2000.0,
    months: int = 3,
) -> int:
    """Refresh every tenant from its unit; returns how many were synced.

    Tenants whose unit is unknown are left untouched.
    """
    by_id = {u.id: u for u in units}
    synced = 0
    for tenant in tenants:
        unit = by_id.get(tenant.unit_id)
        if unit is None:
            logger.debug("Tenant %s references unknown unit %s", tenant.id, tenant.unit_id)
            continue
        sync_tenant(tenant, unit, monthly_rent, months)
        synced += 1
    return synced
