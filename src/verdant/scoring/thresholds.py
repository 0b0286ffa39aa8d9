# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Discount tier schedules, badge thresholds, and score mappings.

The tier table is a step function over the integer score: each band is
closed at its lower bound, so a score of exactly 90 is Tier 1.
"""

from __future__ import annotations

from typing import NamedTuple

from verdant.data.models import DISCOUNT_FRACTIONS, DiscountTier


class TierSchedule(NamedTuple):
    """Lower score bounds for each discount band."""

    tier1_min: int
    tier2_min: int
    tier3_min: int


# ---------------------------------------------------------------------------
# Discount fractions
# ---------------------------------------------------------------------------
TIER1_DISCOUNT, TIER2_DISCOUNT, TIER3_DISCOUNT, NO_DISCOUNT = DISCOUNT_FRACTIONS

DISCOUNTS: dict[DiscountTier, float] = {
    DiscountTier.tier1: TIER1_DISCOUNT,
    DiscountTier.tier2: TIER2_DISCOUNT,
    DiscountTier.tier3: TIER3_DISCOUNT,
    DiscountTier.none: NO_DISCOUNT,
}

# ---------------------------------------------------------------------------
# Tier schedules
# ---------------------------------------------------------------------------
DEFAULT_TIER_SCHEDULE = TierSchedule(90, 70, 50)
LEGACY_TIER_SCHEDULE = TierSchedule(90, 75, 60)

TIER_SCHEDULES: dict[str, TierSchedule] = {
    "default": DEFAULT_TIER_SCHEDULE,
    "legacy": LEGACY_TIER_SCHEDULE,
}

# ---------------------------------------------------------------------------
# Badges
# ---------------------------------------------------------------------------
ECO_CHAMPION_MIN = 90
GREEN_WARRIOR_MIN = 70
ECO_EXPLORER_MIN = 50


def get_tier_schedule(name: str) -> TierSchedule:
    """Return a named tier schedule (``default`` or ``legacy``)."""
    try:
        return TIER_SCHEDULES[name]
    except KeyError:
        available = ", ".join(sorted(TIER_SCHEDULES))
        raise KeyError(
            f"Unknown tier schedule '{name}'. Available schedules: {available}"
        ) from None


def tier_for_score(
    score: float, schedule: TierSchedule = DEFAULT_TIER_SCHEDULE
) -> DiscountTier:
    """Map a 0-100 score to its discount tier."""
    if score >= schedule.tier1_min:
        return DiscountTier.tier1
    if score >= schedule.tier2_min:
        return DiscountTier.tier2
    if score >= schedule.tier3_min:
        return DiscountTier.tier3
    return DiscountTier.none


def discount_for_score(
    score: float, schedule: TierSchedule = DEFAULT_TIER_SCHEDULE
) -> float:
    """Rent discount fraction for a score: one of 0, 0.005, 0.02, 0.05."""
    return DISCOUNTS[tier_for_score(score, schedule)]


def tier_label(tier: DiscountTier) -> str:
    """Display label, e.g. ``'Tier 1 (5%)'`` or ``'None'``."""
    if tier is DiscountTier.none:
        return tier.value
    return f"{tier.value} ({DISCOUNTS[tier] * 100:g}%)"


def badges_for_score(score: float) -> list[str]:
    """Badge labels earned at a given score."""
    if score >= ECO_CHAMPION_MIN:
        return ["Eco Champion"]
    if score >= GREEN_WARRIOR_MIN:
        return ["Green Warrior"]
    if score >= ECO_EXPLORER_MIN:
        return ["Eco Explorer"]
    return []
