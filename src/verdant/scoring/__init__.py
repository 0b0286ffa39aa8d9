# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Carbon Performance Index scoring and discount tiering."""

from verdant.scoring.cpi import ScoringStrategy, compute_score
from verdant.scoring.emissions import compute_emissions, occupancy_factor
from verdant.scoring.engine import ScoringEngine, recompute_all, recompute_one
from verdant.scoring.thresholds import discount_for_score, tier_for_score

__all__ = [
    "ScoringEngine",
    "ScoringStrategy",
    "compute_emissions",
    "compute_score",
    "discount_for_score",
    "occupancy_factor",
    "recompute_all",
    "recompute_one",
    "tier_for_score",
]
