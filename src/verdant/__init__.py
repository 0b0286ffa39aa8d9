# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Verdant - Carbon Performance Index and rent-discount engine."""

__version__ = "0.1.0"

from verdant.config import Settings, load_settings
from verdant.data.models import (
    BuildingType,
    DiscountTier,
    EnergyReading,
    RewardState,
    Tenant,
    Unit,
    UnitScore,
)
from verdant.data.seed import PortfolioSeeder
from verdant.data.store import InMemoryStore
from verdant.scoring.cpi import ScoringStrategy, compute_score
from verdant.scoring.engine import ScoringEngine, recompute_all, recompute_one
from verdant.service import PortfolioService

__all__ = [
    "BuildingType",
    "DiscountTier",
    "EnergyReading",
    "InMemoryStore",
    "PortfolioSeeder",
    "PortfolioService",
    "RewardState",
    "ScoringEngine",
    "ScoringStrategy",
    "Settings",
    "Tenant",
    "Unit",
    "UnitScore",
    "compute_score",
    "load_settings",
    "recompute_all",
    "recompute_one",
]
