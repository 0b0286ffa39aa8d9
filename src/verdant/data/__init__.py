# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Data models, repository, ingestion, and simulated portfolio generator."""

from verdant.data.models import (
    BuildingType,
    DiscountTier,
    EnergyReading,
    RewardState,
    Tenant,
    Unit,
    UnitScore,
)
from verdant.data.store import InMemoryStore, TenantNotFoundError, UnitNotFoundError
from verdant.data.ingestion import ingest_file
from verdant.data.seed import PortfolioSeeder

__all__ = [
    "BuildingType",
    "DiscountTier",
    "EnergyReading",
    "InMemoryStore",
    "PortfolioSeeder",
    "RewardState",
    "Tenant",
    "TenantNotFoundError",
    "Unit",
    "UnitNotFoundError",
    "UnitScore",
    "ingest_file",
]
