# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Settings model and YAML loader."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from verdant.scoring.cpi import ScoringStrategy
from verdant.scoring.engine import DEFAULT_GRID_INTENSITY, ScoringEngine
from verdant.scoring.thresholds import TIER_SCHEDULES, get_tier_schedule

CONFIG_ENV_VAR = "VERDANT_CONFIG"


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

class ScoringSettings(BaseModel):
    """Which CPI formula and tier table drive discounts."""

    strategy: ScoringStrategy = Field(default=ScoringStrategy.quota_plateau)
    tiers: str = Field(
        default="default",
        pattern="^(" + "|".join(TIER_SCHEDULES) + ")$",
        description="Tier schedule: default (90/70/50) or legacy (90/75/60)",
    )
    default_grid_intensity: float = Field(
        default=DEFAULT_GRID_INTENSITY, ge=0,
        description="kgCO2e/kWh assumed for units without in-period readings",
    )

    def build_engine(self) -> ScoringEngine:
        return ScoringEngine(
            strategy=self.strategy,
            tiers=get_tier_schedule(self.tiers),
            default_intensity=self.default_grid_intensity,
        )


class RewardSettings(BaseModel):
    """Inputs to the lifetime-savings estimate shown to tenants."""

    monthly_rent: float = Field(default=2000.0, ge=0, description="Assumed rent in USD")
    months_credited: int = Field(default=3, ge=0)


class SeedSettings(BaseModel):
    quota_ratio: float = Field(default=0.9, gt=0, description="Quota as a fraction of baseline")


class ApiSettings(BaseModel):
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseModel):
    """Top-level configuration loaded from YAML."""

    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    rewards: RewardSettings = Field(default_factory=RewardSettings)
    seed: SeedSettings = Field(default_factory=SeedSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from *path*, ``$VERDANT_CONFIG``, or defaults."""
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return Settings()

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    return Settings.model_validate(raw)
