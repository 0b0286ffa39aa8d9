# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI application factory for the carbon performance REST API."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from verdant import __version__
from verdant.api.routes import router
from verdant.config import Settings, load_settings
from verdant.service import PortfolioService


def create_app(
    service: PortfolioService | None = None,
    settings: Settings | None = None,
    seed: int | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    service:
        Portfolio service to expose.  When omitted, a seeded demo
        portfolio is generated and recomputed.
    settings:
        Settings for the demo portfolio and CORS; loaded from
        ``$VERDANT_CONFIG`` (or defaults) when omitted.
    seed:
        RNG seed for the demo portfolio.
    """
    if settings is None:
        settings = service.settings if service is not None else load_settings()
    if service is None:
        service = PortfolioService.demo(seed=seed, settings=settings)

    app = FastAPI(
        title="Verdant API",
        description=(
            "Carbon Performance Index scoring and rent-discount tiers for "
            "landlord and tenant dashboards."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = service
    app.include_router(router)

    return app
