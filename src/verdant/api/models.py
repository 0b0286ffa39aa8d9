# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""API request/response Pydantic models for the REST interface.

Read-side responses reuse the view models in :mod:`verdant.data.models`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class QuotaUpdateRequest(BaseModel):
    """Request body for ``PATCH /api/landlord/unit/{unit_id}/quota``.

    Omitted fields are left unchanged; an explicit ``null`` quota clears
    the override.
    """

    model_config = {"populate_by_name": True}

    quota: float | None = Field(
        default=None, ge=0, description="Monthly emissions cap in kg CO2e"
    )
    medical_accommodation: bool | None = Field(
        default=None, alias="medicalFlag",
        description="Medical accommodation flag",
    )


class AcknowledgeRequest(BaseModel):
    """Request body for ``POST /api/tenant/{tenant_id}/acknowledge``."""

    model_config = {"populate_by_name": True}

    suggestion_id: str = Field(..., min_length=1, alias="tipId")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status (e.g. 'ok').")
    version: str = Field(..., description="Application version string.")


class AcknowledgeResponse(BaseModel):
    success: bool = True
    acknowledged_suggestion_ids: list[str] = Field(default_factory=list)
