# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI routers for the landlord and tenant dashboards."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from verdant import __version__
from verdant.api.models import (
    AcknowledgeRequest,
    AcknowledgeResponse,
    HealthResponse,
    QuotaUpdateRequest,
)
from verdant.data.models import (
    BuildingOverview,
    RecomputeSummary,
    Suggestion,
    TenantSummary,
    TenantUsage,
    UnitView,
)
from verdant.data.store import TenantNotFoundError, UnitNotFoundError
from verdant.reporting.export import export_filename
from verdant.service import PortfolioService

router = APIRouter()
landlord = APIRouter(prefix="/api/landlord", tags=["landlord"])
tenant = APIRouter(prefix="/api/tenant", tags=["tenant"])


# ---------------------------------------------------------------------------
# Dependency injection
# ---------------------------------------------------------------------------

def get_service(request: Request) -> PortfolioService:
    """Return the service attached to the application.

    Used as a FastAPI dependency so tests can install their own store.
    """
    return request.app.state.service


def _not_found(exc: LookupError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc))


# ---------------------------------------------------------------------------
# Service-level endpoints
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@router.post("/api/update", response_model=RecomputeSummary)
def update(service: PortfolioService = Depends(get_service)) -> RecomputeSummary:
    """Recompute every unit and sync tenant rewards."""
    return service.recompute()


# ---------------------------------------------------------------------------
# Landlord
# ---------------------------------------------------------------------------

@landlord.get("/{building_id}/overview", response_model=BuildingOverview)
def building_overview(
    building_id: str, service: PortfolioService = Depends(get_service)
) -> BuildingOverview:
    return service.building_overview(building_id)


@landlord.get("/{building_id}/units", response_model=list[UnitView])
def list_units(
    building_id: str, service: PortfolioService = Depends(get_service)
) -> list[UnitView]:
    return service.list_units(building_id)


@landlord.patch("/unit/{unit_id}/quota", response_model=UnitView)
def update_unit_quota(
    unit_id: str,
    body: QuotaUpdateRequest,
    service: PortfolioService = Depends(get_service),
) -> UnitView:
    changes = {}
    if "quota" in body.model_fields_set:
        changes["quota_emissions_kg"] = body.quota
    if body.medical_accommodation is not None:
        changes["medical_accommodation"] = body.medical_accommodation
    try:
        return service.update_unit(unit_id, **changes)
    except UnitNotFoundError as exc:
        raise _not_found(exc) from exc


@landlord.get("/{building_id}/export")
def export_csv(
    building_id: str, service: PortfolioService = Depends(get_service)
) -> Response:
    filename = export_filename(building_id, date.today())
    return Response(
        content=service.export_csv(building_id),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# Tenant
# ---------------------------------------------------------------------------

@tenant.get("/{tenant_id}/summary", response_model=TenantSummary)
def tenant_summary(
    tenant_id: str, service: PortfolioService = Depends(get_service)
) -> TenantSummary:
    try:
        return service.tenant_summary(tenant_id)
    except (TenantNotFoundError, UnitNotFoundError) as exc:
        raise _not_found(exc) from exc


@tenant.get("/{tenant_id}/usage", response_model=TenantUsage)
def tenant_usage(
    tenant_id: str, service: PortfolioService = Depends(get_service)
) -> TenantUsage:
    try:
        return service.tenant_usage(tenant_id)
    except TenantNotFoundError as exc:
        raise _not_found(exc) from exc


@tenant.get("/{tenant_id}/suggestions", response_model=list[Suggestion])
def tenant_suggestions(
    tenant_id: str, service: PortfolioService = Depends(get_service)
) -> list[Suggestion]:
    try:
        return service.suggestions(tenant_id)
    except (TenantNotFoundError, UnitNotFoundError) as exc:
        raise _not_found(exc) from exc


@tenant.post("/{tenant_id}/acknowledge", response_model=AcknowledgeResponse)
def acknowledge(
    tenant_id: str,
    body: AcknowledgeRequest,
    service: PortfolioService = Depends(get_service),
) -> AcknowledgeResponse:
    try:
        ids = service.acknowledge_suggestion(tenant_id, body.suggestion_id)
    except TenantNotFoundError as exc:
        raise _not_found(exc) from exc
    return AcknowledgeResponse(acknowledged_suggestion_ids=ids)


router.include_router(landlord)
router.include_router(tenant)
