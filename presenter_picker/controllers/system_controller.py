# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from presenter_picker.core.config import settings
from presenter_picker.core.dependencies import (
    get_roster_repo,
    get_roster_store,
    get_selection_controller,
)
from presenter_picker.core.exceptions import StorageUnavailable
from presenter_picker.repositories.roster_repository import RosterRepository
from presenter_picker.services.roster_store import RosterStore
from presenter_picker.services.selection_controller import SelectionController

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check(
    roster: RosterStore = Depends(get_roster_store),
    selection: SelectionController = Depends(get_selection_controller),
):
    """Liveness probe."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "roster_size": len(roster.names),
        "phase": selection.session.phase.value,
    }


@router.get("/health/ready")
async def readiness_check(repo: RosterRepository = Depends(get_roster_repo)):
    """Readiness probe — verifies roster storage is reachable."""
    try:
        repo.read()
        storage = "ok"
    except StorageUnavailable:
        storage = "degraded"
    return {
        "status": "ready" if storage == "ok" else "degraded",
        "service": settings.SERVICE_NAME,
        "storage": storage,
    }


@router.get("/metrics")
async def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
