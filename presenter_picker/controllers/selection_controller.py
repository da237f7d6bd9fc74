# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Selection endpoints — start, cancel, state, roles.
Thin HTTP layer — delegates ALL logic to SelectionController.
"""

from fastapi import APIRouter, Depends, HTTPException

from presenter_picker.core.dependencies import get_roster_store, get_selection_controller
from presenter_picker.core.exceptions import InsufficientCandidates
from presenter_picker.models.domain import ROLES
from presenter_picker.schemas import SelectionStartRequest, SelectionStateResponse
from presenter_picker.services.roster_store import RosterStore
from presenter_picker.services.selection_controller import SelectionController

router = APIRouter(prefix="/api/v1", tags=["Selection"])


@router.get("/selection", response_model=SelectionStateResponse)
async def get_selection(
    selection: SelectionController = Depends(get_selection_controller),
):
    """Current phase, countdown, highlight and winners."""
    return selection.snapshot()


@router.post("/selection/start", response_model=SelectionStateResponse, status_code=202)
async def start_selection(
    payload: SelectionStartRequest | None = None,
    selection: SelectionController = Depends(get_selection_controller),
    roster: RosterStore = Depends(get_roster_store),
):
    """Start a new draw, superseding any draw already in progress."""
    names = payload.names if payload and payload.names is not None else roster.names
    try:
        selection.start(names)
    except InsufficientCandidates as e:
        raise HTTPException(status_code=400, detail=str(e))
    return selection.snapshot()


@router.post("/selection/cancel", response_model=SelectionStateResponse)
async def cancel_selection(
    selection: SelectionController = Depends(get_selection_controller),
):
    """Stop the running draw and return to idle."""
    selection.cancel()
    return selection.snapshot()


@router.get("/roles")
async def list_roles():
    """The fixed presentation roles, in winner order."""
    return list(ROLES)
