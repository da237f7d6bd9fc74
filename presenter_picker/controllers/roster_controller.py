# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Roster editor endpoints — view, save, sort, clear.
Thin HTTP layer — delegates ALL logic to RosterEditor.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from presenter_picker.core.dependencies import get_roster_editor
from presenter_picker.schemas import RosterClearResponse, RosterResponse, RosterTextRequest
from presenter_picker.services.roster_editor import CLEAR_CONFIRMATION_REQUIRED, RosterEditor

router = APIRouter(prefix="/api/v1", tags=["Roster"])


@router.get("/roster", response_model=RosterResponse)
async def get_roster(editor: RosterEditor = Depends(get_roster_editor)):
    """Current roster with a human-readable count."""
    return editor.view()


@router.put("/roster", response_model=RosterResponse)
async def save_roster(
    payload: RosterTextRequest,
    editor: RosterEditor = Depends(get_roster_editor),
):
    """Save / update the roster from editor text (one name per line)."""
    editor.save(payload.text)
    return editor.view()


@router.post("/roster/sort", response_model=RosterResponse)
async def sort_roster(
    payload: RosterTextRequest,
    editor: RosterEditor = Depends(get_roster_editor),
):
    """Sort the editor names A–Z (case-insensitive) and persist them."""
    editor.sort(payload.text)
    return editor.view()


@router.delete("/roster", response_model=RosterClearResponse)
async def clear_roster(
    confirm: bool = Query(default=False, description="Must be true to clear"),
    editor: RosterEditor = Depends(get_roster_editor),
):
    """Clear all names and reset any running selection."""
    status = editor.clear(confirmed=confirm)
    if status == CLEAR_CONFIRMATION_REQUIRED:
        raise HTTPException(status_code=409, detail="Clearing the roster requires confirm=true")
    return {"status": status, "roster": editor.view()}
