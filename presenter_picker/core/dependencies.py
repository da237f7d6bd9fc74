# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from presenter_picker.core.database import engine
from presenter_picker.repositories.roster_repository import RosterRepository
from presenter_picker.services.notifier import Notifier
from presenter_picker.services.roster_editor import RosterEditor
from presenter_picker.services.roster_store import RosterStore
from presenter_picker.services.scheduler import AsyncioScheduler
from presenter_picker.services.selection_controller import SelectionController

# ── Singleton instances ──
_scheduler = AsyncioScheduler()
_roster_repo = RosterRepository(engine)
_roster_store = RosterStore(_roster_repo)
_notifier = Notifier(_scheduler)
_selection = SelectionController(
    roster_store=_roster_store,
    notifier=_notifier,
    scheduler=_scheduler,
)
_editor = RosterEditor(
    roster_store=_roster_store,
    selection=_selection,
    notifier=_notifier,
)


# ── FastAPI dependency functions ──
def get_roster_repo() -> RosterRepository:
    return _roster_repo


def get_roster_store() -> RosterStore:
    return _roster_store


def get_notifier() -> Notifier:
    return _notifier


def get_selection_controller() -> SelectionController:
    return _selection


def get_roster_editor() -> RosterEditor:
    return _editor
