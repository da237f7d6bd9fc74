# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Roster editor commands — save, sort A–Z, clear all.
Free text is parsed into one name per non-blank line.
"""

import re
import unicodedata

from presenter_picker.core.logging import get_logger
from presenter_picker.services.notifier import Notifier
from presenter_picker.services.roster_store import RosterStore
from presenter_picker.services.selection_controller import SelectionController

logger = get_logger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")

CLEAR_EMPTY = "empty"
CLEAR_CONFIRMATION_REQUIRED = "confirmation_required"
CLEAR_DONE = "cleared"


def parse_lines(text: str) -> list[str]:
    """Split editor text into trimmed, non-empty names."""
    return [line.strip() for line in _LINE_SPLIT.split(text or "") if line.strip()]


def sort_key(name: str) -> str:
    """Case- and accent-insensitive collation key."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold()


def count_label(count: int) -> str:
    return "1 name" if count == 1 else f"{count} names"


class RosterEditor:
    """Editor commands acting on the Roster Store."""

    def __init__(
        self,
        roster_store: RosterStore,
        selection: SelectionController,
        notifier: Notifier,
    ) -> None:
        self._roster = roster_store
        self._selection = selection
        self._notifier = notifier

    def view(self) -> dict:
        names = self._roster.names
        return {"names": names, "count": len(names), "count_label": count_label(len(names))}

    def save(self, text: str) -> list[str]:
        names = self._roster.save(parse_lines(text))
        self._notifier.notify("Saved")
        logger.info("Roster saved: names=%d", len(names))
        return names

    def sort(self, text: str) -> list[str]:
        """Sort the parsed names A–Z and persist. No-op for an empty editor."""
        names = parse_lines(text)
        if not names:
            return self._roster.names
        names = self._roster.save(sorted(names, key=sort_key))
        self._notifier.notify("Sorted A–Z")
        logger.info("Roster sorted: names=%d", len(names))
        return names

    def clear(self, confirmed: bool, text: str = "") -> str:
        """
        Wipe the roster and reset any active draw.
        Returns CLEAR_EMPTY when there is nothing to clear and
        CLEAR_CONFIRMATION_REQUIRED when the caller has not confirmed.
        """
        if not text.strip() and not self._roster.names:
            return CLEAR_EMPTY
        if not confirmed:
            return CLEAR_CONFIRMATION_REQUIRED
        self._selection.cancel()
        self._roster.clear()
        self._notifier.notify("Cleared")
        logger.info("Roster cleared")
        return CLEAR_DONE
