# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Roster Store — in-memory roster backed by durable storage.
Storage failures are logged and absorbed; the in-memory copy stays usable.
"""

from presenter_picker.core.exceptions import StorageUnavailable
from presenter_picker.core.logging import get_logger
from presenter_picker.metrics import ROSTER_SIZE, STORAGE_ERRORS
from presenter_picker.repositories.roster_repository import RosterRepository

logger = get_logger(__name__)


class RosterStore:
    """Ordered list of candidate names with load/save/clear."""

    def __init__(self, repo: RosterRepository) -> None:
        self._repo = repo
        self._names: list[str] = []

    @property
    def names(self) -> list[str]:
        """A copy of the current roster."""
        return list(self._names)

    def load(self) -> list[str]:
        """Read the persisted roster; absent or malformed data yields []."""
        try:
            stored = self._repo.read()
        except StorageUnavailable as exc:
            STORAGE_ERRORS.labels(operation="load").inc()
            logger.warning("Roster load failed, starting empty: %s", exc)
            stored = None
        self._set(stored or [])
        logger.info("Roster loaded: key=%s, names=%d", self._repo.key, len(self._names))
        return self.names

    def save(self, names: list[str]) -> list[str]:
        """Replace the roster. An empty roster removes the stored record."""
        self._set(names)
        try:
            if self._names:
                self._repo.write(self._names)
            else:
                self._repo.delete()
        except StorageUnavailable as exc:
            STORAGE_ERRORS.labels(operation="save").inc()
            logger.warning("Roster save failed, keeping in-memory copy: %s", exc)
        return self.names

    def clear(self) -> None:
        self.save([])

    def _set(self, names: list[str]) -> None:
        self._names = list(names)
        ROSTER_SIZE.set(len(self._names))
