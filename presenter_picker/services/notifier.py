# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Transient user notifications.
A message stays visible for a fixed window; a newer message replaces it and
resets the dismissal timer.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from presenter_picker.core.config import settings
from presenter_picker.core.logging import get_logger
from presenter_picker.metrics import NOTIFICATIONS_SHOWN
from presenter_picker.services.scheduler import Scheduler

logger = get_logger(__name__)


class Notifier:
    """Holds the single visible notification and its pending dismissal."""

    def __init__(
        self,
        scheduler: Scheduler,
        display_seconds: float = settings.NOTIFICATION_DISPLAY_SECONDS,
    ) -> None:
        self._scheduler = scheduler
        self._display_seconds = display_seconds
        self._message = ""
        self._visible = False
        self._shown_at: Optional[str] = None
        self._dismissal: Any = None

    def notify(self, message: str) -> None:
        """Show `message`, pre-empting any pending dismissal."""
        self._cancel_dismissal()
        self._message = message
        self._visible = True
        self._shown_at = datetime.now(timezone.utc).isoformat()
        self._dismissal = self._scheduler.call_later(self._display_seconds, self._expire)
        NOTIFICATIONS_SHOWN.inc()
        logger.info("Notification shown: %s", message)

    def dismiss(self) -> None:
        self._cancel_dismissal()
        self._visible = False

    def current(self) -> dict[str, Any]:
        return {
            "message": self._message,
            "visible": self._visible,
            "shown_at": self._shown_at,
        }

    def _expire(self) -> None:
        self._dismissal = None
        self._visible = False

    def _cancel_dismissal(self) -> None:
        if self._dismissal is not None:
            self._dismissal.cancel()
            self._dismissal = None
