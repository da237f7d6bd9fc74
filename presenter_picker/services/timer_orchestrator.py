# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Timer orchestration for one selection session.

Owns the three schedules that animate a draw:
    countdown  — every COUNTDOWN_INTERVAL_MS, decrement remaining_seconds
    highlight  — every HIGHLIGHT_INTERVAL_MS, re-pick highlighted indices
    terminal   — once, REVEAL_DELAY_MS after arming, hand off to the reveal

State machine:
    armed ─► ticking ─► stopped
"""

from enum import Enum
from typing import Any, Callable, Optional

from presenter_picker.core.config import settings
from presenter_picker.core.logging import get_logger
from presenter_picker.metrics import HIGHLIGHT_TICKS, STALE_CALLBACKS
from presenter_picker.models.domain import ROLE_COUNT, Phase, SelectionSession
from presenter_picker.services.sampler import distinct_indices
from presenter_picker.services.scheduler import Scheduler

logger = get_logger(__name__)


class TimerState(str, Enum):
    ARMED = "armed"
    TICKING = "ticking"
    STOPPED = "stopped"


class TimerOrchestrator:
    """Drives one session's countdown, highlight and reveal timers."""

    def __init__(
        self,
        scheduler: Scheduler,
        countdown_interval: float = settings.COUNTDOWN_INTERVAL_MS / 1000,
        highlight_interval: float = settings.HIGHLIGHT_INTERVAL_MS / 1000,
        reveal_delay: float = settings.REVEAL_DELAY_MS / 1000,
        pick_highlight: Callable[[int, int], set[int]] = distinct_indices,
    ) -> None:
        self._scheduler = scheduler
        self._countdown_interval = countdown_interval
        self._highlight_interval = highlight_interval
        self._reveal_delay = reveal_delay
        self._pick_highlight = pick_highlight

        self._state = TimerState.ARMED
        self._session: Optional[SelectionSession] = None
        self._current_generation: Callable[[], int] = lambda: -1
        self._on_terminal: Callable[[SelectionSession], None] = lambda s: None

        self._countdown: Any = None
        self._highlight: Any = None
        self._terminal: Any = None

    @property
    def state(self) -> TimerState:
        return self._state

    # ── Lifecycle ──

    def arm(
        self,
        session: SelectionSession,
        current_generation: Callable[[], int],
        on_terminal: Callable[[SelectionSession], None],
    ) -> None:
        """
        Start all three schedules for `session`.
        Raises RuntimeError if this orchestrator was already armed once.
        """
        if self._state is not TimerState.ARMED:
            raise RuntimeError(f"Cannot arm orchestrator in state '{self._state.value}'")

        self._session = session
        self._current_generation = current_generation
        self._on_terminal = on_terminal
        self._state = TimerState.TICKING

        self._countdown = self._scheduler.call_every(
            self._countdown_interval, self._on_countdown_tick
        )
        self._highlight = self._scheduler.call_every(
            self._highlight_interval, self._on_highlight_tick
        )
        self._terminal = self._scheduler.call_later(
            self._reveal_delay, self._on_terminal_fire
        )
        logger.info(
            "Timers armed: generation=%d, candidates=%d",
            session.generation, len(session.candidates),
        )

    def disarm(self) -> None:
        """Cancel every schedule. Safe to call any number of times."""
        self._stop_ticking()
        if self._terminal is not None:
            self._terminal.cancel()
            self._terminal = None
        if self._state is not TimerState.STOPPED:
            self._state = TimerState.STOPPED
            if self._session is not None:
                logger.info("Timers disarmed: generation=%d", self._session.generation)

    # ── Callbacks ──

    def _on_countdown_tick(self) -> None:
        if not self._is_live("countdown"):
            return
        session = self._session
        session.remaining_seconds = max(0, session.remaining_seconds - 1)
        if session.remaining_seconds == 0 and self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _on_highlight_tick(self) -> None:
        if not self._is_live("highlight"):
            return
        session = self._session
        session.highlighted = self._pick_highlight(len(session.candidates), ROLE_COUNT)
        HIGHLIGHT_TICKS.inc()

    def _on_terminal_fire(self) -> None:
        self._terminal = None
        if not self._is_live("terminal"):
            return
        # Countdown and highlight must be gone before winners are computed.
        self._stop_ticking()
        self._state = TimerState.STOPPED
        self._on_terminal(self._session)

    # ── Internal ──

    def _stop_ticking(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None
        if self._highlight is not None:
            self._highlight.cancel()
            self._highlight = None

    def _is_live(self, schedule: str) -> bool:
        session = self._session
        live = (
            self._state is TimerState.TICKING
            and session is not None
            and session.phase is Phase.SELECTING
            and self._current_generation() == session.generation
        )
        if not live:
            STALE_CALLBACKS.labels(schedule=schedule).inc()
            logger.debug(
                "Stale %s callback discarded: generation=%s",
                schedule, session.generation if session else None,
            )
        return live
