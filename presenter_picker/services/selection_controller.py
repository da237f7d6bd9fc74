# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Selection Controller — entry point of the randomized draw.

Guarantees at most one active session. Every start() and every effective
cancel() bumps the generation token, so callbacks armed for an older session
find a mismatch and leave state untouched.
"""

from typing import Any, Callable, Iterable, Optional

from presenter_picker.core.config import settings
from presenter_picker.core.exceptions import InsufficientCandidates
from presenter_picker.core.logging import get_logger
from presenter_picker.metrics import (
    SELECTIONS_CANCELLED,
    SELECTIONS_REJECTED,
    SELECTIONS_REVEALED,
    SELECTIONS_STARTED,
    SESSION_ACTIVE,
)
from presenter_picker.models.domain import ROLE_COUNT, Phase, SelectionSession
from presenter_picker.services.notifier import Notifier
from presenter_picker.services.roster_store import RosterStore
from presenter_picker.services.sampler import draw_winners
from presenter_picker.services.scheduler import Scheduler
from presenter_picker.services.timer_orchestrator import TimerOrchestrator

logger = get_logger(__name__)

SessionListener = Callable[[SelectionSession], None]


class SelectionController:
    """Validates, starts, cancels and resolves selection sessions."""

    def __init__(
        self,
        roster_store: RosterStore,
        notifier: Notifier,
        scheduler: Scheduler,
        countdown_seconds: int = settings.COUNTDOWN_SECONDS,
        orchestrator_factory: Optional[Callable[[Scheduler], TimerOrchestrator]] = None,
        draw: Callable[[tuple[str, ...]], list[str]] = draw_winners,
    ) -> None:
        self._roster = roster_store
        self._notifier = notifier
        self._scheduler = scheduler
        self._countdown_seconds = countdown_seconds
        self._orchestrator_factory = orchestrator_factory or TimerOrchestrator
        self._draw = draw

        self._generation = 0
        self._session = SelectionSession.idle(countdown_seconds)
        self._timers: Optional[TimerOrchestrator] = None
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> SelectionSession:
        return self._session

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def timers(self) -> Optional[TimerOrchestrator]:
        return self._timers

    def subscribe(self, listener: SessionListener) -> None:
        """Register a callback fired with each newly started session."""
        self._listeners.append(listener)

    # ── Commands ──

    def start(self, names: Iterable[str]) -> SelectionSession:
        """
        Begin a new draw over `names`.
        Raises InsufficientCandidates if fewer than ROLE_COUNT names remain
        after trimming; the current session and roster are left untouched.
        """
        candidates = [n.strip() for n in names if n and n.strip()]
        if len(candidates) < ROLE_COUNT:
            SELECTIONS_REJECTED.inc()
            self._notifier.notify(f"Need at least {ROLE_COUNT} names")
            logger.info("Selection rejected: candidates=%d", len(candidates))
            raise InsufficientCandidates(len(candidates), ROLE_COUNT)

        self.cancel()
        self._roster.save(candidates)

        self._generation += 1
        session = SelectionSession(
            generation=self._generation,
            phase=Phase.SELECTING,
            candidates=tuple(candidates),
            remaining_seconds=self._countdown_seconds,
        )
        self._session = session
        self._timers = self._orchestrator_factory(self._scheduler)
        self._timers.arm(
            session,
            current_generation=lambda: self._generation,
            on_terminal=self._reveal,
        )

        SELECTIONS_STARTED.inc()
        SESSION_ACTIVE.set(1)
        logger.info(
            "Selection started: candidates=%d", len(candidates),
            extra={"generation": session.generation, "phase": session.phase.value},
        )
        for listener in list(self._listeners):
            listener(session)
        return session

    def cancel(self) -> None:
        """Stop all timers and return to idle. No-op when already idle."""
        if self._timers is not None:
            self._timers.disarm()
            self._timers = None
        if not self._session.is_active:
            return

        previous = self._session
        self._generation += 1
        self._session = SelectionSession.idle(self._countdown_seconds)
        self._session.generation = self._generation
        SESSION_ACTIVE.set(0)
        if previous.phase is Phase.SELECTING:
            SELECTIONS_CANCELLED.inc()
        logger.info(
            "Selection cancelled: generation=%d, phase=%s",
            previous.generation, previous.phase.value,
        )

    # ── Queries ──

    def snapshot(self) -> dict[str, Any]:
        """UI signals for the presentation layer."""
        session = self._session
        selecting = session.phase is Phase.SELECTING
        revealed = session.phase is Phase.REVEALED
        return {
            "generation": session.generation,
            "phase": session.phase.value,
            "remaining_seconds": session.remaining_seconds,
            "highlighted": sorted(session.highlighted) if selecting else [],
            "candidates": list(session.candidates) if selecting else [],
            "winners": list(session.winners) if revealed else [],
            "assignments": session.assignments() if revealed else [],
        }

    # ── Internal ──

    def _reveal(self, session: SelectionSession) -> None:
        if session.generation != self._generation or session.phase is not Phase.SELECTING:
            logger.debug("Stale reveal discarded: generation=%d", session.generation)
            return
        session.winners = self._draw(session.candidates)
        session.highlighted = set()
        session.remaining_seconds = 0
        session.phase = Phase.REVEALED
        self._timers = None
        SESSION_ACTIVE.set(0)
        SELECTIONS_REVEALED.inc()
        logger.info(
            "Selection revealed: winners=%s", ", ".join(session.winners),
            extra={"generation": session.generation, "phase": session.phase.value},
        )
