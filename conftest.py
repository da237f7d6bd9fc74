# type: ignore
"""Shared fixtures: manual clock, in-memory storage, wired services."""

import heapq
import itertools

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from presenter_picker.repositories.roster_repository import RosterRepository
from presenter_picker.services.notifier import Notifier
from presenter_picker.services.roster_editor import RosterEditor
from presenter_picker.services.roster_store import RosterStore
from presenter_picker.services.scheduler import Scheduler
from presenter_picker.services.selection_controller import SelectionController


class _ManualHandle:
    def __init__(self, callback):
        self.callback = callback
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled


class ManualScheduler(Scheduler):
    """Deterministic clock: callbacks only run inside advance()."""

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._seq = itertools.count()

    def call_later(self, delay, callback):
        handle = _ManualHandle(callback)
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), handle))
        return handle

    def advance(self, seconds):
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target + 1e-9:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self.now = when
            handle.callback()
        self.now = target

    def pending(self):
        return sum(1 for _, _, h in self._queue if not h.cancelled())


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture
def roster_repo(engine):
    repo = RosterRepository(engine, key="test_roster")
    repo.init_schema()
    return repo


@pytest.fixture
def roster_store(roster_repo):
    store = RosterStore(roster_repo)
    store.load()
    return store


@pytest.fixture
def notifier(scheduler):
    return Notifier(scheduler, display_seconds=2.2)


@pytest.fixture
def controller(roster_store, notifier, scheduler):
    return SelectionController(
        roster_store=roster_store,
        notifier=notifier,
        scheduler=scheduler,
        countdown_seconds=5,
    )


@pytest.fixture
def editor(roster_store, controller, notifier):
    return RosterEditor(roster_store=roster_store, selection=controller, notifier=notifier)
