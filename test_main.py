# type: ignore
"""
Tests for the Presenter Picker service
======================================
HTTP endpoints, roster storage, editor commands and notifications.
Timers are driven by the manual clock fixture; no real time passes.

Run:  pytest -v
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from main import app
from presenter_picker.core import dependencies
from presenter_picker.core.exceptions import StorageUnavailable
from presenter_picker.models.domain import ROLES, Phase
from presenter_picker.repositories.roster_repository import RosterRepository
from presenter_picker.services.roster_editor import (
    CLEAR_CONFIRMATION_REQUIRED,
    CLEAR_DONE,
    CLEAR_EMPTY,
    count_label,
    parse_lines,
    sort_key,
)
from presenter_picker.services.roster_store import RosterStore

ROSTER = ["Alice", "Bob", "Charlie", "Dana"]


# ============================================
# Fixtures
# ============================================
@pytest.fixture
def client(roster_repo, roster_store, notifier, controller, editor):
    """TestClient wired to in-memory storage and the manual clock."""
    app.dependency_overrides[dependencies.get_roster_repo] = lambda: roster_repo
    app.dependency_overrides[dependencies.get_roster_store] = lambda: roster_store
    app.dependency_overrides[dependencies.get_notifier] = lambda: notifier
    app.dependency_overrides[dependencies.get_selection_controller] = lambda: controller
    app.dependency_overrides[dependencies.get_roster_editor] = lambda: editor
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def _seed(engine, value, key="test_roster"):
    with engine.begin() as conn:
        conn.execute(
            text("INSERT INTO kv_store (key, value) VALUES (:key, :value)"),
            {"key": key, "value": value},
        )


# ============================================
# Health & Metrics
# ============================================
class TestHealth:
    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "presenter-picker"
        assert data["phase"] == "idle"
        assert "timestamp" in data

    def test_health_reports_roster_size(self, client, roster_store):
        roster_store.save(ROSTER)
        assert client.get("/health").json()["roster_size"] == 4

    def test_readiness_ok(self, client):
        data = client.get("/health/ready").json()
        assert data["status"] == "ready"
        assert data["storage"] == "ok"

    def test_readiness_degraded_on_storage_error(self, client, roster_repo):
        roster_repo.read = MagicMock(side_effect=StorageUnavailable("down"))
        data = client.get("/health/ready").json()
        assert data["status"] == "degraded"
        assert data["storage"] == "degraded"


class TestRequestID:
    def test_response_has_request_id_header(self, client):
        response = client.get("/health")
        assert "X-Request-ID" in response.headers

    def test_request_id_propagated(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"


class TestMetrics:
    def test_metrics_returns_200(self, client):
        assert client.get("/metrics").status_code == 200

    def test_metrics_contains_selection_counters(self, client):
        client.post("/api/v1/selection/start", json={"names": ROSTER})
        text_body = client.get("/metrics").text
        assert "picker_selections_started_total" in text_body
        assert "picker_highlight_ticks_total" in text_body
        assert "picker_requests_total" in text_body


# ============================================
# Roster Repository
# ============================================
class TestRosterRepository:
    def test_read_missing_returns_none(self, roster_repo):
        assert roster_repo.read() is None

    def test_write_then_read(self, roster_repo):
        roster_repo.write(ROSTER)
        assert roster_repo.read() == ROSTER

    def test_write_overwrites(self, roster_repo):
        roster_repo.write(ROSTER)
        roster_repo.write(["Zed", "Yan", "Xu"])
        assert roster_repo.read() == ["Zed", "Yan", "Xu"]

    def test_stored_as_json_array(self, roster_repo, engine):
        roster_repo.write(["Ana", "Bo"])
        with engine.connect() as conn:
            raw = conn.execute(
                text("SELECT value FROM kv_store WHERE key = 'test_roster'")
            ).scalar()
        assert json.loads(raw) == ["Ana", "Bo"]

    def test_delete(self, roster_repo):
        roster_repo.write(ROSTER)
        roster_repo.delete()
        assert roster_repo.read() is None

    def test_keys_are_isolated(self, engine, roster_repo):
        other = RosterRepository(engine, key="other_roster")
        roster_repo.write(ROSTER)
        assert other.read() is None

    def test_init_schema_is_repeatable(self, roster_repo):
        roster_repo.init_schema()
        roster_repo.write(ROSTER)
        assert roster_repo.read() == ROSTER

    def test_malformed_json_raises(self, roster_repo, engine):
        _seed(engine, "{not json")
        with pytest.raises(StorageUnavailable):
            roster_repo.read()

    def test_non_array_raises(self, roster_repo, engine):
        _seed(engine, json.dumps({"names": ["A"]}))
        with pytest.raises(StorageUnavailable):
            roster_repo.read()

    def test_non_string_entries_raise(self, roster_repo, engine):
        _seed(engine, json.dumps(["A", 2]))
        with pytest.raises(StorageUnavailable):
            roster_repo.read()

    def test_engine_failure_raises_storage_unavailable(self):
        engine = MagicMock()
        engine.connect.side_effect = SQLAlchemyError("db gone")
        engine.begin.side_effect = SQLAlchemyError("db gone")
        repo = RosterRepository(engine)
        with pytest.raises(StorageUnavailable):
            repo.read()
        with pytest.raises(StorageUnavailable):
            repo.write(ROSTER)
        with pytest.raises(StorageUnavailable):
            repo.delete()
        with pytest.raises(StorageUnavailable):
            repo.init_schema()


# ============================================
# Roster Store
# ============================================
class TestRosterStore:
    def test_load_empty(self, roster_store):
        assert roster_store.load() == []

    def test_load_existing(self, roster_repo):
        roster_repo.write(ROSTER)
        store = RosterStore(roster_repo)
        assert store.load() == ROSTER
        assert store.names == ROSTER

    def test_load_malformed_falls_back_to_empty(self, roster_repo, engine):
        _seed(engine, "[broken")
        store = RosterStore(roster_repo)
        assert store.load() == []

    def test_load_storage_failure_falls_back_to_empty(self):
        repo = MagicMock()
        repo.read.side_effect = StorageUnavailable("down")
        store = RosterStore(repo)
        assert store.load() == []

    def test_save_persists(self, roster_store, roster_repo):
        roster_store.save(ROSTER)
        assert roster_repo.read() == ROSTER

    def test_save_empty_removes_record(self, roster_store, roster_repo):
        roster_store.save(ROSTER)
        roster_store.save([])
        assert roster_repo.read() is None

    def test_clear(self, roster_store, roster_repo):
        roster_store.save(ROSTER)
        roster_store.clear()
        assert roster_store.names == []
        assert roster_repo.read() is None

    def test_save_failure_keeps_memory_copy(self):
        repo = MagicMock()
        repo.write.side_effect = StorageUnavailable("read-only")
        store = RosterStore(repo)
        assert store.save(ROSTER) == ROSTER
        assert store.names == ROSTER

    def test_names_returns_copy(self, roster_store):
        roster_store.save(ROSTER)
        roster_store.names.append("Eve")
        assert roster_store.names == ROSTER

    def test_duplicates_preserved(self, roster_store):
        roster_store.save(["Sam", "Sam", "Kim"])
        assert roster_store.names == ["Sam", "Sam", "Kim"]


# ============================================
# Editor helpers
# ============================================
class TestParsing:
    def test_parse_lines_trims_and_drops_blanks(self):
        assert parse_lines("  Alice \n\nBob\r\n   \nCharlie") == ["Alice", "Bob", "Charlie"]

    def test_parse_empty(self):
        assert parse_lines("") == []
        assert parse_lines(None) == []

    def test_count_label(self):
        assert count_label(0) == "0 names"
        assert count_label(1) == "1 name"
        assert count_label(4) == "4 names"

    def test_sort_key_ignores_case_and_accents(self):
        assert sort_key("Émile") == sort_key("emile")
        assert sorted(["bob", "Alice", "émile", "Dana"], key=sort_key) == [
            "Alice", "bob", "Dana", "émile",
        ]


# ============================================
# Notifier
# ============================================
class TestNotifier:
    def test_starts_hidden(self, notifier):
        assert notifier.current() == {"message": "", "visible": False, "shown_at": None}

    def test_visible_for_display_window(self, notifier, scheduler):
        notifier.notify("Saved")
        scheduler.advance(2.1)
        assert notifier.current()["visible"] is True
        scheduler.advance(0.1)
        assert notifier.current()["visible"] is False
        assert notifier.current()["message"] == "Saved"

    def test_new_notification_resets_dismissal(self, notifier, scheduler):
        notifier.notify("Saved")
        scheduler.advance(2.0)
        notifier.notify("Sorted A–Z")
        scheduler.advance(1.0)
        assert notifier.current()["visible"] is True
        assert notifier.current()["message"] == "Sorted A–Z"
        scheduler.advance(1.2)
        assert notifier.current()["visible"] is False

    def test_dismiss(self, notifier, scheduler):
        notifier.notify("Cleared")
        notifier.dismiss()
        assert notifier.current()["visible"] is False
        assert scheduler.pending() == 0


# ============================================
# Roster endpoints
# ============================================
class TestRosterEndpoints:
    def test_get_empty_roster(self, client):
        response = client.get("/api/v1/roster")
        assert response.status_code == 200
        assert response.json() == {"names": [], "count": 0, "count_label": "0 names"}

    def test_save_roster(self, client, roster_repo, notifier):
        response = client.put("/api/v1/roster", json={"text": "Alice\n Bob \n\nCharlie"})
        assert response.status_code == 200
        data = response.json()
        assert data["names"] == ["Alice", "Bob", "Charlie"]
        assert data["count_label"] == "3 names"
        assert roster_repo.read() == ["Alice", "Bob", "Charlie"]
        assert notifier.current()["message"] == "Saved"

    def test_save_single_name_label(self, client):
        data = client.put("/api/v1/roster", json={"text": "Solo"}).json()
        assert data["count_label"] == "1 name"

    def test_save_empty_text_clears_record(self, client, roster_repo):
        client.put("/api/v1/roster", json={"text": "A\nB"})
        client.put("/api/v1/roster", json={"text": "  \n"})
        assert roster_repo.read() is None

    def test_sort_roster(self, client, notifier):
        response = client.post("/api/v1/roster/sort", json={"text": "charlie\nAlice\nbob"})
        assert response.status_code == 200
        assert response.json()["names"] == ["Alice", "bob", "charlie"]
        assert notifier.current()["message"] == "Sorted A–Z"

    def test_sort_empty_is_noop(self, client, roster_store, notifier):
        roster_store.save(ROSTER)
        response = client.post("/api/v1/roster/sort", json={"text": ""})
        assert response.json()["names"] == ROSTER
        assert notifier.current()["message"] == ""

    def test_clear_requires_confirmation(self, client, roster_store):
        roster_store.save(ROSTER)
        response = client.delete("/api/v1/roster")
        assert response.status_code == 409
        assert roster_store.names == ROSTER

    def test_clear_confirmed(self, client, roster_store, roster_repo, notifier):
        roster_store.save(ROSTER)
        response = client.delete("/api/v1/roster?confirm=true")
        assert response.status_code == 200
        assert response.json()["status"] == CLEAR_DONE
        assert response.json()["roster"]["names"] == []
        assert roster_repo.read() is None
        assert notifier.current()["message"] == "Cleared"

    def test_clear_when_empty(self, client):
        response = client.delete("/api/v1/roster?confirm=true")
        assert response.status_code == 200
        assert response.json()["status"] == CLEAR_EMPTY

    def test_clear_cancels_active_selection(self, client, controller, scheduler):
        client.post("/api/v1/selection/start", json={"names": ROSTER})
        client.delete("/api/v1/roster?confirm=true")
        assert controller.session.phase is Phase.IDLE
        scheduler.advance(10.0)
        assert controller.session.phase is Phase.IDLE

    def test_editor_clear_unconfirmed_with_text(self, editor):
        assert editor.clear(confirmed=False, text="Alice") == CLEAR_CONFIRMATION_REQUIRED


# ============================================
# Selection endpoints
# ============================================
class TestSelectionEndpoints:
    def test_initial_state_idle(self, client):
        data = client.get("/api/v1/selection").json()
        assert data["phase"] == "idle"
        assert data["remaining_seconds"] == 5
        assert data["winners"] == []

    def test_roles(self, client):
        assert client.get("/api/v1/roles").json() == list(ROLES)

    def test_start_with_names(self, client, roster_repo):
        response = client.post("/api/v1/selection/start", json={"names": ROSTER})
        assert response.status_code == 202
        data = response.json()
        assert data["phase"] == "selecting"
        assert data["candidates"] == ROSTER
        assert data["remaining_seconds"] == 5
        assert roster_repo.read() == ROSTER

    def test_start_uses_stored_roster(self, client, roster_store):
        roster_store.save(ROSTER)
        response = client.post("/api/v1/selection/start")
        assert response.status_code == 202
        assert response.json()["candidates"] == ROSTER

    def test_start_insufficient(self, client, roster_store, notifier):
        roster_store.save(["Alice"])
        response = client.post("/api/v1/selection/start", json={"names": ["Alice", "Bob"]})
        assert response.status_code == 400
        assert "at least 3" in response.json()["detail"]
        assert client.get("/api/v1/selection").json()["phase"] == "idle"
        assert roster_store.names == ["Alice"]
        current = client.get("/api/v1/notifications/current").json()
        assert current["message"] == "Need at least 3 names"
        assert current["visible"] is True

    def test_start_invalid_payload(self, client):
        response = client.post("/api/v1/selection/start", json={"names": "Alice"})
        assert response.status_code == 422

    def test_full_draw(self, client, scheduler):
        client.post("/api/v1/selection/start", json={"names": ROSTER})
        scheduler.advance(0.5)
        mid = client.get("/api/v1/selection").json()
        assert mid["phase"] == "selecting"
        assert len(mid["highlighted"]) == 3
        scheduler.advance(4.5)
        data = client.get("/api/v1/selection").json()
        assert data["phase"] == "revealed"
        assert data["remaining_seconds"] == 0
        assert len(set(data["winners"])) == 3
        assert set(data["winners"]) <= set(ROSTER)
        assert [a["role"] for a in data["assignments"]] == list(ROLES)

    def test_restart_supersedes(self, client, scheduler):
        first = client.post("/api/v1/selection/start", json={"names": ROSTER}).json()
        scheduler.advance(2.0)
        second = client.post(
            "/api/v1/selection/start", json={"names": ["Xavier", "Yolanda", "Zed"]}
        ).json()
        assert second["generation"] > first["generation"]
        assert second["remaining_seconds"] == 5
        scheduler.advance(5.0)
        data = client.get("/api/v1/selection").json()
        assert set(data["winners"]) == {"Xavier", "Yolanda", "Zed"}

    def test_cancel(self, client, scheduler):
        client.post("/api/v1/selection/start", json={"names": ROSTER})
        response = client.post("/api/v1/selection/cancel")
        assert response.status_code == 200
        assert response.json()["phase"] == "idle"
        scheduler.advance(10.0)
        assert client.get("/api/v1/selection").json()["phase"] == "idle"

    def test_cancel_idempotent(self, client):
        first = client.post("/api/v1/selection/cancel").json()
        second = client.post("/api/v1/selection/cancel").json()
        assert first == second


class TestNotificationEndpoint:
    def test_current_notification_expires(self, client, scheduler):
        client.put("/api/v1/roster", json={"text": "A\nB\nC"})
        assert client.get("/api/v1/notifications/current").json()["visible"] is True
        scheduler.advance(2.2)
        assert client.get("/api/v1/notifications/current").json()["visible"] is False
