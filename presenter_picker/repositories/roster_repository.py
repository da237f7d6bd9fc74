# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Roster data access.
One JSON array of names stored under a fixed key in a key-value table.
NO business rules here — every failure surfaces as StorageUnavailable.
"""

import json
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from presenter_picker.core.config import settings
from presenter_picker.core.exceptions import StorageUnavailable


class RosterRepository:
    """Durable roster storage backed by the `kv_store` table."""

    def __init__(self, engine: Engine, key: str = settings.ROSTER_STORAGE_KEY) -> None:
        self._engine = engine
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    # ── Schema ──

    def init_schema(self) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(text("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key   VARCHAR(255) PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """))
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Cannot create roster table: {exc}") from exc

    # ── Read ──

    def read(self) -> Optional[list[str]]:
        """Return the stored roster, or None when no record exists."""
        try:
            with self._engine.connect() as conn:
                raw = conn.execute(
                    text("SELECT value FROM kv_store WHERE key = :key"),
                    {"key": self._key},
                ).scalar()
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Cannot read roster: {exc}") from exc

        if raw is None:
            return None
        try:
            names = json.loads(raw)
        except ValueError as exc:
            raise StorageUnavailable(f"Stored roster is not valid JSON: {exc}") from exc
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise StorageUnavailable("Stored roster is not a JSON array of strings")
        return names

    # ── Write ──

    def write(self, names: list[str]) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    text("""
                        INSERT INTO kv_store (key, value) VALUES (:key, :value)
                        ON CONFLICT (key) DO UPDATE SET value = excluded.value
                    """),
                    {"key": self._key, "value": json.dumps(names)},
                )
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Cannot write roster: {exc}") from exc

    def delete(self) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    text("DELETE FROM kv_store WHERE key = :key"),
                    {"key": self._key},
                )
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Cannot delete roster: {exc}") from exc

    def dispose(self) -> None:
        self._engine.dispose()
