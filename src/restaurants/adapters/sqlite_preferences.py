import sqlite3
import threading

from src.restaurants.adapters.db_manager import DatabaseManager
from src.restaurants.domain.errors import LocalStoreError
from src.restaurants.domain.ports import ILocalStore
from src.shared.telemetry import Telemetry


class SQLitePreferenceStore(ILocalStore):
    """
    On-device key-value cache backed by the `key_value` table.
    Values are opaque strings; callers own the serialization.
    """

    def __init__(self, db_manager: DatabaseManager) -> None:
        self.telemetry = Telemetry("SQLitePreferenceStore")
        self.db_manager = db_manager
        # One shared connection is used from the UI and the watch thread
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        return self.db_manager.get_connection()

    def get(self, key: str) -> str | None:
        with self._lock:
            try:
                row = (
                    self._get_connection()
                    .execute("SELECT value FROM key_value WHERE key = ?", (key,))
                    .fetchone()
                )
            except sqlite3.Error as e:
                raise LocalStoreError(f"get failed for {key}") from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                conn = self._get_connection()
                conn.execute(
                    "INSERT OR REPLACE INTO key_value (key, value, updated_at) "
                    "VALUES (?, ?, CURRENT_TIMESTAMP)",
                    (key, value),
                )
                conn.commit()
            except sqlite3.Error as e:
                raise LocalStoreError(f"set failed for {key}") from e

    def remove(self, key: str) -> None:
        with self._lock:
            try:
                conn = self._get_connection()
                conn.execute("DELETE FROM key_value WHERE key = ?", (key,))
                conn.commit()
            except sqlite3.Error as e:
                raise LocalStoreError(f"remove failed for {key}") from e

    def keys(self, prefix: str = "") -> list[str]:
        """Helper for maintenance and tests."""
        with self._lock:
            try:
                rows = (
                    self._get_connection()
                    .execute(
                        "SELECT key FROM key_value WHERE key LIKE ? ORDER BY key",
                        (f"{prefix}%",),
                    )
                    .fetchall()
                )
            except sqlite3.Error as e:
                raise LocalStoreError(f"keys failed for prefix {prefix!r}") from e
        return [row[0] for row in rows]
