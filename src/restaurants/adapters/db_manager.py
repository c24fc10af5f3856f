import os
import sqlite3
from typing import Any

from src.shared.telemetry import Telemetry, measure_time


class DatabaseManager:
    """
    Responsible for:
    1. Managing the SQLite connection lifecycle.
    2. Initializing the key-value schema (DDL).
    3. Ensuring pickle-safety for Streamlit Session State.
    """

    def __init__(self, db_path: str = "data/preferences.db") -> None:
        self.db_path = db_path
        self.telemetry = Telemetry("DatabaseManager")
        self._shared_connection: sqlite3.Connection | None = None

        self._ensure_db_exists()

        # For in-memory DBs, we must keep the connection open immediately
        if self.db_path == ":memory:":
            self._shared_connection = sqlite3.connect(
                ":memory:", check_same_thread=False
            )

        self._init_schema()

    # --- SERIALIZATION LOGIC (Pickle Safety) ---
    def __getstate__(self) -> dict[str, Any]:
        """Drops the unpicklable SQLite connection."""
        state = self.__dict__.copy()
        if "_shared_connection" in state:
            del state["_shared_connection"]
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        """
        Restores state with no connection; get_connection() reopens lazily.
        In-memory data does not survive this.
        """
        self.__dict__.update(state)
        self._shared_connection = None

    def get_connection(self) -> sqlite3.Connection:
        """Returns a usable database connection, reconnecting if necessary."""
        if self._shared_connection:
            try:
                self._shared_connection.execute("SELECT 1")
                return self._shared_connection
            except sqlite3.ProgrammingError:
                # Connection was closed externally
                self._shared_connection = None

        # Snapshot callbacks read the cache from the store's watch thread
        conn = sqlite3.connect(self.db_path, check_same_thread=False)

        if self.db_path != ":memory:":
            conn.execute("PRAGMA journal_mode=WAL")

        self._shared_connection = conn
        return conn

    def close(self) -> None:
        if self._shared_connection:
            self._shared_connection.close()
            self._shared_connection = None

    def _ensure_db_exists(self) -> None:
        if self.db_path == ":memory:":
            return
        dir_name = os.path.dirname(self.db_path)
        if dir_name:
            os.makedirs(dir_name, exist_ok=True)

    @measure_time("db_init_schema")
    def _init_schema(self) -> None:
        conn = self.get_connection()
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS key_value
            (
                key        TEXT PRIMARY KEY,
                value      TEXT NOT NULL,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.commit()
