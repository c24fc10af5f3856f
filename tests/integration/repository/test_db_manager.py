import os
import pickle

from src.restaurants.adapters.db_manager import DatabaseManager


class TestDatabaseManagerInit:
    def test_init_creates_file_db(self, tmp_path):
        db_path = str(tmp_path / "prefs.db")
        db = DatabaseManager(db_path)

        assert os.path.exists(db_path)
        db.close()

    def test_init_creates_directory_if_missing(self, tmp_path):
        db_path = str(tmp_path / "subdir" / "nested" / "prefs.db")
        db = DatabaseManager(db_path)

        assert os.path.exists(db_path)
        db.close()

    def test_init_memory_db_keeps_connection_open(self):
        db = DatabaseManager(":memory:")

        assert db._shared_connection is not None
        assert db._shared_connection.execute("SELECT 1").fetchone() == (1,)
        db.close()

    def test_init_creates_key_value_table(self, tmp_path):
        db = DatabaseManager(str(tmp_path / "prefs.db"))
        cursor = db.get_connection().execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        )

        assert "key_value" in {row[0] for row in cursor.fetchall()}
        db.close()


class TestConnectionManagement:
    def test_get_connection_reuses_existing_connection(self, tmp_path):
        db = DatabaseManager(str(tmp_path / "prefs.db"))

        assert db.get_connection() is db.get_connection()
        db.close()

    def test_get_connection_reconnects_after_close(self, tmp_path):
        db = DatabaseManager(str(tmp_path / "prefs.db"))

        conn1 = db.get_connection()
        db.close()
        conn2 = db.get_connection()

        assert conn1 is not conn2
        assert conn2.execute("SELECT 1").fetchone() == (1,)
        db.close()

    def test_get_connection_recovers_from_external_close(self, tmp_path):
        db = DatabaseManager(str(tmp_path / "prefs.db"))

        db.get_connection().close()
        conn = db.get_connection()

        assert conn.execute("SELECT 1").fetchone() == (1,)
        db.close()


class TestPickleSafety:
    def test_pickle_drops_connection_and_reconnects(self, tmp_path):
        db = DatabaseManager(str(tmp_path / "prefs.db"))
        db.get_connection()

        restored = pickle.loads(pickle.dumps(db))

        assert restored._shared_connection is None
        assert restored.get_connection().execute("SELECT 1").fetchone() == (1,)
        restored.close()
        db.close()
