import os
import sqlite3
import threading
from typing import Any, Dict, List, Tuple

from endstone_itemsets.utils.config_util import USAGE_CATEGORY, get_data_folder


def player_key(player) -> str:
    """XUID of the player, or the lower-cased name when the session has none."""
    xuid = getattr(player, "xuid", "") or ""
    return str(xuid) if xuid else str(player.name).lower()


# DB
class DatabaseManager:
    _lock = threading.Lock()

    def __init__(self, db_name: str, folder: str = None):
        if db_name == ":memory:" or os.path.isabs(db_name):
            self.db_path = db_name
        else:
            folder = folder or os.path.join(get_data_folder(), "database")
            os.makedirs(folder, exist_ok=True)
            self.db_path = os.path.join(folder, db_name if db_name.endswith('.db') else db_name + '.db')

        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        if self.db_path != ":memory:":
            self.conn.execute("PRAGMA journal_mode=WAL;")
        self.cursor = self.conn.cursor()

    def execute(self, query: str, params: Tuple = ()) -> sqlite3.Cursor:
        with self._lock:
            self.cursor.execute(query, params)
            if not query.strip().upper().startswith("SELECT"):
                self.conn.commit()
            return self.cursor

    def create_table(self, table_name: str, columns: Dict[str, str], unique: list = None):
        column_definitions = ', '.join([f"{col} {dtype}" for col, dtype in columns.items()])
        query = f"CREATE TABLE IF NOT EXISTS {table_name} ({column_definitions})"
        with self._lock:
            self.cursor.execute(query)
            if unique:
                index_name = f"idx_{table_name}_{'_'.join(unique)}"
                cols = ', '.join(unique)
                self.cursor.execute(
                    f"CREATE UNIQUE INDEX IF NOT EXISTS {index_name} ON {table_name} ({cols})"
                )
            self.conn.commit()

    def fetch_by_condition(self, table_name: str, condition: str, params: Tuple) -> List[Dict[str, Any]]:
        with self._lock:
            query = f"SELECT * FROM {table_name} WHERE {condition}"
            self.cursor.execute(query, params)
            columns = [desc[0] for desc in self.cursor.description]
            return [dict(zip(columns, row)) for row in self.cursor.fetchall()]

    def delete(self, table_name: str, condition: str, params: Tuple):
        with self._lock:
            query = f"DELETE FROM {table_name} WHERE {condition}"
            self.cursor.execute(query, params)
            self.conn.commit()

    def close_connection(self):
        self.conn.close()


class UsageDB(DatabaseManager):
    """Per-player record of which one-use item commands have already run."""

    TABLE = "usage_records"

    def __init__(self, db_name: str, folder: str = None, category: str = USAGE_CATEGORY):
        super().__init__(db_name, folder)
        self.category = category
        self.create_tables()

    def create_tables(self):
        self.create_table(self.TABLE, {
            "xuid": "TEXT NOT NULL",
            "category": "TEXT NOT NULL",
            "command": "TEXT NOT NULL",
            "has_run": "INTEGER NOT NULL DEFAULT 0"
        }, unique=["xuid", "category", "command"])

    def get(self, key: str, command_name: str) -> bool | None:
        rows = self.fetch_by_condition(
            self.TABLE, "xuid = ? AND category = ? AND command = ?",
            (key, self.category, command_name)
        )
        if not rows:
            return None
        return bool(rows[0]["has_run"])

    def put(self, key: str, command_name: str, value: bool):
        self.execute(
            f"INSERT INTO {self.TABLE} (xuid, category, command, has_run) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(xuid, category, command) DO UPDATE SET has_run = excluded.has_run",
            (key, self.category, command_name, int(bool(value)))
        )

    def remove(self, key: str, command_name: str):
        self.delete(
            self.TABLE, "xuid = ? AND category = ? AND command = ?",
            (key, self.category, command_name)
        )

    def get_record(self, key: str) -> dict[str, bool]:
        rows = self.fetch_by_condition(self.TABLE, "xuid = ? AND category = ?", (key, self.category))
        return {row["command"]: bool(row["has_run"]) for row in rows}
