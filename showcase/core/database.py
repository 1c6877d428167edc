import os
import sqlite3
from contextlib import contextmanager
from .config import get_config_value


class Database:
    """Thin sqlite3 helper shared by every module's database class."""

    @staticmethod
    def get_path():
        return get_config_value('SHOWCASE_DB', 'showcase.db')

    @staticmethod
    def connect(path=None):
        path = path or Database.get_path()
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        conn = sqlite3.connect(path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    @contextmanager
    def connection(path=None):
        """
        Yield a connection that commits on success, rolls back on error,
        and is always closed.
        """
        conn = Database.connect(path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def fetch_all(query, params=()):
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [dict(row) for row in cursor.fetchall()]

    @staticmethod
    def fetch_one(query, params=()):
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            row = cursor.fetchone()
            return dict(row) if row else None

    @staticmethod
    def execute(query, params=()):
        """Run a write statement. Returns (lastrowid, rowcount)."""
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid, cursor.rowcount
