import logging
from werkzeug.security import generate_password_hash, check_password_hash
from ...core import Config, Database

logger = logging.getLogger(__name__)


class AdminDatabase:
    @staticmethod
    def init_table():
        """Initialize the admins table"""
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                CREATE TABLE IF NOT EXISTS {Config.ADMIN_TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT UNIQUE NOT NULL,
                    password_hash TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            cursor.execute(f"SELECT COUNT(*) FROM {Config.ADMIN_TABLE}")
            if cursor.fetchone()[0] == 0:
                logger.info("No admin users found. Set ADMIN_USERNAME/ADMIN_PASSWORD or run `flask create-admin`.")

    @staticmethod
    def get_by_username(username):
        return Database.fetch_one(
            f"SELECT id, username, password_hash, created_at FROM {Config.ADMIN_TABLE} WHERE username = ?",
            (username,)
        )

    @staticmethod
    def create_admin(username, password):
        """Create an admin account. Returns the new id."""
        admin_id, _ = Database.execute(
            f"INSERT INTO {Config.ADMIN_TABLE} (username, password_hash) VALUES (?, ?)",
            (username, generate_password_hash(password))
        )
        logger.info("Created admin %s", username)
        return admin_id

    @staticmethod
    def ensure_admin(username, password):
        """Create the admin unless one with that username already exists"""
        if not username or not password:
            return False
        if AdminDatabase.get_by_username(username):
            return False
        AdminDatabase.create_admin(username, password)
        return True

    @staticmethod
    def authenticate(username, password):
        """Return the admin record if the credentials match, else None"""
        admin = AdminDatabase.get_by_username(username)
        if admin and check_password_hash(admin['password_hash'], password):
            return admin
        return None
