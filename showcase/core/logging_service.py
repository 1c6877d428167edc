"""
Centralized logging service for the Showcase platform.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
import traceback
from datetime import datetime, timedelta
from flask import request, has_request_context
from .database import Database
from .config import Config

stdlib_logger = logging.getLogger('showcase')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _ensure_logs_table():
        """Ensure the app_logs table exists"""
        with Database.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {Config.LOGS_TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT,
                    ip_address TEXT,
                    user_agent TEXT,
                    request_path TEXT,
                    user_id TEXT
                )
            """)
            cursor.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON {Config.LOGS_TABLE}(timestamp DESC)
            """)
            cursor.execute(f"""
                CREATE INDEX IF NOT EXISTS idx_logs_level
                ON {Config.LOGS_TABLE}(level)
            """)

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the stdlib logger and the app_logs table

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (auth, projects, newsletter, etc.)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        stdlib_logger.log(getattr(logging, level, logging.INFO), "[%s] %s", source, message)

        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        try:
            LoggingService._ensure_logs_table()
            ip_address, user_agent, request_path = LoggingService._get_request_context()

            with Database.connection() as conn:
                conn.execute(f"""
                    INSERT INTO {Config.LOGS_TABLE}
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now().isoformat(), level, source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
        except Exception as e:
            # Console logging already happened; the database copy is best effort
            stdlib_logger.warning("Logging service error: %s", e)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log user actions (login, create, delete, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        LoggingService.warning('security', message, details)

    @staticmethod
    def get_recent(limit=50, level=None):
        LoggingService._ensure_logs_table()
        if level:
            return Database.fetch_all(
                f"SELECT * FROM {Config.LOGS_TABLE} WHERE level = ? ORDER BY id DESC LIMIT ?",
                (level.upper(), limit)
            )
        return Database.fetch_all(
            f"SELECT * FROM {Config.LOGS_TABLE} ORDER BY id DESC LIMIT ?", (limit,)
        )

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()
        try:
            LoggingService._ensure_logs_table()
            _, deleted_count = Database.execute(
                f"DELETE FROM {Config.LOGS_TABLE} WHERE timestamp < ?", (cutoff_iso,)
            )
            LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count
        except Exception as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0

