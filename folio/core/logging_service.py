"""
Centralized logging service for Folio.
Provides structured logging with database storage and easy integration.
"""

import json
from datetime import datetime
from flask import request, has_request_context
from .database import Database


class LoggingService:
    """Centralized logging service for application-wide logging"""

    # Set by the Folio extension; None means console-only
    db_path = None

    @classmethod
    def configure(cls, db_path):
        """Point the service at a log database and make sure the table exists"""
        cls.db_path = db_path
        if db_path:
            cls._ensure_logs_table()

    @classmethod
    def _ensure_logs_table(cls):
        """Ensure the app_logs table exists"""
        try:
            with Database.connect(cls.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS app_logs (
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
                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                    ON app_logs(timestamp DESC)
                """)
                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_logs_source
                    ON app_logs(source)
                """)
                conn.commit()
        except Exception as e:
            print(f"Failed to ensure logs table: {e}")

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')
            return ip_address, user_agent, request.path
        except Exception:
            return None, None, None

    @classmethod
    def log(cls, level, source, message, details=None, user_id=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (projects, skills, auth, storage, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        timestamp = datetime.now().isoformat()

        if not cls.db_path:
            print(f"[{timestamp}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            return

        try:
            ip_address, user_agent, request_path = cls._get_request_context()

            with Database.connect(cls.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level.upper(), source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
                conn.commit()

        except Exception as e:
            # Fallback to console logging if database fails
            print(f"[{timestamp}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    @classmethod
    def debug(cls, source, message, details=None, user_id=None):
        cls.log('DEBUG', source, message, details, user_id)

    @classmethod
    def info(cls, source, message, details=None, user_id=None):
        cls.log('INFO', source, message, details, user_id)

    @classmethod
    def warning(cls, source, message, details=None, user_id=None):
        cls.log('WARNING', source, message, details, user_id)

    @classmethod
    def error(cls, source, message, details=None, user_id=None):
        cls.log('ERROR', source, message, details, user_id)

    @classmethod
    def critical(cls, source, message, details=None, user_id=None):
        cls.log('CRITICAL', source, message, details, user_id)

    @classmethod
    def log_user_action(cls, source, action, user_id=None, details=None):
        """Log user actions (sign in, sign out, ...)"""
        cls.info(source, f"User action: {action}", details, user_id)

    @classmethod
    def log_error_with_traceback(cls, source, error, details=None):
        """Log error with the traceback it was raised with"""
        import traceback
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': ''.join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        }
        if details:
            error_details['additional_details'] = details

        cls.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @classmethod
    def log_security_event(cls, message, details=None, user_id=None):
        """Log security-related events"""
        cls.warning('security', message, details, user_id)

    @classmethod
    def recent(cls, limit=50, source=None):
        """Return the most recent log entries, newest first"""
        if not cls.db_path:
            return []
        with Database.connect(cls.db_path) as conn:
            cursor = conn.cursor()
            if source:
                cursor.execute("""
                    SELECT timestamp, level, source, message, details FROM app_logs
                    WHERE source = ? ORDER BY id DESC LIMIT ?
                """, (source, limit))
            else:
                cursor.execute("""
                    SELECT timestamp, level, source, message, details FROM app_logs
                    ORDER BY id DESC LIMIT ?
                """, (limit,))
            return [dict(row) for row in cursor.fetchall()]

