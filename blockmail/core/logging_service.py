"""
Centralized logging service for the blockmail builder.
Mirrors every entry to the standard logger and, when a LOG_DB path is
configured, stores it in an app_logs sqlite table for later inspection.
"""

import os
import json
import logging
import sqlite3
from datetime import datetime
from flask import request, has_request_context
from .config import Config

logger = logging.getLogger('blockmail')

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


class LoggingService:
    """Centralized logging service for builder events"""

    db_path = Config.LOG_DB

    @staticmethod
    def configure(db_path):
        """Point the service at a sqlite file (or None to disable storage)"""
        LoggingService.db_path = db_path
        if db_path:
            directory = os.path.dirname(db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            LoggingService._ensure_logs_table()

    @staticmethod
    def _ensure_logs_table():
        """Ensure the app_logs table exists"""
        with sqlite3.connect(LoggingService.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS app_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT,
                    request_path TEXT
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON app_logs(timestamp DESC)
            """)
            conn.commit()

    @staticmethod
    def _get_request_path():
        if not has_request_context():
            return None
        return request.path

    @staticmethod
    def log(level, source, message, details=None):
        """
        Log a message to the console logger and the log store

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (builder, sessions, host, ...)
            message (str): Main log message
            details (dict): Additional details, stored as JSON
        """
        level = level.upper()
        if isinstance(details, dict):
            details = json.dumps(details, sort_keys=True, default=str)

        line = f"[{source}] {message}"
        if details:
            line = f"{line} {details}"
        logger.log(_LEVELS.get(level, logging.INFO), line)

        if not LoggingService.db_path:
            return

        try:
            with sqlite3.connect(LoggingService.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO app_logs (timestamp, level, source, message, details, request_path)
                    VALUES (?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now().isoformat(), level, source, message, details,
                    LoggingService._get_request_path()
                ))
                conn.commit()
        except sqlite3.Error as e:
            # Storage problems must never break the caller
            logger.error(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details)

    @staticmethod
    def info(source, message, details=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details)

    @staticmethod
    def warning(source, message, details=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details)

    @staticmethod
    def error(source, message, details=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details)

    @staticmethod
    def recent(limit=50, source=None):
        """Return the most recent stored entries, newest first"""
        if not LoggingService.db_path:
            return []
        query = 'SELECT * FROM app_logs'
        params = []
        if source:
            query += ' WHERE source = ?'
            params.append(source)
        query += ' ORDER BY id DESC LIMIT ?'
        params.append(limit)

        with sqlite3.connect(LoggingService.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [dict(row) for row in cursor.fetchall()]


def db_log(level, source, message, details=None):
    """Shortcut used by the builder modules"""
    LoggingService.log(level, source, message, details)
