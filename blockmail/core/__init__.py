"""
blockmail Core
==============

Core utilities shared by the blockmail modules.
"""

from .config import Config
from .logging_service import LoggingService, db_log, logger

__all__ = ['Config', 'LoggingService', 'db_log', 'logger']
