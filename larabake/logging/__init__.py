"""
Logging Package
Structured logging with security features

Provides drop-in replacement for standard logging that uses
structured JSON logging with sensitive data filtering.
"""
from larabake.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'getLogger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Only allows logger names that are:
    - None (root logger)
    - Configured in app.ALLOWED_LOGGING_HANDLERS (e.g., 'mail', 'security')
    - Module-based names (containing '.') like 'larabake.view.view'

    Example:
        from larabake.logging import getLogger
        logger = getLogger(__name__)

        logger.debug("Rendering %s", path)
    """
    if name is not None and '.' not in name:
        from larabake.support import Config
        allowed_handlers = Config.get('app.ALLOWED_LOGGING_HANDLERS', {}) or {}

        allowed_names = [
            handler_config.get('name')
            for handler_config in allowed_handlers.values()
            if handler_config.get('name') is not None
        ]

        if name not in allowed_names:
            # Force arbitrary names to use root logger
            name = None

    return logging.getLogger(name)
