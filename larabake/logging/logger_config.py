"""
Logging Configuration
Rotating log files for the framework channel, with credential redaction
"""
import json
import logging
import logging.handlers
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union


class SensitiveDataFilter(logging.Filter):
    """
    Redacts credentials from log records

    Mail transports log their settings and SMTP exchanges, so passwords,
    tokens and AUTH payloads are masked before a record is written.
    """

    KEYWORDS = ('password', 'passwd', 'pwd', 'token', 'secret', 'api_key')

    PATTERNS = (
        # password=hunter2, token=abc
        (r'(\b(?:{keys})=)[^&\s,]+', r'\1[REDACTED]'),
        # "password": "hunter2" and 'password': 'hunter2' (logged dicts)
        (r'''(["'](?:{keys})["']\s*:\s*)(["'])[^"']*\2''', r'\1\2[REDACTED]\2'),
        (r'(Authorization:\s+(?:Bearer|Basic)\s+)\S+', r'\1[REDACTED]'),
        (r'(AUTH\s+(?:PLAIN|LOGIN)\s+)[A-Za-z0-9+/=]+', r'\1[REDACTED]'),
    )

    def __init__(self, extra_patterns: Optional[Iterable[str]] = None):
        super().__init__()
        keys = '|'.join(self.KEYWORDS)
        self._patterns = [
            (re.compile(pattern.format(keys=keys), re.IGNORECASE), replacement)
            for pattern, replacement in self.PATTERNS
        ]
        self._patterns.extend(
            (re.compile(pattern, re.IGNORECASE), '[REDACTED]') for pattern in extra_patterns or ()
        )

    def redact(self, text: str) -> str:
        for pattern, replacement in self._patterns:
            text = pattern.sub(replacement, text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        # Render the message first so redaction sees interpolated arguments
        if record.args:
            record.msg = record.getMessage()
            record.args = None
        if isinstance(record.msg, str):
            record.msg = self.redact(record.msg)
        return True


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line

    Values passed with `extra=` (e.g. `template`, `mailer`) are kept as
    top-level keys.
    """

    RESERVED = frozenset(vars(logging.makeLogRecord({})).keys()) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in self.RESERVED and key not in entry:
                entry[key] = value

        return json.dumps(entry, default=str)


class LoggerConfig:
    """
    Attaches file (and optionally console) handlers to a logger

    Every module logs through `larabake.logging.getLogger(__name__)`, so
    configuring the `larabake` logger captures the view engine, the cache,
    queries and the mailer in one file.

    Example:
        LoggerConfig.setup_logger('larabake', format_type='text')
        LoggerConfig.setup_logger('larabake.mailer', file_name='mail')
    """

    LEVELS = {
        'production': logging.WARNING,
        'staging': logging.INFO,
        'local': logging.DEBUG,
        'development': logging.DEBUG,
        'testing': logging.ERROR,
    }

    @classmethod
    def level_for(cls, environment: str) -> int:
        return cls.LEVELS.get(environment.lower(), logging.INFO)

    @classmethod
    def setup_logger(
        cls,
        name: str = 'larabake',
        format_type: str = 'json',
        log_dir: Union[str, Path, None] = None,
        file_name: Optional[str] = None,
        level: Optional[int] = None,
        console: Optional[bool] = None,
        filter_sensitive: bool = True,
        extra_patterns: Optional[Iterable[str]] = None,
    ) -> logging.Logger:
        """
        Configure `name` to write to `<log_dir>/<file_name>.log`

        Args:
            format_type: 'json' or 'text'
            log_dir: Defaults to storage/logs
            file_name: Defaults to the logger name
            level: Defaults to the level of `app.APP_ENV`
            console: Also log to stderr; defaults to `app.APP_DEBUG`
        """
        from larabake.defaults import DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_MAX_BYTES
        from larabake.support import Config, Storage

        if level is None:
            level = cls.level_for(Config.get('app.APP_ENV', 'local'))
        if console is None:
            console = bool(Config.get('app.APP_DEBUG', False))

        log_dir = Path(log_dir) if log_dir is not None else Storage.logs()
        log_file = Storage.ensure_directory(log_dir) / f'{file_name or name}.log'

        if format_type == 'json':
            formatter: logging.Formatter = JSONFormatter()
        else:
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        handlers: list = [logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=DEFAULT_LOG_MAX_BYTES,
            backupCount=DEFAULT_LOG_BACKUP_COUNT,
            encoding='utf-8',
        )]
        if console:
            handlers.append(logging.StreamHandler())

        sensitive = SensitiveDataFilter(extra_patterns) if filter_sensitive else None

        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()

        for handler in handlers:
            handler.setFormatter(formatter)
            if sensitive is not None:
                handler.addFilter(sensitive)
            logger.addHandler(handler)

        logger.setLevel(level)
        logger.propagate = False
        return logger
