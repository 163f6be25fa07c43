"""
Centralized Logging Configuration

Provides register logging with:
- Configurable log levels
- Automatic log rotation
- Secret masking (remote store keys, summarizer key, customer phone numbers)
"""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Pattern

import config


class SecretMaskingFilter(logging.Filter):
    """
    Logging filter that masks sensitive data in log records.

    Masks:
    - API keys (Gemini key query parameter, apikey headers)
    - Bearer tokens / JWTs (Supabase anon key)
    - Customer phone numbers
    """

    PATTERNS: list[tuple[Pattern, str]] = [
        # API keys (query string or key=value)
        (re.compile(r'((?:api[_-]?)?key["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-]{20,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_API_KEY]\3'),

        # Tokens
        (re.compile(r'(Bearer\s+)([A-Za-z0-9_\-\.]+)', re.IGNORECASE), r'\1[REDACTED_BEARER_TOKEN]'),
        (re.compile(r'\beyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+'), '[REDACTED_JWT]'),

        # Taiwanese mobile numbers (09xx-xxx-xxx) and international format
        (re.compile(r'(?<!\d)(?:\+886[-\s]?|0)9\d{2}[-\s]?\d{3}[-\s]?\d{3}(?!\d)'), '[REDACTED_PHONE]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask secrets in the message and its string arguments.

        Returns:
            True (always - we modify but don't block records)
        """
        if record.msg:
            for pattern, replacement in self.PATTERNS:
                record.msg = pattern.sub(replacement, str(record.msg))

        if record.args and isinstance(record.args, tuple):
            masked_args = []
            for arg in record.args:
                if isinstance(arg, str):
                    for pattern, replacement in self.PATTERNS:
                        arg = pattern.sub(replacement, arg)
                masked_args.append(arg)
            record.args = tuple(masked_args)

        return True


def setup_logging():
    """
    Initialize centralized logging configuration.

    Call this function once at application startup (in run.py).

    Configuration:
    - Log level from config.LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)
    - Automatic rotation every midnight
    - Keeps logs for config.LOG_RETENTION_DAYS days
    - Masks secrets if config.LOG_MASK_SECRETS is True
    - Writes to <LOG_DIR>/register.log
    """
    log_dir = Path(getattr(config, "LOG_DIR", "logs"))
    log_dir.mkdir(exist_ok=True)

    log_level_str = getattr(config, "LOG_LEVEL", "INFO")
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    retention_days = getattr(config, "LOG_RETENTION_DAYS", 7)
    mask_secrets = getattr(config, "LOG_MASK_SECRETS", True)

    formatter = logging.Formatter(
        fmt='%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_dir / "register.log",
        when="midnight",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    if mask_secrets:
        file_handler.addFilter(SecretMaskingFilter())
        console_handler.addFilter(SecretMaskingFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # aiosqlite logs every statement at DEBUG
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.info("=" * 80)
    logging.info(f"Logging initialized: Level={log_level_str}, Retention={retention_days} days, Masking={'ENABLED' if mask_secrets else 'DISABLED'}")
    logging.info("=" * 80)
