"""
Logging configuration for the Trading Journal application.

Provides structured JSON logging with support for multiple log files,
log rotation, and sensitive data masking.
"""

import json
import logging
import logging.handlers
import os
import re
from datetime import datetime
from typing import Any, Dict

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RESERVED_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in logs."""

    SENSITIVE_KEYS = {
        "password",
        "password_hash",
        "secret",
        "token",
        "access_token",
        "authorization",
        "client_secret",
    }

    _PATTERN = re.compile(
        r"(?i)\b(" + "|".join(sorted(SENSITIVE_KEYS, key=len, reverse=True)) + r")(['\"]?\s*[:=]\s*['\"]?)([^\s,'\"}]+)"
    )

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask sensitive data in log records."""
        if hasattr(record, "msg") and isinstance(record.msg, str):
            record.msg = self._mask_sensitive_data(record.msg)
        if hasattr(record, "args") and isinstance(record.args, dict):
            record.args = self._mask_dict(record.args)
        return True

    def _mask_sensitive_data(self, text: str) -> str:
        """Mask ``key=value`` / ``key: value`` pairs whose key is sensitive."""
        return self._PATTERN.sub(r"\1\2***MASKED***", text)

    def _mask_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Mask sensitive data in dictionary."""
        masked = {}
        for key, value in data.items():
            if any(sensitive in key.lower() for sensitive in self.SENSITIVE_KEYS):
                masked[key] = "***MASKED***"
            elif isinstance(value, dict):
                masked[key] = self._mask_dict(value)
            else:
                masked[key] = value
        return masked


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs logs in JSON format."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_")
        }
        if context:
            log_data["context"] = context

        return json.dumps(log_data, default=str)


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JSONFormatter()
    return logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def setup_logging(config: Any) -> None:
    """
    Set up logging configuration.

    Args:
        config: Configuration object with logging settings
    """
    os.makedirs(config.LOG_DIR, exist_ok=True)
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers, including the per-file loggers of earlier calls
    for logger_name in (None, "tradejournal.services"):
        target = logging.getLogger(logger_name)
        for handler in target.handlers[:]:
            target.removeHandler(handler)
            if isinstance(handler, logging.FileHandler):
                handler.close()

    sensitive_filter = SensitiveDataFilter()

    # Console handler (stdout)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.addFilter(sensitive_filter)
    console_handler.setFormatter(_build_formatter(config.LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # Everything goes to app.log; journal writes and errors get their own files
    log_files = {
        "app.log": (None, level),
        "journal.log": ("tradejournal.services", level),
        "errors.log": (None, logging.ERROR),
    }

    for filename, (logger_name, file_level) in log_files.items():
        log_path = os.path.join(config.LOG_DIR, filename)

        # Rotating file handler (10MB per file, 5 backups)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
        )
        file_handler.setLevel(file_level)
        file_handler.addFilter(sensitive_filter)
        file_handler.setFormatter(_build_formatter(config.LOG_FORMAT))

        logging.getLogger(logger_name).addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)
