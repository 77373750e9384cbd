#!/usr/bin/env python3
"""UTF-8-safe logging setup for autoflutter."""

import logging
import sys
import io
from pathlib import Path
from typing import Optional


# Console tags are padded to the same width so messages line up.
SEVERITY_TAGS = {
    logging.DEBUG: "[DBG ]",
    logging.INFO: "[INFO]",
    logging.WARNING: "[WARN]",
    logging.ERROR: "[ERR ]",
    logging.CRITICAL: "[ERR ]",
}


class UTF8StreamHandler(logging.StreamHandler):
    """Custom stream handler that forces UTF-8 encoding for console output."""
    def __init__(self, stream=None):
        if stream is None:
            stream = io.TextIOWrapper(
                sys.stdout.buffer,
                encoding='utf-8',
                errors='replace',
                line_buffering=True
            )
        super().__init__(stream)


class SeverityTagFormatter(logging.Formatter):
    """Render records as ``[INFO] message`` / ``[WARN] message`` / ``[ERR ] message``."""

    def format(self, record: logging.LogRecord) -> str:
        tag = SEVERITY_TAGS.get(record.levelno, f"[{record.levelname}]")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{tag} {message}"


def setup_logger(name: str = "autoflutter",
                 log_level: str = "INFO",
                 log_file: Optional[str] = None,
                 stream=None) -> logging.Logger:
    """Setup a UTF-8-safe logger with tagged console output and optional file output."""

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers = []  # Clear existing handlers

    # Console handler
    console_handler = UTF8StreamHandler(stream)
    console_handler.setFormatter(SeverityTagFormatter())
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', errors='replace')
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger
