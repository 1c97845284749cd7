"""
Logging setup module.

Configures application-wide logging with console and optional file handlers.
Supports both standard text format and structured JSON logging.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON objects for easy parsing by log aggregation tools.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        if hasattr(record, "extra_data"):
            log_record["extra"] = record.extra_data


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | None = None,
    log_format: str | None = None,
    max_bytes: int = 10485760,  # 10 MB
    backup_count: int = 5,
    json_format: bool = False,
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Logging level (e.g., logging.INFO or "DEBUG").
        log_file: Optional path to a rotating log file.
        log_format: Log message format string for text output.
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of backup files to keep.
        json_format: If True, use JSON structured logging format.

    Returns:
        logging.Logger: Configured root logger.
    """
    if os.environ.get("LOG_FORMAT", "").lower() == "json":
        json_format = True

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers.clear()

    if json_format:
        formatter: logging.Formatter = JSONFormatter("%(message)s")
    else:
        formatter = logging.Formatter(log_format or DEFAULT_FORMAT)

    # Logs go to stderr so command output on stdout stays parseable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return root_logger
