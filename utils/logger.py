"""
Centralized logging configuration for the NutriCare RAG service.

Every module obtains its logger through ``get_logger(__name__)``. Records are
written as JSON lines to rotating files under ``LOG_DIR`` so that fetch
failures, skipped candidates and budget cut-offs can be inspected after the
fact. Structured context travels in ``extra={"extra_fields": {...}}``.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_data.update(extra_fields)

        return json.dumps(log_data, default=str)


class LoggerConfig:
    """
    Process-wide logging setup.

    Environment:
        LOG_DIR: directory for log files (default: logs)
        LOG_LEVEL: root level (default: INFO)
        LOG_TO_CONSOLE: "true" to also echo WARNING+ to stderr
    """

    MAX_BYTES = 10 * 1024 * 1024  # 10MB per file
    BACKUP_COUNT = 5

    _initialized = False

    @classmethod
    def _file_handler(cls, path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=cls.MAX_BYTES,
            backupCount=cls.BACKUP_COUNT,
            encoding="utf-8",
            delay=True,
        )
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler

    @classmethod
    def setup_logging(cls) -> None:
        """
        Configure the root logger once per process.
        Subsequent calls are no-ops.
        """
        if cls._initialized:
            return

        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        to_console = os.getenv("LOG_TO_CONSOLE", "false").lower() == "true"

        log_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level, logging.INFO))
        root_logger.handlers.clear()

        json_formatter = JsonFormatter()

        root_logger.addHandler(cls._file_handler(log_dir / "app.log", logging.INFO, json_formatter))
        root_logger.addHandler(cls._file_handler(log_dir / "error.log", logging.ERROR, json_formatter))

        if log_level == "DEBUG":
            root_logger.addHandler(
                cls._file_handler(log_dir / "debug.log", logging.DEBUG, json_formatter)
            )

        if to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(
                logging.Formatter(
                    fmt="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            root_logger.addHandler(console_handler)

        # httpx logs every request at INFO; keep our files readable
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

        cls._initialized = True

        logging.getLogger(__name__).info(
            "Logging system initialized",
            extra={
                "extra_fields": {
                    "log_level": log_level,
                    "log_dir": str(log_dir),
                    "console_logging": to_console,
                }
            },
        )

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._initialized:
            cls.setup_logging()
        return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Example:
        >>> from utils.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.warning("[RAG] Skipping invalid URL", extra={"extra_fields": {"url": "nope"}})
    """
    return LoggerConfig.get_logger(name)
