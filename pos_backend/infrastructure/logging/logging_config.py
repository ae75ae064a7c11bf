"""
Logging configuration for the POS order backend

Console output for development, rotating JSON files for everything else,
and a context manager that records how long an operation took.
"""

import logging
import logging.handlers
import os
import sys
import threading
import time
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from pos_backend.infrastructure.configuration.config import Settings, get_config
from pos_backend.infrastructure.utilities.constants import (
    FileSettings,
    LoggingSettings,
    PerformanceSettings,
)


class ProductionLogger:
    """Production-ready logging configuration"""

    @staticmethod
    def setup_logging(config: Optional[Settings] = None) -> None:
        """
        Setup logging for the process

        Features:
        - Human readable console output outside production
        - Structured JSON main log
        - Error-only JSON log
        """
        config = config or get_config()

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
        root_logger.handlers.clear()

        if config.environment != "production":
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.DEBUG)
            console_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            root_logger.addHandler(console_handler)

        if config.log_to_file:
            logs_dir = Path(config.log_dir)
            logs_dir.mkdir(parents=True, exist_ok=True)

            app_handler = logging.handlers.RotatingFileHandler(
                logs_dir / FileSettings.MAIN_LOG_FILE,
                maxBytes=LoggingSettings.MAX_LOG_FILE_SIZE,
                backupCount=LoggingSettings.MAIN_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            app_handler.setFormatter(StructuredJsonFormatter())
            app_handler.setLevel(logging.INFO)
            root_logger.addHandler(app_handler)

            error_handler = logging.handlers.RotatingFileHandler(
                logs_dir / FileSettings.ERROR_LOG_FILE,
                maxBytes=LoggingSettings.MAX_LOG_FILE_SIZE,
                backupCount=LoggingSettings.ERROR_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            error_handler.setFormatter(StructuredJsonFormatter())
            error_handler.setLevel(logging.ERROR)
            root_logger.addHandler(error_handler)

        ProductionLogger._configure_specific_loggers(config)

        logging.getLogger(__name__).info(
            "Logging configured",
            extra={
                "environment": config.environment,
                "log_level": config.log_level,
                "log_to_file": config.log_to_file,
            },
        )

    @staticmethod
    def _configure_specific_loggers(config: Settings) -> None:
        """Quieten chatty third-party loggers"""
        db_logger = logging.getLogger("sqlalchemy.engine")
        db_logger.setLevel(logging.INFO if config.sql_echo else logging.WARNING)

        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class StructuredJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with process and thread context"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(UTC).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["thread_name"] = threading.current_thread().name
        log_record["process_id"] = os.getpid()

        if hasattr(record, "operation_time"):
            log_record["operation_time_ms"] = record.operation_time


class PerformanceLogger:
    """Context manager for performance logging"""

    def __init__(
        self,
        operation_name: str,
        logger: Optional[logging.Logger] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger(__name__)
        self.details = details or {}
        self.start_time = 0.0
        self.duration_ms = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(
            "Starting operation: %s",
            self.operation_name,
            extra={"operation": self.operation_name, **self.details},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is None:
            level = (
                logging.WARNING
                if self.duration_ms > PerformanceSettings.SLOW_OPERATION_THRESHOLD_MS
                else logging.DEBUG
            )
            self.logger.log(
                level,
                "Completed operation: %s (%.1f ms)",
                self.operation_name,
                self.duration_ms,
                extra={
                    "operation": self.operation_name,
                    "operation_time": self.duration_ms,
                    "success": True,
                    **self.details,
                },
            )
        else:
            self.logger.error(
                "Failed operation: %s",
                self.operation_name,
                extra={
                    "operation": self.operation_name,
                    "operation_time": self.duration_ms,
                    "success": False,
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val) if exc_val else None,
                    **self.details,
                },
            )
        return False


def setup_logging(config: Optional[Settings] = None) -> None:
    """Convenience wrapper around ProductionLogger.setup_logging"""
    ProductionLogger.setup_logging(config)
