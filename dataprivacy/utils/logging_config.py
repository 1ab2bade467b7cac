"""Logging configuration for the data privacy exporter."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Any, Optional
from datetime import datetime
import json


class DataPrivacyFormatter(logging.Formatter):
    """JSON formatter carrying request and user context."""

    def __init__(self, include_context: bool = True):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with additional context."""
        timestamp = datetime.fromtimestamp(record.created).isoformat()

        log_entry = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if self.include_context and hasattr(record, 'context'):
            log_entry["context"] = record.context

        if hasattr(record, 'request_id'):
            log_entry["request_id"] = record.request_id

        if hasattr(record, 'user_id'):
            log_entry["user_id"] = record.user_id

        return json.dumps(log_entry, default=str)


class LoggingConfig:
    """Centralized logging configuration."""

    def __init__(self,
                 log_level: str = "INFO",
                 log_dir: Optional[str] = None,
                 enable_console: bool = True,
                 enable_file: bool = False,
                 structured_logging: bool = True,
                 stream=None):

        self.log_level = getattr(logging, log_level.upper())
        self.log_dir = Path(log_dir) if log_dir else Path.cwd() / "logs"
        self.enable_console = enable_console
        self.enable_file = enable_file
        self.structured_logging = structured_logging
        self.stream = stream or sys.stderr

        if self.enable_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_logging()

    def _setup_logging(self) -> None:
        """Set up logging configuration."""
        package_logger = logging.getLogger("dataprivacy")
        package_logger.setLevel(self.log_level)
        package_logger.handlers.clear()

        if self.enable_console:
            console_handler = logging.StreamHandler(self.stream)
            console_handler.setLevel(self.log_level)

            if self.structured_logging:
                console_handler.setFormatter(DataPrivacyFormatter())
            else:
                console_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))

            package_logger.addHandler(console_handler)

        if self.enable_file:
            file_handler = logging.handlers.RotatingFileHandler(
                self.log_dir / "dataprivacy.log",
                maxBytes=20 * 1024 * 1024,  # 20MB
                backupCount=10
            )
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(DataPrivacyFormatter())
            package_logger.addHandler(file_handler)

            error_handler = logging.handlers.RotatingFileHandler(
                self.log_dir / "errors.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(DataPrivacyFormatter())
            package_logger.addHandler(error_handler)

        self._configure_component_loggers()

    def _configure_component_loggers(self) -> None:
        """Configure logging levels for specific components."""
        # Language pack loading is chatty at DEBUG
        component_levels = {
            "dataprivacy.i18n": max(self.log_level, logging.INFO),
        }

        for logger_name, level in component_levels.items():
            logging.getLogger(logger_name).setLevel(level)


# Global logging configuration
_logging_config: Optional[LoggingConfig] = None


def setup_logging(config: Optional[Dict[str, Any]] = None) -> LoggingConfig:
    """Set up global logging configuration."""
    global _logging_config

    if config is None:
        config = {}

    _logging_config = LoggingConfig(**config)
    return _logging_config


def get_logging_config() -> LoggingConfig:
    """Get global logging configuration."""
    global _logging_config
    if _logging_config is None:
        _logging_config = setup_logging()
    return _logging_config


def get_logger(name: str) -> logging.Logger:
    """Get a logger with proper configuration."""
    get_logging_config()
    return logging.getLogger(name)
