"""
Logging setup for the PDF Search Service.

Service logs go to stderr and, when a logs directory is configured, to a
rotating file. Audit events from the "pdfsearch.audit" logger get their
own rotating file next to it. The PDFSEARCH_LOG_LEVEL environment variable
overrides the configured level, which is handy when debugging a single
container without editing its config.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from .exceptions import ConfigurationError


LOG_FILENAME = "pdfsearch.log"
AUDIT_FILENAME = "audit.log"
AUDIT_LOGGER = "pdfsearch.audit"
LOG_LEVEL_ENV_VAR = "PDFSEARCH_LOG_LEVEL"

# Request logging is covered by audit events; client libraries log every call
QUIET_LOGGERS = ("elastic_transport", "elasticsearch", "urllib3", "uvicorn.access")

_installed: List[logging.Handler] = []


def _rotating_handler(path: Path, formatter: logging.Formatter, max_bytes: int, backup_count: int):
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> None:
    """
    Install the service handlers once per process.

    Args:
        log_level: Level name, overridden by PDFSEARCH_LOG_LEVEL when set.
        log_format: Format string shared by every handler.
        logs_directory: Directory for the service and audit files. Console
                        only when None.
        max_file_size_mb: Size at which a file is rotated.
        backup_count: Rotated files kept per log.
    """
    if _installed:
        return

    level_name = os.environ.get(LOG_LEVEL_ENV_VAR) or log_level
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name.upper(), logging.INFO))

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    _installed.append(console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)
        max_bytes = max_file_size_mb * 1024 * 1024

        file_handler = _rotating_handler(logs_directory / LOG_FILENAME, formatter, max_bytes, backup_count)
        root_logger.addHandler(file_handler)
        _installed.append(file_handler)

        audit_handler = _rotating_handler(logs_directory / AUDIT_FILENAME, formatter, max_bytes, backup_count)
        logging.getLogger(AUDIT_LOGGER).addHandler(audit_handler)
        _installed.append(audit_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def reset_logging() -> None:
    """Remove and close the handlers installed by setup_logging."""
    for handler in _installed:
        logging.getLogger().removeHandler(handler)
        logging.getLogger(AUDIT_LOGGER).removeHandler(handler)
        handler.close()
    _installed.clear()


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger, setting up logging from config on first use.

    Without a loadable config the service logs to the console only.
    """
    if not _installed:
        try:
            from .config_loader import get_config
            config = get_config()
        except ConfigurationError:
            setup_logging()
        else:
            setup_logging(
                log_level=config.logging.level,
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                max_file_size_mb=config.logging.max_file_size_mb,
                backup_count=config.logging.backup_count
            )

    return logging.getLogger(name)
