"""
Logging configuration for the n8n MCP server.

Writes rotating logs to <log_dir>/n8n_mcp_server.log. Console output goes to
stderr only; stdout carries the MCP stdio stream. When the log directory
cannot be written, logging continues on stderr alone.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "n8n_workflow_builder"
LOG_FILE_NAME = "n8n_mcp_server.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def _open_file_handler(log_dir: Path, level: int) -> Optional[RotatingFileHandler]:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        return None
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return file_handler


def _setup_file_logger(name: str, log_dir: Path, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    file_handler = _open_file_handler(log_dir, level)
    if file_handler is None:
        logger.warning("Log directory %s is not writable, logging to stderr only", log_dir)
    else:
        logger.addHandler(file_handler)
    return logger


def setup_logging(level: str = "INFO", log_dir: Union[str, Path] = "logs") -> logging.Logger:
    """
    Configure logging for the n8n MCP server.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    return _setup_file_logger(LOGGER_NAME, Path(log_dir), numeric_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
