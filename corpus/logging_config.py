"""
Logging Configuration - logger for compile runs

The console shows level and message. The file log under
~/.tweet-corpus/logs/compile.log also records the time and the worker
thread, since files are processed concurrently.

Setup:
- Log rotation (max 5 files, 2MB each)
- Buffered file writes, flushed on ERROR and at exit
- INFO level by default, DEBUG when debug mode is on
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from corpus_config import paths

LOGGER_NAME = "tweet-corpus"
LOG_FILE_NAME = "compile.log"

# Logger singleton
_logger: Optional[logging.Logger] = None

DEBUG_MODE = paths.DEBUG_MODE

# Log rotation config
MAX_LOG_SIZE = 2 * 1024 * 1024  # 2MB per file
MAX_LOG_FILES = 5
BUFFER_CAPACITY = 100  # Buffer 100 log records before flush

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s: %(message)s"


def _build_file_handler(log_dir: Path) -> logging.Handler:
    """Rotating compile.log behind a MemoryHandler."""
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=MAX_LOG_SIZE,
        backupCount=MAX_LOG_FILES,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    return logging.handlers.MemoryHandler(
        capacity=BUFFER_CAPACITY,
        flushLevel=logging.ERROR,  # Flush immediately on ERROR
        target=file_handler,
    )


def _close_handlers(logger: logging.Logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        # MemoryHandler.close() flushes but leaves its target open
        target = getattr(handler, "target", None)
        handler.close()
        if target is not None:
            target.close()


def configure_logging(debug: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Build (or rebuild) the compiler logger.

    Handlers from an earlier call are flushed and closed first, so calling
    this again switches level or log directory without duplicating output.

    Args:
        debug: Enable DEBUG level logging
        log_dir: Directory for compile.log (default: paths.LOG_DIR)

    Returns:
        Configured logger instance
    """
    global _logger, DEBUG_MODE
    DEBUG_MODE = debug

    logger = logging.getLogger(LOGGER_NAME)
    _close_handlers(logger)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    try:
        logger.addHandler(_build_file_handler(log_dir or paths.LOG_DIR))
    except OSError as e:
        # Console only if the log file cannot be created
        logger.warning(f"Could not create log file: {e}")

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the logger, configuring it on first use."""
    if _logger is None:
        return configure_logging(DEBUG_MODE)
    return _logger


def flush_logs():
    """
    Flush buffered logs to disk.
    Call before exit so every record is written.
    """
    if _logger:
        for handler in _logger.handlers:
            handler.flush()


def log_error(message: str, exc: Optional[BaseException] = None):
    """Log error with optional exception details"""
    logger = get_logger()
    if exc:
        logger.error(f"{message}: {exc}", exc_info=DEBUG_MODE)
    else:
        logger.error(message)


def log_warning(message: str):
    get_logger().warning(message)


def log_info(message: str):
    get_logger().info(message)


def log_debug(message: str):
    """Log debug - only written if DEBUG_MODE is enabled"""
    if DEBUG_MODE:
        get_logger().debug(message)
