"""Logging configuration for config-picker.

Provides:
- Console output on stderr
- Optional file-based logging with rotation
- Timing helpers for store/load transactions

Environment Variables:
    CONFIG_PICKER_LOG_MAX_SIZE: Max log file size in MB (default: 5)
    CONFIG_PICKER_LOG_BACKUPS: Number of backup files to keep (default: 3)

Usage:
    from config_picker.utils.logging_config import setup_logging, timed_section_sync

    setup_logging(logging.INFO)  # Call once at startup

    with timed_section_sync("store", config_type="vim", label="work"):
        ...
"""
import functools
import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

# Performance logger - separate from main logger for easy filtering
perf_logger = logging.getLogger("config_picker.perf")
main_logger = logging.getLogger("config_picker")

LOG_FORMAT = "%(asctime)s.%(msecs)03d | %(name)-32s | %(levelname)-7s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_MARKER = "_config_picker_handler"


def parse_log_level(level_str: Optional[str], default: int = logging.WARNING) -> int:
    """Map a level name (DEBUG, INFO, ...) to its number, or `default`."""
    if not level_str:
        return default
    level = logging.getLevelName(level_str.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(level: int = logging.WARNING, log_file: Optional[Path] = None) -> None:
    """Configure logging for the application.

    Sets up:
    - Console handler on stderr at `level`
    - File handler with rotation (DEBUG level) when `log_file` is given

    Calling it again replaces the handlers installed by a previous call.
    """
    max_size_mb = int(os.environ.get("CONFIG_PICKER_LOG_MAX_SIZE", "5"))
    backup_count = int(os.environ.get("CONFIG_PICKER_LOG_BACKUPS", "3"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    for handler in list(main_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            main_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    setattr(console_handler, _HANDLER_MARKER, True)
    main_logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_MARKER, True)
        main_logger.addHandler(file_handler)

    # Capture all, handlers filter
    main_logger.setLevel(logging.DEBUG if log_file is not None else level)

    main_logger.debug(
        f"Logging initialized: level={logging.getLevelName(level)}, file={log_file}"
    )


def _format_extra(extra: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in extra.items())


def timed(operation: str):
    """Decorator to log execution time of a function.

    Usage:
        @timed("create_type")
        def create_config_type(self, name):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            with timed_section_sync(operation):
                return func(*args, **kwargs)
        return wrapper

    return decorator


@contextmanager
def timed_section_sync(operation: str, **extra):
    """Context manager for timing code sections.

    Args:
        operation: Name of the operation
        **extra: Additional context to log
    """
    start = time.perf_counter()
    extra_str = _format_extra(extra) if extra else ""

    try:
        yield
        elapsed = (time.perf_counter() - start) * 1000
        msg = f"{operation:12s} | {elapsed:8.2f}ms | OK"
        if extra_str:
            msg += f" | {extra_str}"
        perf_logger.debug(msg)
    except Exception as e:
        elapsed = (time.perf_counter() - start) * 1000
        msg = f"{operation:12s} | {elapsed:8.2f}ms | FAIL: {e}"
        if extra_str:
            msg += f" | {extra_str}"
        perf_logger.debug(msg)
        raise
