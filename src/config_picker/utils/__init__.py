"""Utility modules for logging and timing."""
from .logging_config import (
    setup_logging,
    parse_log_level,
    timed,
    timed_section_sync,
    perf_logger,
)

__all__ = [
    "setup_logging",
    "parse_log_level",
    "timed",
    "timed_section_sync",
    "perf_logger",
]
