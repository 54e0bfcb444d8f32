"""Logging configuration for eos-converge.

Provides configurable logging with:
- File-based logging with rotation
- Console output for real-time debugging
- Performance timing of node round trips

Environment Variables:
    EOS_CONVERGE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    EOS_CONVERGE_LOG_FILE: Path to log file (default: ~/.eos-converge/eos-converge.log)
    EOS_CONVERGE_LOG_MAX_SIZE: Max log file size in MB (default: 10)
    EOS_CONVERGE_LOG_BACKUPS: Number of backup files to keep (default: 5)

Usage:
    from eos_converge.utils.logging_config import setup_logging, timed

    setup_logging()  # Call once at startup

    @timed("enable")
    def enable(self, commands):
        ...
"""
import functools
import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Callable, Any

# Performance logger - separate from main logger for easy filtering
perf_logger = logging.getLogger("eos_converge.perf")
main_logger = logging.getLogger("eos_converge")


def get_log_level() -> int:
    """Get log level from environment."""
    level_str = os.environ.get("EOS_CONVERGE_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_str, logging.INFO)


def get_log_file() -> Path:
    """Get log file path from environment."""
    default_path = Path.home() / ".eos-converge" / "eos-converge.log"
    path_str = os.environ.get("EOS_CONVERGE_LOG_FILE", str(default_path))
    return Path(path_str)


def setup_logging(level: Optional[int] = None) -> None:
    """Configure logging for the application.

    Sets up:
    - Console handler (INFO+ by default, respects EOS_CONVERGE_LOG_LEVEL)
    - File handler with rotation (DEBUG level - captures everything)
    - Performance log file for timing metrics
    """
    log_level = level if level is not None else get_log_level()
    log_file = get_log_file()
    max_size_mb = int(os.environ.get("EOS_CONVERGE_LOG_MAX_SIZE", "10"))
    backup_count = int(os.environ.get("EOS_CONVERGE_LOG_BACKUPS", "5"))

    log_file.parent.mkdir(parents=True, exist_ok=True)

    main_format = logging.Formatter(
        "%(asctime)s.%(msecs)03d | %(name)-32s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    perf_format = logging.Formatter(
        "%(asctime)s.%(msecs)03d | PERF | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(main_format)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(main_format)

    perf_log_file = log_file.parent / "eos-converge-perf.log"
    perf_handler = RotatingFileHandler(
        perf_log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    perf_handler.setLevel(logging.DEBUG)
    perf_handler.setFormatter(perf_format)

    main_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter
    main_logger.addHandler(console_handler)
    main_logger.addHandler(file_handler)

    # Perf records go to their own file only
    perf_logger.setLevel(logging.DEBUG)
    perf_logger.propagate = False
    perf_logger.addHandler(perf_handler)

    main_logger.info(f"Logging initialized: level={logging.getLevelName(log_level)}, file={log_file}")


def _format_timing(operation: str, node_id: Optional[str], elapsed: float, status: str, extra: str = "") -> str:
    msg = f"{operation:20s} | {node_id or 'N/A':15s} | {elapsed:8.2f}ms | {status}"
    if extra:
        msg += f" | {extra}"
    return msg


def timed(operation: str, node_id: Optional[str] = None):
    """Decorator to log execution time of a function.

    Args:
        operation: Name of the operation (e.g., "enable", "config")
        node_id: Optional node identifier (can also be inferred from self.node_id)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            nid = node_id
            if nid is None and args and hasattr(args[0], 'node_id'):
                nid = args[0].node_id

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = (time.perf_counter() - start) * 1000
                perf_logger.warning(_format_timing(operation, nid, elapsed, f"FAIL: {e}"))
                raise
            elapsed = (time.perf_counter() - start) * 1000
            perf_logger.info(_format_timing(operation, nid, elapsed, "OK"))
            return result

        return wrapper

    return decorator


@contextmanager
def timed_section(operation: str, node_id: Optional[str] = None, **extra):
    """Context manager for timing code sections.

    Usage:
        with timed_section("converge", node_id="leaf1", resource="eos_vlan"):
            ...
    """
    start = time.perf_counter()
    extra_str = " | ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""

    try:
        yield
    except Exception as e:
        elapsed = (time.perf_counter() - start) * 1000
        perf_logger.warning(_format_timing(operation, node_id, elapsed, f"FAIL: {e}", extra_str))
        raise
    elapsed = (time.perf_counter() - start) * 1000
    perf_logger.info(_format_timing(operation, node_id, elapsed, "OK", extra_str))
