"""Performance monitoring utilities for pyqt-propgrid.

Provides a context manager and a decorator for timing bind and editor
operations, logging to the performance logger named in the grid config.
Handlers are only attached by ``configure_performance_logging``.
"""

import time
import functools
import logging
from contextlib import contextmanager
from typing import Optional, Callable
from pathlib import Path

from pyqt_propgrid.protocols.grid_config import PropertyGridConfig, get_grid_config

perf_logger = logging.getLogger(get_grid_config().performance_logger_name)


def configure_performance_logging(config: Optional[PropertyGridConfig] = None) -> Path:
    """Attach file and console handlers to the performance logger.

    Args:
        config: Grid configuration (defaults to the global one)

    Returns:
        Path of the performance log file
    """
    global perf_logger
    config = config or get_grid_config()
    perf_logger = logging.getLogger(config.performance_logger_name)
    perf_logger.setLevel(logging.DEBUG)

    log_dir = Path(config.log_dir) if config.log_dir else Path.home() / '.local' / 'share' / 'pyqt_propgrid' / 'logs'
    perf_log_file = log_dir / config.performance_log_filename
    perf_log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(perf_log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    perf_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter('⏱️  %(message)s'))
    perf_logger.addHandler(console_handler)
    return perf_log_file


@contextmanager
def timer(operation_name: str, threshold_ms: float = 0.0, log_args: bool = False, **kwargs):
    """Context manager for timing operations.

    Args:
        operation_name: Name of the operation being timed
        threshold_ms: Only log if operation takes longer than this (in milliseconds)
        log_args: Whether to log kwargs in the message
        **kwargs: Additional context to include in log message

    Example:
        with timer("Bind selected object", threshold_ms=10.0, type_name="Customer"):
            source.bind(customer)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000

        if elapsed_ms >= threshold_ms:
            msg = f"{operation_name}: {elapsed_ms:.2f}ms"
            if log_args and kwargs:
                args_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
                msg += f" ({args_str})"

            perf_logger.debug(msg)


def timed(operation_name: Optional[str] = None, threshold_ms: float = 0.0):
    """Decorator for timing function calls.

    Args:
        operation_name: Name for the operation (defaults to function name)
        threshold_ms: Only log if operation takes longer than this (in milliseconds)
    """
    def decorator(func: Callable) -> Callable:
        name = operation_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with timer(name, threshold_ms=threshold_ms):
                return func(*args, **kwargs)

        return wrapper
    return decorator
