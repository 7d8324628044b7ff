"""
Core utilities.

Toolkit-independent helpers: value conversion, the overlay state machine
and performance timing.
"""

from .conversions import (
    try_change_type,
    change_type,
    values_equal,
    decamelize,
    to_text,
)
from .overlay_state import OverlayState, OverlayPhase
from .performance_monitor import timer, timed, configure_performance_logging

__all__ = [
    "try_change_type",
    "change_type",
    "values_equal",
    "decamelize",
    "to_text",
    "OverlayState",
    "OverlayPhase",
    "timer",
    "timed",
    "configure_performance_logging",
]
