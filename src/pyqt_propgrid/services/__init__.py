"""
Service layer for property grids.

Cross-cutting concerns: signal blocking and reentrancy flag management.
"""

from .signal_service import SignalService
from .flag_context_manager import FlagContextManager, GridFlag

__all__ = [
    "SignalService",
    "FlagContextManager",
    "GridFlag",
]
