"""
Context manager factory for boolean flag management.

Property models and value surfaces guard their reentrant paths with
temporary boolean flags (commit in progress, editor value being forwarded).
This module centralizes the save/set/restore dance.

Pattern:
    Instead of:
        self._committing = True
        try:
            # ... logic
        finally:
            self._committing = False

    Use:
        with FlagContextManager.manage_flags(self, _committing=True):
            # ... logic
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class GridFlag(Enum):
    """
    Registry of valid reentrancy flags.

    Add new flags here as they're introduced to the codebase.
    """
    COMMITTING = '_committing'
    FORWARDING = '_forwarding'
    REBINDING = '_rebinding'


class FlagContextManager:
    """
    Context manager factory for boolean flag management.

    Examples:
        # Single flag:
        with FlagContextManager.manage_flags(self, _committing=True):
            self._write_through(value)

        # Check a flag:
        if FlagContextManager.is_flag_set(self, GridFlag.COMMITTING):
            return
    """

    # Registry of valid flags (extracted from enum)
    VALID_FLAGS: Set[str] = {flag.value for flag in GridFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Set flags on entry and restore previous values on exit.

        Args:
            obj: Object to set flags on
            **flags: Flag names and values to set (e.g., _committing=True)

        Raises:
            ValueError: If any flag name is not in VALID_FLAGS registry
        """
        invalid_flags = set(flags.keys()) - FlagContextManager.VALID_FLAGS
        if invalid_flags:
            raise ValueError(
                f"Invalid flags: {invalid_flags}. "
                f"Valid flags: {FlagContextManager.VALID_FLAGS}. "
                f"Add new flags to GridFlag enum."
            )

        # Direct attribute access: flags must be initialized in the owner's __init__
        prev_values: Dict[str, bool] = {}
        for flag_name in flags:
            prev_values[flag_name] = getattr(obj, flag_name)

        for flag_name, flag_value in flags.items():
            setattr(obj, flag_name, flag_value)

        try:
            yield
        finally:
            for flag_name, prev_value in prev_values.items():
                setattr(obj, flag_name, prev_value)

    @staticmethod
    def is_flag_set(obj: Any, flag: GridFlag) -> bool:
        """Check if a flag is currently set to True."""
        return getattr(obj, flag.value)
