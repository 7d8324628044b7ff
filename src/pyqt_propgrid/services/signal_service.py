"""
Signal blocking helpers.

Editors are refreshed from their property model with their own signals
blocked so that programmatic updates never echo back into the model.
"""

from contextlib import contextmanager
from PyQt6.QtCore import QObject
import logging

logger = logging.getLogger(__name__)


class SignalService:
    """
    Context managers for Qt signal blocking.

    Examples:
        with SignalService.block_signals(editor):
            editor.set_value(model.value)

        with SignalService.block_signals(widget1, widget2):
            widget1.setValue(1)
            widget2.setValue(2)
    """

    @staticmethod
    @contextmanager
    def block_signals(*objects: QObject):
        """Context manager for blocking signals; previous blocking state is restored."""
        previous = []
        for obj in objects:
            if obj is not None:
                previous.append((obj, obj.blockSignals(True)))
                logger.debug(f"Blocked signals on {type(obj).__name__}")

        try:
            yield
        finally:
            for obj, was_blocked in reversed(previous):
                obj.blockSignals(was_blocked)
                logger.debug(f"Restored signal blocking on {type(obj).__name__}")
