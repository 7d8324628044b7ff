"""
Two-state overlay machine for dialog-hosted editors.

A picker editor shows its choices in a transient overlay. Whether the
overlay is open is driven by a single boolean "selected" signal (the header
toggle of the editor host). Opening while open and closing while closed are
no-ops, so a row can never leak more than one overlay.
"""

import logging
from enum import Enum, auto
from typing import Callable

logger = logging.getLogger(__name__)


class OverlayPhase(Enum):
    """Overlay lifecycle phases."""
    CLOSED = auto()
    OPEN = auto()


class OverlayState:
    """
    Closed → open → closed state machine.

    Example:
        state = OverlayState(on_open=show_popup, on_close=hide_popup)
        header.toggled.connect(state.set_selected)
    """

    def __init__(self, on_open: Callable[[], None], on_close: Callable[[], None]):
        self._on_open = on_open
        self._on_close = on_close
        self._phase = OverlayPhase.CLOSED
        self.open_count = 0

    @property
    def phase(self) -> OverlayPhase:
        return self._phase

    @property
    def is_open(self) -> bool:
        return self._phase is OverlayPhase.OPEN

    def set_selected(self, selected: bool) -> bool:
        """
        Drive the machine from the external selected signal.

        Returns:
            True if a transition happened, False for a no-op.
        """
        if selected:
            if self._phase is OverlayPhase.OPEN:
                return False
            # Phase changes before the callback so reentrant signals see the new state
            self._phase = OverlayPhase.OPEN
            self.open_count += 1
            logger.debug("Overlay opened")
            self._on_open()
            return True

        if self._phase is OverlayPhase.CLOSED:
            return False
        self._phase = OverlayPhase.CLOSED
        logger.debug("Overlay closed")
        self._on_close()
        return True
