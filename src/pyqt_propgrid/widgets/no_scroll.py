"""
No-scroll editor widgets for PyQt6.

Prevents accidental value changes from mouse wheel events while the grid
itself is being scrolled.
"""

from PyQt6.QtGui import QWheelEvent

from pyqt_propgrid.protocols.widget_adapters import SliderAdapter, ChoiceListAdapter, register_widget


@register_widget
class NoScrollSlider(SliderAdapter):
    """Slider that ignores wheel events to prevent accidental value changes.

    Inherits from SliderAdapter which already implements the editor ABCs.
    """

    _widget_id = "no_scroll_slider"

    def wheelEvent(self, event: QWheelEvent):
        """Ignore wheel events to prevent accidental value changes."""
        event.ignore()


@register_widget
class NoScrollChoiceList(ChoiceListAdapter):
    """Choice list that ignores wheel events unless it has focus."""

    _widget_id = "no_scroll_choice_list"

    def wheelEvent(self, event: QWheelEvent):
        if self.hasFocus():
            super().wheelEvent(event)
        else:
            event.ignore()
