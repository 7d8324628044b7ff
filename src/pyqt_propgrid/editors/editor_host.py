"""
Dialog host for picker editors.

An EditorHost shows the current value on a checkable header button. Checking
the header opens a popup overlay holding the real editor; unchecking it (or
the popup closing itself, e.g. on an outside click) closes the overlay. The
open/closed state is an OverlayState driven only by the header's checked
signal, so a row never shows more than one overlay.
"""

import logging
from typing import Any, Callable, Optional

from PyQt6.QtCore import QPoint, Qt, pyqtSignal
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QSizePolicy, QToolButton, QVBoxLayout, QWidget

from pyqt_propgrid.core.overlay_state import OverlayState
from pyqt_propgrid.protocols.widget_adapters import PyQtWidgetMeta, WrappedCallbacksMixin
from pyqt_propgrid.protocols.widget_protocols import (
    ChangeSignalEmitter, ReadOnlyCapable, ValueGettable, ValueSettable,
)
from pyqt_propgrid.services.signal_service import SignalService

logger = logging.getLogger(__name__)


class OverlayFrame(QFrame):
    """Popup frame reporting when it hides."""

    hidden = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent, Qt.WindowType.Popup)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(2, 2, 2, 2)

    def hideEvent(self, event):
        super().hideEvent(event)
        self.hidden.emit()


class EditorHost(QWidget, WrappedCallbacksMixin, ValueGettable, ValueSettable,
                 ReadOnlyCapable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Header toggle plus popup overlay wrapping an inner editor.

    Signals:
        value_edited(object): the inner editor produced a new value
        dialog_opened(): the overlay opened
        dialog_closed(): the overlay closed

    Args:
        editor: Inner editor widget (ValueGettable/ValueSettable/ChangeSignalEmitter)
        formatter: Header text of a value
        close_on_select: Close the overlay after each inner edit
    """

    value_edited = pyqtSignal(object)
    dialog_opened = pyqtSignal()
    dialog_closed = pyqtSignal()

    def __init__(self, editor: QWidget, formatter: Callable[[Any], str],
                 close_on_select: bool = True, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._formatter = formatter
        self._close_on_select = close_on_select
        self._value: Any = None

        self._header = QToolButton(self)
        self._header.setCheckable(True)
        self._header.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextOnly)
        self._header.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._header)

        self._overlay = OverlayFrame(self)
        self._editor = editor
        self._overlay.layout().addWidget(editor)
        self._state = OverlayState(on_open=self._show_overlay, on_close=self._hide_overlay)

        self._header.toggled.connect(self._state.set_selected)
        self._overlay.hidden.connect(self._on_overlay_hidden)
        if isinstance(editor, ChangeSignalEmitter):
            editor.connect_change_signal(self._on_editor_changed)

    @property
    def editor(self) -> QWidget:
        return self._editor

    @property
    def header(self) -> QToolButton:
        return self._header

    @property
    def overlay(self) -> QFrame:
        return self._overlay

    @property
    def overlay_state(self) -> OverlayState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def close_on_select(self) -> bool:
        return self._close_on_select

    def header_text(self) -> str:
        return self._header.text()

    def set_selected(self, selected: bool) -> None:
        """Open or close the overlay through the header toggle."""
        self._header.setChecked(selected)

    def open_dialog(self) -> None:
        self.set_selected(True)

    def close_dialog(self) -> None:
        self.set_selected(False)

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        return self._value

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        self._value = value
        if isinstance(self._editor, ValueSettable):
            with SignalService.block_signals(self._editor):
                self._editor.set_value(value)
        self._header.setText(self._formatter(value))

    def set_read_only(self, read_only: bool) -> None:
        """Implement ReadOnlyCapable ABC."""
        if read_only:
            self.close_dialog()
        self._header.setEnabled(not read_only)
        if isinstance(self._editor, ReadOnlyCapable):
            self._editor.set_read_only(read_only)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_wrapped(self.value_edited, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_wrapped(self.value_edited, callback)

    def _on_editor_changed(self, value: Any) -> None:
        self._value = value
        self._header.setText(self._formatter(value))
        self.value_edited.emit(value)
        if self._close_on_select:
            self.close_dialog()

    def _show_overlay(self) -> None:
        self._overlay.setMinimumWidth(self.width())
        self._overlay.move(self.mapToGlobal(QPoint(0, self.height())))
        self._overlay.show()
        logger.debug("Editor host overlay opened")
        self.dialog_opened.emit()

    def _hide_overlay(self) -> None:
        # hide() re-enters through _on_overlay_hidden; the header is already unchecked
        self._overlay.hide()
        self.dialog_closed.emit()

    def _on_overlay_hidden(self) -> None:
        if self._header.isChecked():
            self._header.setChecked(False)
