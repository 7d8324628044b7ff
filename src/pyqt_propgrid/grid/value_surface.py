"""
Binding surface: the value cell of one property row.

A PropertyValueSurface owns at most one editor for its PropertyModel.
Editor edits flow into ``model.set_value``; model changes flow back into the
editor with the editor's signals blocked, so neither direction echoes.
"""

import logging
from typing import Any, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QGraphicsOpacityEffect, QHBoxLayout, QWidget

from pyqt_propgrid.editors.base import EditorCreator
from pyqt_propgrid.editors.editor_resolver import EditorResolver
from pyqt_propgrid.model.property_model import PropertyModel
from pyqt_propgrid.protocols.grid_config import get_grid_config
from pyqt_propgrid.protocols.widget_protocols import ChangeSignalEmitter, ReadOnlyCapable
from pyqt_propgrid.services.flag_context_manager import FlagContextManager

logger = logging.getLogger(__name__)


class PropertyValueSurface(QWidget):
    """
    Value cell bound to one PropertyModel.

    Signals:
        editor_changed(object): the hosted editor was created or replaced
    """

    editor_changed = pyqtSignal(object)

    def __init__(self, resolver: Optional[EditorResolver] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._resolver = resolver or EditorResolver()
        self._model: Optional[PropertyModel] = None
        self._creator: Optional[EditorCreator] = None
        self._editor: Optional[QWidget] = None
        self._forwarding = False
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

    @property
    def model(self) -> Optional[PropertyModel]:
        return self._model

    @property
    def editor(self) -> Optional[QWidget]:
        return self._editor

    @property
    def creator(self) -> Optional[EditorCreator]:
        return self._creator

    @property
    def opacity(self) -> float:
        """Advisory opacity of the editor (reduced for read-only properties)."""
        if self._editor is None:
            return 1.0
        effect = self._editor.graphicsEffect()
        if isinstance(effect, QGraphicsOpacityEffect):
            return effect.opacity()
        return 1.0

    def attach(self, model: PropertyModel) -> None:
        """
        Bind to ``model`` and build its editor.

        Raises:
            EditorResolutionError: If the model's editor cannot be resolved
        """
        if model is self._model:
            self.refresh()
            return
        self.detach()
        self._model = model
        model.value_changed.connect(self._on_model_value_changed)
        model.read_only_changed.connect(self._on_model_read_only_changed)
        self.setToolTip(model.description or "")
        self.recreate_editor()

    def detach(self) -> None:
        """Release the editor and stop listening to the model."""
        if self._model is not None:
            for signal, slot in ((self._model.value_changed, self._on_model_value_changed),
                                 (self._model.read_only_changed, self._on_model_read_only_changed)):
                try:
                    signal.disconnect(slot)
                except TypeError:
                    # Signal not connected - ignore
                    pass
        self.set_editor(None)
        self._model = None
        self._creator = None

    def refresh(self) -> None:
        """Push the model value into the editor, in place when possible."""
        if self._model is None or self._editor is None:
            return
        creator, editor = self._resolver.update_editor(self, self._creator, self._editor)
        self._creator = creator
        self.set_editor(editor)

    def recreate_editor(self) -> None:
        if self._model is None:
            return
        creator, editor = self._resolver.create_editor(self)
        self._creator = creator
        self.set_editor(editor)

    def set_editor(self, editor: Optional[QWidget]) -> None:
        """
        Replace the hosted editor.

        Setting the current editor again is a no-op. The previous editor is
        disconnected and deleted before the new one is installed.
        """
        if editor is self._editor:
            return
        previous = self._editor
        if previous is not None:
            if isinstance(previous, ChangeSignalEmitter):
                previous.disconnect_change_signal(self._on_editor_value_changed)
            self.layout().removeWidget(previous)
            previous.setParent(None)
            previous.deleteLater()
            logger.debug(f"Released {type(previous).__name__}")

        self._editor = editor
        if editor is not None:
            self.layout().addWidget(editor)
            if isinstance(editor, ChangeSignalEmitter):
                editor.connect_change_signal(self._on_editor_value_changed)
            self._apply_read_only(editor)
        self.editor_changed.emit(editor)

    def _apply_read_only(self, editor: QWidget) -> None:
        read_only = self._model is not None and self._model.is_read_only
        if isinstance(editor, ReadOnlyCapable):
            editor.set_read_only(read_only)
        if read_only:
            effect = QGraphicsOpacityEffect(editor)
            effect.setOpacity(get_grid_config().disabled_opacity_ratio)
            editor.setGraphicsEffect(effect)
        else:
            editor.setGraphicsEffect(None)

    def _on_editor_value_changed(self, value: Any) -> None:
        if self._model is None or self._forwarding:
            return
        with FlagContextManager.manage_flags(self, _forwarding=True):
            self._model.set_value(value)
        # The model may have rolled back or coerced the value
        self.refresh()

    def _on_model_value_changed(self, value: Any) -> None:
        if self._forwarding:
            return
        self.refresh()

    def _on_model_read_only_changed(self, read_only: bool) -> None:
        logger.debug(f"'{self._model.name}' read-only changed to {read_only}, rebuilding editor")
        self.recreate_editor()
