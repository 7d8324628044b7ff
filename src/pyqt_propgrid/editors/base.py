"""
Editor creator strategy contract.

An EditorCreator builds the editor widget of one property row and refreshes
it when the property value changes. Creators only see the binding surface
(``surface.model`` is the PropertyModel, the surface itself is the parent
widget of the editor).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from PyQt6.QtWidgets import QWidget

from pyqt_propgrid.editors.editor_registry import EditorCreatorMeta
from pyqt_propgrid.protocols.widget_protocols import PlaceholderCapable, ValueSettable
from pyqt_propgrid.services.signal_service import SignalService


class EditorCreator(ABC, metaclass=EditorCreatorMeta):
    """
    Strategy building an editor for a property model.

    Subclasses declaring ``editor_id`` are registered and can be named in
    ``PropertyOptions.editor``.
    """

    editor_id: Optional[str] = None

    def accepts(self, model: Any) -> bool:
        """Whether this creator handles ``model`` in the built-in type chain."""
        return True

    @abstractmethod
    def create_editor(self, surface: Any) -> Optional[QWidget]:
        """
        Build the editor for ``surface.model``.

        Returns:
            The editor widget, or None to decline (the default text editor
            is used instead)
        """
        pass

    def update_editor(self, surface: Any, editor: QWidget) -> Optional[QWidget]:
        """
        Refresh ``editor`` from the model in place.

        Returns:
            The editor to keep; a different widget replaces the current one,
            None asks for a full rebuild
        """
        if isinstance(editor, ValueSettable):
            with SignalService.block_signals(editor):
                editor.set_value(self.editor_value(surface.model))
        return editor

    def editor_value(self, model: Any) -> Any:
        """Value pushed into the editor."""
        return model.value

    def apply_description(self, model: Any, editor: QWidget) -> None:
        if model.description:
            editor.setToolTip(model.description)
            if isinstance(editor, PlaceholderCapable):
                editor.set_placeholder(model.description)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} '{self.editor_id}'>"
