"""
Built-in editor creators: text, boolean, slider and password.
"""

import logging
from typing import Any, Optional

from PyQt6.QtWidgets import QWidget

from pyqt_propgrid.core.conversions import resolve_optional
from pyqt_propgrid.editors.base import EditorCreator
from pyqt_propgrid.protocols.grid_config import get_grid_config
from pyqt_propgrid.protocols.widget_adapters import get_widget_class
from pyqt_propgrid.protocols.widget_protocols import PasswordCapable
# Registers the no-scroll widgets
import pyqt_propgrid.widgets  # noqa: F401

logger = logging.getLogger(__name__)


class TextEditorCreator(EditorCreator):
    """
    Default editor: a line edit showing the type-aware text of the value.

    The text is converted back to the property type on commit.
    """

    editor_id = "text"
    widget_id = "line_edit"

    def create_editor(self, surface: Any) -> Optional[QWidget]:
        model = surface.model
        editor = get_widget_class(self.widget_id)(surface)
        editor.set_value(self.editor_value(model))
        self.apply_description(model, editor)
        return editor

    def editor_value(self, model: Any) -> Any:
        return model.text_value


class BooleanEditorCreator(EditorCreator):
    """Toggle editor for bool properties."""

    editor_id = "boolean"
    widget_id = "check_box"

    def accepts(self, model: Any) -> bool:
        declared = resolve_optional(model.declared_type)
        return declared is bool

    def create_editor(self, surface: Any) -> Optional[QWidget]:
        model = surface.model
        editor = get_widget_class(self.widget_id)(surface)
        editor.set_value(model.value)
        self.apply_description(model, editor)
        return editor


class SliderEditorCreator(EditorCreator):
    """
    Slider for numeric properties carrying range or allowed-values metadata.

    Declines (returns None) when neither is available.
    """

    editor_id = "slider"
    widget_id = "no_scroll_slider"

    def accepts(self, model: Any) -> bool:
        options = model.options
        return model.is_numeric and (options.has_range or options.allowed_values is not None)

    def create_editor(self, surface: Any) -> Optional[QWidget]:
        model = surface.model
        options = model.options
        if not (options.has_range or options.allowed_values is not None):
            logger.debug(f"Slider declined for '{model.name}': no range metadata")
            return None

        editor = get_widget_class(self.widget_id)(surface)
        if options.allowed_values is not None:
            editor.set_allowed_values(options.allowed_values)
        else:
            editor.configure_range(options.minimum, options.maximum, options.step or 1)
        editor.set_value(model.value)
        self.apply_description(model, editor)
        return editor


class PasswordEditorCreator(EditorCreator):
    """
    Decorates the type-rule editor with password masking.

    The wrapped editor is the boolean editor for bool properties and the
    text editor otherwise. Masking only applies when the produced editor is
    PasswordCapable; other editors pass through unchanged. The mask comes
    from the ``password_character`` dynamic option.
    """

    editor_id = "password"

    def __init__(self, inner: Optional[EditorCreator] = None):
        self._inner = inner

    def _inner_for(self, model: Any) -> EditorCreator:
        if self._inner is not None:
            return self._inner
        boolean = BooleanEditorCreator()
        return boolean if boolean.accepts(model) else TextEditorCreator()

    def create_editor(self, surface: Any) -> Optional[QWidget]:
        model = surface.model
        editor = self._inner_for(model).create_editor(surface)
        if isinstance(editor, PasswordCapable):
            character = model.get_dynamic_value(
                "password_character", get_grid_config().default_password_character, str
            )
            editor.set_password_mode(True)
            editor.set_password_character(character)
        return editor

    def update_editor(self, surface: Any, editor: QWidget) -> Optional[QWidget]:
        return self._inner_for(surface.model).update_editor(surface, editor)

    def editor_value(self, model: Any) -> Any:
        return self._inner_for(model).editor_value(model)
