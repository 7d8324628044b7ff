"""
Picker editor for enumerations.

Simple enumerations get a single-selection list that closes the overlay on
select; bit-flag enumerations get a checkable list that stays open while
bits are toggled. Both live inside an EditorHost.
"""

import logging
from typing import Any, Optional

from PyQt6.QtWidgets import QWidget

from pyqt_propgrid.editors.base import EditorCreator
from pyqt_propgrid.editors.editor_host import EditorHost
from pyqt_propgrid.protocols.widget_adapters import get_widget_class

logger = logging.getLogger(__name__)


class EnumEditorCreator(EditorCreator):
    """
    Picker for Enum/Flag typed properties and properties carrying an
    EnumChoices table. Read-only enumerations are left to the text editor.
    """

    editor_id = "enum"
    simple_widget_id = "no_scroll_choice_list"
    flags_widget_id = "flags_check_list"

    def accepts(self, model: Any) -> bool:
        return model.choices is not None and model.is_read_write

    def create_editor(self, surface: Any) -> Optional[QWidget]:
        model = surface.model
        choices = model.choices
        if choices is None:
            logger.debug(f"Enum picker declined for '{model.name}': no choices")
            return None

        widget_id = self.flags_widget_id if choices.is_flags else self.simple_widget_id
        inner = get_widget_class(widget_id)()
        inner.set_choices(choices)

        def format_value(value: Any) -> str:
            return "" if value is None else choices.format(value)

        host = EditorHost(inner, format_value, close_on_select=not choices.is_flags, parent=surface)
        host.set_value(model.value)
        self.apply_description(model, host)
        return host
