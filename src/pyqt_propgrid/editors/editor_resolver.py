"""
Editor resolution: which creator builds the editor of a property.

Resolution order:
1. the property value is itself an EditorCreator
2. the editor override from metadata (registered id or EditorCreator subclass)
3. the built-in chain: boolean, enum picker, slider
4. the default text editor, also used whenever a creator declines
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from PyQt6.QtWidgets import QWidget

from pyqt_propgrid.core.performance_monitor import timer
from pyqt_propgrid.editors.base import EditorCreator
from pyqt_propgrid.editors.creators import BooleanEditorCreator, SliderEditorCreator, TextEditorCreator
from pyqt_propgrid.editors.editor_registry import get_editor_creator_class
from pyqt_propgrid.editors.enum_editor import EnumEditorCreator
from pyqt_propgrid.exceptions import EditorResolutionError

logger = logging.getLogger(__name__)


class EditorResolver:
    """
    Ordered strategy chain ending in a guaranteed default.

    Example:
        resolver = EditorResolver()
        creator, editor = resolver.create_editor(surface)
    """

    def __init__(self, chain: Optional[Sequence[EditorCreator]] = None,
                 default: Optional[EditorCreator] = None):
        self._chain: List[EditorCreator] = list(chain) if chain is not None else [
            BooleanEditorCreator(),
            EnumEditorCreator(),
            SliderEditorCreator(),
        ]
        self._default = default or TextEditorCreator()

    @property
    def chain(self) -> List[EditorCreator]:
        return list(self._chain)

    @property
    def default_creator(self) -> EditorCreator:
        return self._default

    def resolve_creator(self, model: Any) -> EditorCreator:
        """
        Pick the creator for ``model`` without building anything.

        Raises:
            EditorResolutionError: If the metadata override is unknown or
                not an EditorCreator
        """
        if isinstance(model.value, EditorCreator):
            return model.value

        override = model.descriptor.editor
        if override is not None:
            return self._instantiate_override(override, model.name)

        for creator in self._chain:
            if creator.accepts(model):
                return creator
        return self._default

    def create_editor(self, surface: Any) -> Tuple[EditorCreator, QWidget]:
        """
        Build the editor of ``surface.model``.

        Returns:
            (creator, editor); the creator is the one that produced the editor

        Raises:
            EditorResolutionError: On a bad override or when a creator
                returns something that is not a widget
        """
        model = surface.model
        creator = self.resolve_creator(model)
        with timer(f"Create editor for '{model.name}'", threshold_ms=5.0):
            editor = creator.create_editor(surface)
            if editor is None and creator is not self._default:
                logger.debug(f"{creator!r} declined '{model.name}', using default editor")
                creator = self._default
                editor = creator.create_editor(surface)
        self._check_editor(creator, editor, model.name)
        logger.debug(f"Created {type(editor).__name__} for '{model.name}' with {creator!r}")
        return creator, editor

    def update_editor(self, surface: Any, creator: EditorCreator,
                      editor: QWidget) -> Tuple[EditorCreator, QWidget]:
        """
        Refresh ``editor`` in place through its creator.

        Returns:
            (creator, editor); the editor differs from the given one when
            the creator replaced it
        """
        updated = creator.update_editor(surface, editor)
        if updated is None:
            return self.create_editor(surface)
        if updated is not editor:
            self._check_editor(creator, updated, surface.model.name)
        return creator, updated

    def _instantiate_override(self, override: Any, name: str) -> EditorCreator:
        if isinstance(override, EditorCreator):
            return override
        if isinstance(override, str):
            try:
                override = get_editor_creator_class(override)
            except KeyError as e:
                raise EditorResolutionError(f"Editor override of '{name}': {e.args[0]}") from e
        if not (isinstance(override, type) and issubclass(override, EditorCreator)):
            raise EditorResolutionError(
                f"Editor override of '{name}' must be an EditorCreator subclass or id, got {override!r}"
            )
        try:
            return override()
        except TypeError as e:
            raise EditorResolutionError(f"Cannot instantiate {override.__name__} for '{name}': {e}") from e

    def _check_editor(self, creator: EditorCreator, editor: Any, name: str) -> None:
        if not isinstance(editor, QWidget):
            raise EditorResolutionError(
                f"{creator!r} returned {type(editor).__name__} for '{name}', expected a QWidget"
            )
