"""
Editor creator registry with metaclass auto-registration.

Creators register when their classes are defined, so a property can name
its editor by id in metadata (``PropertyOptions(editor="password")``).

Design:
- EditorCreatorMeta metaclass handles auto-registration
- EDITOR_CREATORS: Global registry of all creator types
- Abstract creators and creators without ``editor_id`` are skipped
"""

from abc import ABCMeta
from typing import Dict, List, Type
import logging

logger = logging.getLogger(__name__)

# Global registry of editor creators
# Maps editor_id -> creator class
EDITOR_CREATORS: Dict[str, Type] = {}


class EditorCreatorMeta(ABCMeta):
    """
    Metaclass for automatic editor creator registration.

    1. Only registers concrete implementations (no abstract methods)
    2. Requires an ``editor_id`` attribute for identification
    3. Auto-populates EDITOR_CREATORS

    Example:
        class ColorEditorCreator(EditorCreator):
            editor_id = "color"

            def create_editor(self, surface):
                return ColorButton(surface)

    The creator auto-registers in EDITOR_CREATORS["color"] when the class
    is defined.
    """

    def __new__(cls, name, bases, attrs):
        new_class = super().__new__(cls, name, bases, attrs)

        if getattr(new_class, '__abstractmethods__', None):
            logger.debug(
                f"Skipping registration for {name} - abstract methods remaining: "
                f"{new_class.__abstractmethods__}"
            )
            return new_class

        # Only the class that declares editor_id registers under it
        editor_id = attrs.get('editor_id')
        if editor_id is None:
            logger.debug(f"Skipping registration for {name} - no editor_id attribute")
            return new_class

        if editor_id in EDITOR_CREATORS:
            existing = EDITOR_CREATORS[editor_id]
            logger.warning(
                f"Editor ID '{editor_id}' already registered to {existing.__name__}. "
                f"Overwriting with {name}."
            )

        EDITOR_CREATORS[editor_id] = new_class
        logger.debug(f"Auto-registered {name} as '{editor_id}'")
        return new_class


def get_editor_creator_class(editor_id: str) -> Type:
    """
    Get editor creator class by ID.

    Raises:
        KeyError: If editor_id not registered
    """
    if editor_id not in EDITOR_CREATORS:
        raise KeyError(
            f"No editor creator registered with ID '{editor_id}'. "
            f"Available editors: {list(EDITOR_CREATORS.keys())}"
        )
    return EDITOR_CREATORS[editor_id]


def list_editor_creators() -> List[str]:
    return sorted(EDITOR_CREATORS)
