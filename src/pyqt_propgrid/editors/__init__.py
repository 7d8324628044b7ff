"""
Editor creators and resolution.
"""

from .editor_registry import EDITOR_CREATORS, EditorCreatorMeta, get_editor_creator_class, list_editor_creators
from .base import EditorCreator
from .creators import TextEditorCreator, BooleanEditorCreator, SliderEditorCreator, PasswordEditorCreator
from .editor_host import EditorHost, OverlayFrame
from .enum_editor import EnumEditorCreator
from .editor_resolver import EditorResolver

__all__ = [
    "EDITOR_CREATORS",
    "EditorCreatorMeta",
    "get_editor_creator_class",
    "list_editor_creators",
    "EditorCreator",
    "TextEditorCreator",
    "BooleanEditorCreator",
    "SliderEditorCreator",
    "PasswordEditorCreator",
    "EditorHost",
    "OverlayFrame",
    "EnumEditorCreator",
    "EditorResolver",
]
