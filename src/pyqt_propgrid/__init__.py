"""
pyqt-propgrid: reflective property grid for PyQt6.

Give it any Python object and it discovers the object's editable surface,
organizes it into sorted categories, binds each property to an editor and
keeps object and editors synchronized, with commit-on-demand or live
editing, validation and rollback.

Architecture:
- Core: conversions, overlay state machine, performance timing
- Protocols: editor, host and layout ABCs plus Qt adapters and configuration
- Model: descriptors, metadata, property models, object and category sources
- Editors: editor creators and the resolver choosing between them
- Grid: value surfaces, row container and the PropertyGrid widget
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .grid.property_grid import PropertyGrid, PropertyVisuals
    from .model.object_source import ObjectSource
    from .model.property_model import PropertyModel
    from .model.metadata import PropertyOptions, CategoryOptions, TypeMetadata

__version__ = "0.1.0"

_EXPORTS = {
    "PropertyGrid": ("pyqt_propgrid.grid.property_grid", "PropertyGrid"),
    "PropertyVisuals": ("pyqt_propgrid.grid.property_grid", "PropertyVisuals"),
    "PropertyValueSurface": ("pyqt_propgrid.grid.value_surface", "PropertyValueSurface"),
    "ObjectSource": ("pyqt_propgrid.model.object_source", "ObjectSource"),
    "PropertyModel": ("pyqt_propgrid.model.property_model", "PropertyModel"),
    "CategorySource": ("pyqt_propgrid.model.categories", "CategorySource"),
    "EnumChoices": ("pyqt_propgrid.model.enum_choices", "EnumChoices"),
    "PropertyOptions": ("pyqt_propgrid.model.metadata", "PropertyOptions"),
    "CategoryOptions": ("pyqt_propgrid.model.metadata", "CategoryOptions"),
    "TypeMetadata": ("pyqt_propgrid.model.metadata", "TypeMetadata"),
    "PROPGRID_METADATA_KEY": ("pyqt_propgrid.model.metadata", "PROPGRID_METADATA_KEY"),
    "register_type_metadata": ("pyqt_propgrid.model.metadata", "register_type_metadata"),
    "EditorCreator": ("pyqt_propgrid.editors.base", "EditorCreator"),
    "EditorResolver": ("pyqt_propgrid.editors.editor_resolver", "EditorResolver"),
    "ObservableObject": ("pyqt_propgrid.protocols.host_protocols", "ObservableObject"),
    "PropertyChangeNotifier": ("pyqt_propgrid.protocols.host_protocols", "PropertyChangeNotifier"),
    "PropertyValidator": ("pyqt_propgrid.protocols.host_protocols", "PropertyValidator"),
    "PropertyGridConfig": ("pyqt_propgrid.protocols.grid_config", "PropertyGridConfig"),
    "set_grid_config": ("pyqt_propgrid.protocols.grid_config", "set_grid_config"),
    "get_grid_config": ("pyqt_propgrid.protocols.grid_config", "get_grid_config"),
    "PropertyGridError": ("pyqt_propgrid.exceptions", "PropertyGridError"),
    "EditorResolutionError": ("pyqt_propgrid.exceptions", "EditorResolutionError"),
    "MetadataError": ("pyqt_propgrid.exceptions", "MetadataError"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__"] + list(_EXPORTS.keys())
