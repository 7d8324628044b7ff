"""
Property data model.

Descriptors and metadata describe an object's editable surface; property
models, the object source and the category source hold the editing state.
"""

from .enum_choices import EnumChoices, PickerItem
from .metadata import (
    PROPGRID_METADATA_KEY,
    PropertyOptions,
    CategoryOptions,
    TypeMetadata,
    register_type_metadata,
    unregister_type_metadata,
    get_type_metadata,
)
from .descriptors import PropertyDescriptor, describe_object
from .property_model import PropertyModel
from .object_source import ObjectSource
from .categories import CategoryModel, CategorySource

__all__ = [
    "EnumChoices",
    "PickerItem",
    "PROPGRID_METADATA_KEY",
    "PropertyOptions",
    "CategoryOptions",
    "TypeMetadata",
    "register_type_metadata",
    "unregister_type_metadata",
    "get_type_metadata",
    "PropertyDescriptor",
    "describe_object",
    "PropertyModel",
    "ObjectSource",
    "CategoryModel",
    "CategorySource",
]
