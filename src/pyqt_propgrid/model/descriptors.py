"""
Structural discovery of an object's editable surface.

Instead of reflection attributes, descriptors are built from what a Python
object already declares:

- dataclass fields (not writable when the dataclass is frozen)
- ``property`` objects along the MRO (writable when they have a setter)
- public, non-callable instance attributes

Options come from the metadata layer (see ``model.metadata``).
"""

import dataclasses
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, get_type_hints

from pyqt_propgrid.core.conversions import decamelize
from pyqt_propgrid.model.metadata import (
    PROPGRID_METADATA_KEY, PropertyOptions, TypeMetadata, get_type_metadata,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyDescriptor:
    """Immutable snapshot of one property of a bound object."""
    name: str
    declared_type: Any
    can_write: bool
    options: PropertyOptions

    @property
    def category(self) -> Optional[str]:
        return self.options.category

    @property
    def display_name(self) -> str:
        return self.options.display_name or decamelize(self.name)

    @property
    def description(self) -> Optional[str]:
        return self.options.description

    @property
    def default_value(self) -> Any:
        return self.options.default_value if self.options.has_default_value else None

    @property
    def has_default_value(self) -> bool:
        return self.options.has_default_value

    @property
    def sort_order(self) -> int:
        return self.options.sort_order

    @property
    def editor(self) -> Any:
        return self.options.editor

    @property
    def is_browsable(self) -> bool:
        return self.options.browsable

    def get_value(self, obj: Any) -> Any:
        return getattr(obj, self.name)

    def set_value(self, obj: Any, value: Any) -> None:
        setattr(obj, self.name, value)


def _type_hints(target: Any) -> Dict[str, Any]:
    try:
        return get_type_hints(target)
    except (NameError, TypeError) as e:
        # Unresolvable forward references: fall back to raw annotations
        logger.debug(f"Cannot resolve type hints of {target!r}: {e}")
        return dict(getattr(target, "__annotations__", {}) or {})


def _property_type(prop: property) -> Any:
    if prop.fget is None:
        return None
    return _type_hints(prop.fget).get("return")


def _field_options(dataclass_field: dataclasses.Field) -> PropertyOptions:
    # The field default is the initial value, not a fallback for failed conversions
    return dataclass_field.metadata.get(PROPGRID_METADATA_KEY) or PropertyOptions()


def iter_candidates(obj: Any, metadata: TypeMetadata):
    """
    Yield ``(name, declared_type, can_write, base_options)`` for every public
    member of ``obj``, in declaration order.
    """
    cls = type(obj)
    seen = set()

    if dataclasses.is_dataclass(obj):
        hints = _type_hints(cls)
        frozen = cls.__dataclass_params__.frozen
        for dataclass_field in dataclasses.fields(obj):
            if dataclass_field.name.startswith("_"):
                continue
            seen.add(dataclass_field.name)
            declared = hints.get(dataclass_field.name, dataclass_field.type)
            if isinstance(declared, str):
                declared = None
            yield dataclass_field.name, declared, not frozen, _field_options(dataclass_field)

    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name.startswith("_") or name in seen or not isinstance(member, property):
                continue
            seen.add(name)
            yield name, _property_type(member), member.fset is not None, PropertyOptions()

    instance_vars = getattr(obj, "__dict__", None)
    if isinstance(instance_vars, dict):
        hints = _type_hints(cls)
        for name, value in list(instance_vars.items()):
            if name.startswith("_") or name in seen or callable(value):
                continue
            seen.add(name)
            yield name, hints.get(name), True, PropertyOptions()

    for name in metadata.properties:
        if name not in seen and not name.startswith("_"):
            seen.add(name)
            member = inspect.getattr_static(obj, name, None)
            can_write = not isinstance(member, property) or member.fset is not None
            yield name, None, can_write, PropertyOptions()


def describe_object(obj: Any, metadata: Optional[TypeMetadata] = None,
                    include_hidden: bool = False) -> List[PropertyDescriptor]:
    """
    Build the descriptors of an object's browsable properties.

    Members whose value cannot be read are excluded. When no type can be
    inferred from annotations the runtime type of the current value is used.

    Args:
        obj: Object to inspect
        metadata: Bind-time metadata overriding the registered metadata
        include_hidden: Also return non-browsable properties

    Returns:
        Descriptors in declaration order
    """
    if obj is None:
        return []

    type_metadata = get_type_metadata(type(obj)).merged(metadata)
    descriptors = []
    for name, declared, can_write, base_options in iter_candidates(obj, type_metadata):
        options = base_options.merged(type_metadata.options_for(name))
        if not options.browsable and not include_hidden:
            continue
        if declared is None:
            try:
                current = getattr(obj, name)
            except Exception as e:
                # A failing getter excludes the property, not the whole object
                logger.debug(f"Excluding {type(obj).__name__}.{name}: {e}")
                continue
            declared = type(current) if current is not None else Any
        if type_metadata.read_only:
            can_write = False
        descriptors.append(PropertyDescriptor(
            name=name,
            declared_type=declared,
            can_write=can_write,
            options=options,
        ))
    return descriptors
