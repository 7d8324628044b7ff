"""
Explicit property metadata.

Options describing how a property is shown and edited are plain objects
rather than attributes on the inspected class. They reach the grid three
ways, later sources overriding earlier ones:

1. ``field(metadata={PROPGRID_METADATA_KEY: PropertyOptions(...)})`` on
   dataclass fields
2. ``register_type_metadata(cls, TypeMetadata(...))`` per class (bases first)
3. the ``metadata`` argument given when an object is bound
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, FrozenSet, Optional, Tuple, Type

from pyqt_propgrid.exceptions import MetadataError
from pyqt_propgrid.model.enum_choices import EnumChoices

logger = logging.getLogger(__name__)

PROPGRID_METADATA_KEY = "pyqt_propgrid"


class _Sentinel:
    def __init__(self, label: str):
        self._label = label

    def __repr__(self):
        return f"<{self._label}>"


# Marks an option the caller did not pass
_UNSET: Any = _Sentinel("unset")

# Resolved value of default_value when no default is declared
NO_DEFAULT: Any = _Sentinel("no default")

_OPTION_DEFAULTS = {
    "category": None,
    "display_name": None,
    "description": None,
    "default_value": NO_DEFAULT,
    "read_only": None,
    "browsable": True,
    "sort_order": 0,
    "editor": None,
    "minimum": None,
    "maximum": None,
    "step": None,
    "allowed_values": None,
    "choices": None,
}


@dataclass
class PropertyOptions:
    """
    Per-property display and editing options.

    Only the options passed to the constructor are applied when these options
    override others (see ``merged``), so an override can restore a default
    such as ``browsable=True`` or ``sort_order=0``.

    Attributes:
        category: Category name used when the grid groups by category
        display_name: Row label (defaults to the decamelized property name)
        description: Tooltip / placeholder text
        default_value: Value used when a conversion fails (NO_DEFAULT = none)
        read_only: Force the property read-only (None = follow the setter)
        browsable: False hides the property from the grid
        sort_order: Higher values sort first
        editor: Editor creator id or EditorCreator subclass overriding type rules
        minimum, maximum, step: Numeric range
        allowed_values: Discrete values the property accepts
        choices: EnumChoices table for properties not typed as an Enum
        dynamic_options: Free-form options read by editor creators
            (e.g. ``password_character``)
    """
    category: Optional[str] = _UNSET
    display_name: Optional[str] = _UNSET
    description: Optional[str] = _UNSET
    default_value: Any = _UNSET
    read_only: Optional[bool] = _UNSET
    browsable: bool = _UNSET
    sort_order: int = _UNSET
    editor: Any = _UNSET
    minimum: Optional[float] = _UNSET
    maximum: Optional[float] = _UNSET
    step: Optional[float] = _UNSET
    allowed_values: Optional[Tuple[Any, ...]] = _UNSET
    choices: Optional[EnumChoices] = _UNSET
    dynamic_options: Dict[str, Any] = field(default_factory=dict)
    explicit: FrozenSet[str] = field(default=frozenset(), init=False, repr=False, compare=False)

    def __post_init__(self):
        explicit = set()
        for name, default in _OPTION_DEFAULTS.items():
            if getattr(self, name) is _UNSET:
                setattr(self, name, default)
            else:
                explicit.add(name)
        self.explicit = frozenset(explicit)

        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise MetadataError(f"minimum {self.minimum} is greater than maximum {self.maximum}")
        if self.step is not None and self.step <= 0:
            raise MetadataError(f"step must be positive, got {self.step}")
        if self.allowed_values is not None:
            self.allowed_values = tuple(self.allowed_values)
            if not self.allowed_values:
                raise MetadataError("allowed_values must not be empty")
        if self.choices is not None and not isinstance(self.choices, EnumChoices):
            raise MetadataError(f"choices must be an EnumChoices table, got {type(self.choices).__name__}")

    @property
    def has_default_value(self) -> bool:
        return self.default_value is not NO_DEFAULT

    @property
    def has_range(self) -> bool:
        return self.minimum is not None and self.maximum is not None

    def merged(self, override: Optional["PropertyOptions"]) -> "PropertyOptions":
        """Copy of these options with every option passed to ``override`` applied."""
        if override is None:
            return self
        values = {}
        for option in fields(self):
            if not option.init:
                continue
            if option.name == "dynamic_options":
                values[option.name] = {**self.dynamic_options, **override.dynamic_options}
            elif option.name in override.explicit:
                values[option.name] = getattr(override, option.name)
            elif option.name in self.explicit:
                values[option.name] = getattr(self, option.name)
        return PropertyOptions(**values)


@dataclass
class CategoryOptions:
    """Per-category options: initial expansion state and sort weight."""
    is_expanded: bool = True
    sort_order: int = 0


@dataclass
class TypeMetadata:
    """
    Metadata for one inspected type.

    Category keys are matched case-insensitively.
    """
    properties: Dict[str, PropertyOptions] = field(default_factory=dict)
    categories: Dict[str, CategoryOptions] = field(default_factory=dict)
    read_only: bool = False

    def options_for(self, name: str) -> Optional[PropertyOptions]:
        return self.properties.get(name)

    def category_options(self, category: str) -> Optional[CategoryOptions]:
        key = category.casefold()
        for name, options in self.categories.items():
            if name.casefold() == key:
                return options
        return None

    def merged(self, override: Optional["TypeMetadata"]) -> "TypeMetadata":
        if override is None:
            return self
        properties = dict(self.properties)
        for name, options in override.properties.items():
            base = properties.get(name)
            properties[name] = base.merged(options) if base is not None else options
        categories = dict(self.categories)
        categories.update(override.categories)
        return TypeMetadata(
            properties=properties,
            categories=categories,
            read_only=self.read_only or override.read_only,
        )


# Global registry of per-class metadata
# Maps class -> TypeMetadata
TYPE_METADATA: Dict[Type, TypeMetadata] = {}


def register_type_metadata(cls: Type, metadata: TypeMetadata) -> None:
    """
    Register metadata for a class. Subclasses inherit it.

    Args:
        cls: The inspected class
        metadata: Its property and category options
    """
    if not isinstance(cls, type):
        raise MetadataError(f"Metadata must be registered on a class, got {cls!r}")
    if cls in TYPE_METADATA:
        logger.warning(f"Metadata for {cls.__name__} already registered. Overwriting.")
    TYPE_METADATA[cls] = metadata
    logger.debug(f"Registered metadata for {cls.__name__}: {sorted(metadata.properties)}")


def unregister_type_metadata(cls: Type) -> None:
    TYPE_METADATA.pop(cls, None)


def get_type_metadata(cls: Type) -> TypeMetadata:
    """Metadata registered on ``cls`` and its bases, most derived winning."""
    result = TypeMetadata()
    for klass in reversed(cls.__mro__):
        registered = TYPE_METADATA.get(klass)
        if registered is not None:
            result = result.merged(registered)
    return result
