"""
Protocol definitions, adapters and configuration.

ABC-based editor and host contracts that eliminate duck typing in favor of
explicit, fail-loud inheritance-based architecture.
"""

from .grid_config import PropertyGridConfig, set_grid_config, get_grid_config
from .widget_protocols import (
    ValueGettable,
    ValueSettable,
    PlaceholderCapable,
    RangeConfigurable,
    ChoiceSelectable,
    ReadOnlyCapable,
    PasswordCapable,
    ChangeSignalEmitter,
)
from .widget_adapters import (
    LineEditAdapter,
    CheckBoxAdapter,
    SliderAdapter,
    ChoiceListAdapter,
    FlagsCheckListAdapter,
    PyQtWidgetMeta,
    register_widget,
    get_widget_class,
    get_widget_capabilities,
)
from .host_protocols import PropertyChangeNotifier, PropertyValidator, ObservableObject
from .layout_protocols import RowContainer

__all__ = [
    "PropertyGridConfig",
    "set_grid_config",
    "get_grid_config",
    "ValueGettable",
    "ValueSettable",
    "PlaceholderCapable",
    "RangeConfigurable",
    "ChoiceSelectable",
    "ReadOnlyCapable",
    "PasswordCapable",
    "ChangeSignalEmitter",
    "LineEditAdapter",
    "CheckBoxAdapter",
    "SliderAdapter",
    "ChoiceListAdapter",
    "FlagsCheckListAdapter",
    "PyQtWidgetMeta",
    "register_widget",
    "get_widget_class",
    "get_widget_capabilities",
    "PropertyChangeNotifier",
    "PropertyValidator",
    "ObservableObject",
    "RowContainer",
]
