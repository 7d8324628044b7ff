"""
Widget adapters that wrap Qt widgets to implement the editor ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QSlider.value() vs QListWidget item data
- QLineEdit.setText() vs QSlider.setValue() vs QListWidget.setCurrentRow()
- textChanged vs valueChanged vs toggled vs itemChanged

All adapters implement a consistent interface via ABCs:
- get_value() / set_value() for all editors
- connect_change_signal() for all editors
- set_read_only() for all editors
"""

import logging
from abc import ABCMeta
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Type

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtWidgets import QCheckBox, QLineEdit, QListWidget, QListWidgetItem, QSlider

from .widget_protocols import (
    ValueGettable, ValueSettable, PlaceholderCapable, RangeConfigurable,
    ChoiceSelectable, ReadOnlyCapable, PasswordCapable, ChangeSignalEmitter,
)

logger = logging.getLogger(__name__)


# Qt's metaclass must be combined with ABCMeta for QWidget + ABC inheritance
class PyQtWidgetMeta(type(QObject), ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


class WrappedCallbacksMixin:
    """
    Keeps the lambda wrapping each connected callback so it can be
    disconnected later (Qt can only disconnect the object it connected).
    """

    def _connect_wrapped(self, signal, callback: Callable[[Any], None]) -> None:
        wrappers = self.__dict__.setdefault("_change_wrappers", {})
        if callback in wrappers:
            return
        wrapper = lambda *_args: callback(self.get_value())
        wrappers[callback] = wrapper
        signal.connect(wrapper)

    def _disconnect_wrapped(self, signal, callback: Callable[[Any], None]) -> None:
        wrapper = self.__dict__.get("_change_wrappers", {}).pop(callback, None)
        if wrapper is None:
            return
        try:
            signal.disconnect(wrapper)
        except TypeError:
            # Signal not connected - ignore
            pass


class LineEditAdapter(QLineEdit, WrappedCallbacksMixin, ValueGettable, ValueSettable,
                      PlaceholderCapable, ReadOnlyCapable, PasswordCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QLineEdit implementing the editor ABCs.

    Normalizes Qt API to editor contracts:
    - .text() → .get_value()
    - .setText() → .set_value()
    - .setEchoMode(Password) → .set_password_mode()
    - .textChanged → .connect_change_signal()
    """

    _widget_id = "line_edit"

    def __init__(self, parent=None):
        super().__init__(parent)
        self._password_character: Optional[str] = None

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        return self.text()

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        text = "" if value is None else str(value)
        # Same text: keep the cursor where the user left it
        if text != self.text():
            self.setText(text)

    def set_placeholder(self, text: str) -> None:
        """Implement PlaceholderCapable ABC."""
        self.setPlaceholderText(text)

    def set_read_only(self, read_only: bool) -> None:
        """Implement ReadOnlyCapable ABC."""
        self.setReadOnly(read_only)

    def set_password_mode(self, enabled: bool) -> None:
        """Implement PasswordCapable ABC."""
        self.setEchoMode(QLineEdit.EchoMode.Password if enabled else QLineEdit.EchoMode.Normal)

    def set_password_character(self, character: str) -> None:
        """Implement PasswordCapable ABC."""
        if not character:
            return
        self._password_character = character[0]
        # Qt exposes the mask character only through the style sheet (as a code point)
        self.setStyleSheet(f"QLineEdit {{ lineedit-password-character: {ord(self._password_character)}; }}")

    @property
    def password_character(self) -> Optional[str]:
        return self._password_character

    @property
    def is_password_mode(self) -> bool:
        return self.echoMode() == QLineEdit.EchoMode.Password

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_wrapped(self.textChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_wrapped(self.textChanged, callback)


class CheckBoxAdapter(QCheckBox, WrappedCallbacksMixin, ValueGettable, ValueSettable,
                      ReadOnlyCapable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QCheckBox implementing the editor ABCs.

    Returns bool values, treats None as False.
    """

    _widget_id = "check_box"

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        self.setChecked(bool(value) if value is not None else False)

    def set_read_only(self, read_only: bool) -> None:
        """Implement ReadOnlyCapable ABC."""
        self.setEnabled(not read_only)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_wrapped(self.toggled, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_wrapped(self.toggled, callback)


class SliderAdapter(QSlider, WrappedCallbacksMixin, ValueGettable, ValueSettable,
                    RangeConfigurable, ReadOnlyCapable, ChangeSignalEmitter,
                    metaclass=PyQtWidgetMeta):
    """
    Adapter for QSlider implementing the editor ABCs.

    QSlider positions are integers. Values are mapped onto positions either
    through ``minimum + position * step`` or, when allowed values are set,
    by indexing the sorted allowed values.
    """

    _widget_id = "slider"

    def __init__(self, parent=None):
        super().__init__(Qt.Orientation.Horizontal, parent)
        self._minimum: float = 0
        self._maximum: float = 100
        self._step: float = 1
        self._allowed_values: Optional[List[Any]] = None
        self.setRange(0, 100)

    @property
    def allowed_values(self) -> Optional[List[Any]]:
        return list(self._allowed_values) if self._allowed_values is not None else None

    @property
    def step(self) -> float:
        return self._step

    def configure_range(self, minimum: float, maximum: float, step: float = 1) -> None:
        """Implement RangeConfigurable ABC."""
        self._allowed_values = None
        self._minimum, self._maximum, self._step = minimum, maximum, step or 1
        positions = int(round((maximum - minimum) / self._step))
        self.setRange(0, max(positions, 0))
        self.setSingleStep(1)
        self.setPageStep(max(positions // 10, 1))

    def set_allowed_values(self, values: Sequence[Any]) -> None:
        """Restrict the slider to discrete values, one tick each."""
        self._allowed_values = sorted(values)
        self.setRange(0, len(self._allowed_values) - 1)
        self.setSingleStep(1)
        self.setPageStep(1)
        self.setTickPosition(QSlider.TickPosition.TicksBelow)
        self.setTickInterval(1)

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        position = self.value()
        if self._allowed_values is not None:
            return self._allowed_values[position]
        value = self._minimum + position * self._step
        if all(float(number).is_integer() for number in (self._minimum, self._step)):
            return int(value)
        return value

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        if value is None:
            self.setValue(0)
            return
        if self._allowed_values is not None:
            distances = [abs(allowed - value) for allowed in self._allowed_values]
            self.setValue(distances.index(min(distances)))
            return
        self.setValue(int(round((float(value) - self._minimum) / self._step)))

    def set_read_only(self, read_only: bool) -> None:
        """Implement ReadOnlyCapable ABC."""
        self.setEnabled(not read_only)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_wrapped(self.valueChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_wrapped(self.valueChanged, callback)


class ChoiceListAdapter(QListWidget, WrappedCallbacksMixin, ValueGettable, ValueSettable,
                        ChoiceSelectable, ReadOnlyCapable, ChangeSignalEmitter,
                        metaclass=PyQtWidgetMeta):
    """
    Single-selection list implementing the editor ABCs.

    Stores actual values in the item data, not just display text.
    """

    _widget_id = "choice_list"

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        item = self.currentItem()
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        for i in range(self.count()):
            if self.item(i).data(Qt.ItemDataRole.UserRole) == value:
                self.setCurrentRow(i)
                return
        # Value not found - clear selection
        self.setCurrentRow(-1)

    def set_choices(self, choices: Any) -> None:
        """Implement ChoiceSelectable ABC."""
        self.clear()
        for picker_item in choices.items():
            item = QListWidgetItem(picker_item.display_name)
            item.setData(Qt.ItemDataRole.UserRole, picker_item.value)
            self.addItem(item)

    def select_row(self, row: int) -> None:
        """Select a row as a user click would."""
        self.setCurrentRow(row)

    def set_read_only(self, read_only: bool) -> None:
        """Implement ReadOnlyCapable ABC."""
        self.setEnabled(not read_only)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_wrapped(self.currentRowChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_wrapped(self.currentRowChanged, callback)


class FlagsCheckListAdapter(QListWidget, WrappedCallbacksMixin, ValueGettable, ValueSettable,
                            ChoiceSelectable, ReadOnlyCapable, ChangeSignalEmitter,
                            metaclass=PyQtWidgetMeta):
    """
    Checkable list editing a bit-flag value.

    Each row is one entry of a flags EnumChoices table. Checking a row sets
    its bits, unchecking clears them, checking the zero entry clears
    everything. After each toggle every row is re-synchronized with the
    combined value, so multi-bit entries follow their bits.
    """

    _widget_id = "flags_check_list"

    value_edited = pyqtSignal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._choices = None
        self._value: Any = 0
        self._syncing = False
        self.itemChanged.connect(self._on_item_changed)

    def set_choices(self, choices: Any) -> None:
        """Implement ChoiceSelectable ABC."""
        self._choices = choices
        self._value = choices.zero
        self._syncing = True
        try:
            self.clear()
            for picker_item in choices.items(self._value):
                item = QListWidgetItem(picker_item.display_name)
                item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
                item.setData(Qt.ItemDataRole.UserRole, picker_item.value)
                item.setCheckState(Qt.CheckState.Checked if picker_item.is_checked else Qt.CheckState.Unchecked)
                self.addItem(item)
        finally:
            self._syncing = False

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        return self._value

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        if self._choices is None:
            return
        ok, converted = self._choices.try_convert(self._choices.zero if value is None else value)
        self._value = converted if ok else self._choices.zero
        self._sync_check_states()

    def checked_names(self) -> List[str]:
        return [self.item(i).text() for i in range(self.count())
                if self.item(i).checkState() == Qt.CheckState.Checked]

    def set_choice_checked(self, value: Any, checked: bool) -> None:
        """Check or uncheck the row holding ``value`` as a user would."""
        for i in range(self.count()):
            item = self.item(i)
            if item.data(Qt.ItemDataRole.UserRole) == value:
                item.setCheckState(Qt.CheckState.Checked if checked else Qt.CheckState.Unchecked)
                return
        raise KeyError(f"No choice with value {value!r}")

    def set_read_only(self, read_only: bool) -> None:
        """Implement ReadOnlyCapable ABC."""
        self.setEnabled(not read_only)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_wrapped(self.value_edited, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_wrapped(self.value_edited, callback)

    def _on_item_changed(self, item: QListWidgetItem) -> None:
        if self._syncing or self._choices is None:
            return
        ok, item_value = self._choices.try_convert(item.data(Qt.ItemDataRole.UserRole))
        if not ok:
            return
        bits = self._choices.bits_of(self._value)
        item_bits = self._choices.bits_of(item_value)
        if item.checkState() == Qt.CheckState.Checked:
            bits = 0 if item_bits == 0 else bits | item_bits
        else:
            bits &= ~item_bits
        self._value = self._choices.from_bits(bits)
        self._sync_check_states()
        self.value_edited.emit(self._value)

    def _sync_check_states(self) -> None:
        self._syncing = True
        try:
            states = {i: p.is_checked for i, p in enumerate(self._choices.items(self._value))}
            for i in range(self.count()):
                checked = states.get(i, False)
                self.item(i).setCheckState(Qt.CheckState.Checked if checked else Qt.CheckState.Unchecked)
        finally:
            self._syncing = False


# Registry of editor widget adapters
# Maps widget_id -> widget class
WIDGET_IMPLEMENTATIONS: Dict[str, Type] = {}

# Track which ABCs each widget implements
# Maps widget class -> set of ABC classes
WIDGET_CAPABILITIES: Dict[Type, Set[Type]] = {}

_CAPABILITY_TYPES = (
    ValueGettable, ValueSettable, PlaceholderCapable, RangeConfigurable,
    ChoiceSelectable, ReadOnlyCapable, PasswordCapable, ChangeSignalEmitter,
)


def register_widget(widget_class: Type) -> Type:
    """
    Register a widget adapter under its ``_widget_id``.

    Usable as a class decorator.
    """
    widget_id = getattr(widget_class, "_widget_id", None)
    if widget_id is None:
        raise ValueError(f"{widget_class.__name__} has no _widget_id attribute")
    if widget_id in WIDGET_IMPLEMENTATIONS and WIDGET_IMPLEMENTATIONS[widget_id] is not widget_class:
        logger.warning(
            f"Widget ID '{widget_id}' already registered to "
            f"{WIDGET_IMPLEMENTATIONS[widget_id].__name__}. Overwriting with {widget_class.__name__}."
        )
    WIDGET_IMPLEMENTATIONS[widget_id] = widget_class
    WIDGET_CAPABILITIES[widget_class] = {abc for abc in _CAPABILITY_TYPES if issubclass(widget_class, abc)}
    return widget_class


def get_widget_class(widget_id: str) -> Type:
    """
    Get widget class by ID.

    Raises:
        KeyError: If widget_id not registered
    """
    if widget_id not in WIDGET_IMPLEMENTATIONS:
        raise KeyError(
            f"No widget registered with ID '{widget_id}'. "
            f"Available widgets: {list(WIDGET_IMPLEMENTATIONS.keys())}"
        )
    return WIDGET_IMPLEMENTATIONS[widget_id]


def get_widget_capabilities(widget_class: Type) -> Set[Type]:
    return WIDGET_CAPABILITIES.get(widget_class, set())


for _adapter in (LineEditAdapter, CheckBoxAdapter, SliderAdapter, ChoiceListAdapter, FlagsCheckListAdapter):
    register_widget(_adapter)
