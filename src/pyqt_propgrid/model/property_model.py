"""
Property model: one editable property of the bound object.

A PropertyModel mediates every read, conversion and write between the
grid and the selected object:

- ``value`` is the UI-facing state, ``original_value`` the last committed one
- ``original_value`` only changes on a successful commit or an explicit refresh
- with ``live_sync`` every value change immediately attempts a commit
- a failed conversion forces ``value`` back to ``original_value``
"""

import logging
import math
from typing import Any, List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_propgrid.core.conversions import (
    change_type, is_enum_type, is_numeric_type, resolve_optional, to_text,
    try_change_type, values_equal,
)
from pyqt_propgrid.model.descriptors import PropertyDescriptor
from pyqt_propgrid.model.enum_choices import EnumChoices
from pyqt_propgrid.protocols.host_protocols import PropertyValidator
from pyqt_propgrid.services.flag_context_manager import FlagContextManager

logger = logging.getLogger(__name__)

_MISSING = object()


class PropertyModel(QObject):
    """
    Editable state of a single property.

    Signals:
        value_changed(object): ``value`` changed
        read_only_changed(bool): read-only state changed
        errors_changed(): validation or conversion errors may have changed
    """

    value_changed = pyqtSignal(object)
    read_only_changed = pyqtSignal(bool)
    errors_changed = pyqtSignal()

    def __init__(self, target: Any, descriptor: PropertyDescriptor,
                 live_sync: bool = False, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._target = target
        self._descriptor = descriptor
        self._live_sync = live_sync
        self._value: Any = None
        self._original_value: Any = None
        self._read_only = self.declared_read_only
        self._sort_order = descriptor.sort_order
        self._structural_errors: List[str] = []
        self._choices: Optional[EnumChoices] = None
        self._committing = False

    def __repr__(self) -> str:
        return f"<PropertyModel {self.name}={self._value!r}>"

    # Descriptor pass-through

    @property
    def name(self) -> str:
        return self._descriptor.name

    @property
    def descriptor(self) -> PropertyDescriptor:
        return self._descriptor

    @property
    def target(self) -> Any:
        return self._target

    @property
    def display_name(self) -> str:
        return self._descriptor.display_name

    @property
    def description(self) -> Optional[str]:
        return self._descriptor.description

    @property
    def category(self) -> Optional[str]:
        return self._descriptor.category

    @property
    def declared_type(self) -> Any:
        return self._descriptor.declared_type

    @property
    def options(self):
        return self._descriptor.options

    @property
    def sort_order(self) -> int:
        return self._sort_order

    @sort_order.setter
    def sort_order(self, value: int) -> None:
        self._sort_order = value

    def reset_sort_order(self) -> None:
        """Restore the sort order declared in metadata."""
        self._sort_order = self._descriptor.sort_order

    @property
    def choices(self) -> Optional[EnumChoices]:
        """Choices table from metadata, or built from an Enum declared type."""
        if self._choices is None:
            if self._descriptor.options.choices is not None:
                self._choices = self._descriptor.options.choices
            elif is_enum_type(resolve_optional(self.declared_type)):
                self._choices = EnumChoices.from_enum(resolve_optional(self.declared_type))
        return self._choices

    @property
    def value_type(self) -> Any:
        """Target of conversions: the choices table or the declared type."""
        if self._descriptor.options.choices is not None:
            return self._descriptor.options.choices
        return self.declared_type

    @property
    def is_numeric(self) -> bool:
        return is_numeric_type(resolve_optional(self.declared_type))

    # State

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self.set_value(value)

    @property
    def original_value(self) -> Any:
        return self._original_value

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    @property
    def declared_read_only(self) -> bool:
        """Read-only state coming from the descriptor and metadata alone."""
        return not self._descriptor.can_write or bool(self._descriptor.options.read_only)

    @property
    def is_read_write(self) -> bool:
        return not self._read_only

    def set_read_only(self, read_only: bool) -> None:
        if read_only == self._read_only:
            return
        self._read_only = read_only
        self.read_only_changed.emit(read_only)

    @property
    def live_sync(self) -> bool:
        return self._live_sync

    @live_sync.setter
    def live_sync(self, enabled: bool) -> None:
        self._live_sync = enabled

    @property
    def is_committing(self) -> bool:
        return self._committing

    @property
    def text_value(self) -> str:
        """String form of ``value`` for text editors."""
        if self.choices is not None and self._value is not None:
            return self.choices.format(self._value)
        return to_text(self._value)

    @text_value.setter
    def text_value(self, text: str) -> None:
        self.set_value(text)

    # Source synchronization

    def read_from_source(self) -> Any:
        """
        Read the live value into ``value`` and ``original_value``.

        Never commits. Getter exceptions propagate.
        """
        value = self._normalize(self._descriptor.get_value(self._target))
        self._original_value = value
        self._assign_value(value)
        return value

    def refresh_from_source(self) -> None:
        """Re-read after the host announced a change. Ignored while committing."""
        if self._committing:
            return
        self.read_from_source()

    def set_value(self, value: Any) -> bool:
        """
        Set the UI-facing value.

        Equal values are ignored. With ``live_sync`` the change is committed
        immediately.

        Returns:
            True if the value changed
        """
        if values_equal(self._value, value):
            return False
        if self._structural_errors:
            self._structural_errors = []
        self._assign_value(value)
        if self._live_sync and not self._committing:
            self.commit_or_rollback()
        return True

    def try_convert(self, value: Any = _MISSING) -> Tuple[bool, Any]:
        """
        Coerce a value (default: the current one) into the property's type.

        Range and allowed-values metadata are part of the conversion. When
        the value cannot be converted the declared default is tried instead,
        under the same checks.

        Returns:
            (True, converted) or (False, None)
        """
        if value is _MISSING:
            value = self._value
        ok, converted = try_change_type(value, self.value_type)
        if ok and not self._accepts(converted):
            ok = False
        if not ok and self._descriptor.has_default_value:
            logger.debug(f"Falling back to default value for '{self.name}'")
            ok, converted = try_change_type(self._descriptor.default_value, self.value_type)
            if ok and not self._accepts(converted):
                ok = False
        return (True, converted) if ok else (False, None)

    def commit_or_rollback(self) -> bool:
        """
        Write ``value`` through to the bound object.

        On success ``original_value`` is re-read from the object. On failure
        ``value`` goes back to ``original_value``, which is written back, and
        a conversion error is recorded.

        Returns:
            True if the value was written
        """
        with FlagContextManager.manage_flags(self, _committing=True):
            if self._read_only:
                self._assign_value(self._original_value)
                return False

            ok, converted = self.try_convert()
            error = f"Cannot convert {self._value!r} for '{self.display_name}'"
            if ok:
                try:
                    self._write(converted)
                except Exception as e:
                    # Any setter failure rolls back instead of escaping the edit
                    logger.debug(f"Setter of '{self.name}' raised {type(e).__name__}: {e}")
                    error = str(e) or error
                else:
                    self._original_value = self._normalize(self._descriptor.get_value(self._target))
                    self._assign_value(self._original_value)
                    logger.debug(f"Committed {self.name}={self._original_value!r}")
                    self.errors_changed.emit()
                    return True

            logger.debug(f"Rolling back {self.name}: {error}")
            self._assign_value(self._original_value)
            try:
                self._write(self._original_value)
            except Exception as e:
                logger.warning(f"Cannot restore original value of '{self.name}': {e}")
            self._structural_errors = [error]
            self.errors_changed.emit()
            return False

    # Validation

    def get_errors(self) -> List[Any]:
        """Host validator errors for this property followed by conversion errors."""
        errors: List[Any] = []
        if isinstance(self._target, PropertyValidator):
            errors.extend(self._target.validate_property(self.name, self._value) or [])
        errors.extend(self._structural_errors)
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.get_errors()

    # Ordering

    def sort_key(self) -> Tuple[int, str]:
        return -self._sort_order, self.display_name.casefold()

    def compare_to(self, other: "PropertyModel") -> int:
        """-1, 0 or 1: higher sort order first, then display name ignoring case."""
        mine, theirs = self.sort_key(), other.sort_key()
        return (mine > theirs) - (mine < theirs)

    # Dynamic options

    def get_dynamic_value(self, name: str, default: Any = None, value_type: Any = None) -> Any:
        """
        Look up a host-supplied dynamic option.

        Args:
            name: Option name (e.g. "password_character")
            default: Returned when missing or not convertible
            value_type: Optional type the option is converted to
        """
        value = self._descriptor.options.dynamic_options.get(name, _MISSING)
        if value is _MISSING:
            return default
        if value_type is None:
            return value
        ok, converted = try_change_type(value, value_type)
        return converted if ok else default

    # Internals

    def _assign_value(self, value: Any) -> None:
        if values_equal(self._value, value):
            return
        self._value = value
        self.value_changed.emit(value)
        self.errors_changed.emit()

    def _accepts(self, value: Any) -> bool:
        options = self._descriptor.options
        if value is None:
            return True
        if options.allowed_values is not None:
            if not any(values_equal(value, allowed) or value == allowed for allowed in options.allowed_values):
                return False
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if options.minimum is not None or options.maximum is not None:
                if isinstance(value, float) and math.isnan(value):
                    return False
            if options.minimum is not None and value < options.minimum:
                return False
            if options.maximum is not None and value > options.maximum:
                return False
        return True

    def _normalize(self, raw: Any) -> Any:
        choices = self._descriptor.options.choices
        if choices is not None and raw is not None:
            ok, converted = choices.try_convert(raw)
            if ok:
                return converted
        return raw

    def _write(self, value: Any) -> None:
        declared = resolve_optional(self.declared_type)
        if self._descriptor.options.choices is not None:
            if declared is str and value is not None and not isinstance(value, str):
                value = self._descriptor.options.choices.format(value)
            else:
                value = change_type(value, self.declared_type)
        self._descriptor.set_value(self._target, value)
