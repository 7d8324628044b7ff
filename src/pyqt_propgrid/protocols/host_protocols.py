"""
Capabilities a selected object may offer to the property grid.

Objects bound to a grid are plain Python objects. Two optional capabilities
change how the grid treats them:

- PropertyChangeNotifier: the object announces its own property changes so
  the grid can refresh the affected rows.
- PropertyValidator: the object reports validation errors per property.

ObservableObject is a convenience base that implements the notifier.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, Optional

from pyqt_propgrid.core.conversions import values_equal

logger = logging.getLogger(__name__)

PropertyChangedHandler = Callable[[Any, Optional[str]], None]


class PropertyChangeNotifier(ABC):
    """
    ABC for objects that announce property changes.

    Handlers are called as ``handler(sender, property_name)``. An empty or
    None name means "every property may have changed".
    """

    @abstractmethod
    def add_property_changed_handler(self, handler: PropertyChangedHandler) -> None:
        pass

    @abstractmethod
    def remove_property_changed_handler(self, handler: PropertyChangedHandler) -> None:
        pass


class PropertyValidator(ABC):
    """ABC for objects that validate their own property values."""

    @abstractmethod
    def validate_property(self, name: str, value: Any) -> Iterable[Any]:
        """
        Validate a candidate value for a property.

        Args:
            name: Property name
            value: Candidate value (the grid's current value, not necessarily committed)

        Returns:
            Iterable of errors; empty when the value is valid
        """
        pass


class ObservableObject(PropertyChangeNotifier):
    """
    Base class for host objects that notify property changes.

    Example:
        class Customer(ObservableObject):
            def __init__(self):
                super().__init__()
                self._name = ""

            @property
            def name(self) -> str:
                return self._name

            @name.setter
            def name(self, value: str) -> None:
                self._set_property("name", value)
    """

    def __init__(self):
        self._property_changed_handlers: List[PropertyChangedHandler] = []

    def add_property_changed_handler(self, handler: PropertyChangedHandler) -> None:
        if handler not in self._property_changed_handlers:
            self._property_changed_handlers.append(handler)

    def remove_property_changed_handler(self, handler: PropertyChangedHandler) -> None:
        if handler in self._property_changed_handlers:
            self._property_changed_handlers.remove(handler)

    def property_changed_handler_count(self) -> int:
        return len(self._property_changed_handlers)

    def _set_property(self, name: str, value: Any, attribute: Optional[str] = None) -> bool:
        """
        Store ``value`` in the backing attribute and notify if it changed.

        Args:
            name: Public property name used in notifications
            value: New value
            attribute: Backing attribute (defaults to ``_<name>``)

        Returns:
            True if the value changed
        """
        attribute = attribute or f"_{name}"
        if values_equal(getattr(self, attribute, None), value):
            return False
        setattr(self, attribute, value)
        self.notify_property_changed(name)
        return True

    def notify_property_changed(self, name: Optional[str] = None) -> None:
        # Copy so handlers may unsubscribe while being notified
        for handler in list(self._property_changed_handlers):
            handler(self, name)
