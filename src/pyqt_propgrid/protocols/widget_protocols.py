"""
Editor capability contracts for the property grid.

The grid never inspects concrete editor widgets. Every editor advertises
what it can do by inheriting from the ABCs below, and the binding surface
checks capabilities with ``isinstance`` before using them.

Design Philosophy:
- Explicit inheritance over duck typing
- Fail-loud over fail-silent
- Multiple inheritance for composable capabilities
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class ValueGettable(ABC):
    """
    ABC for editors that can return a value.

    Every editor that feeds user input back into a property model must
    implement this.
    """

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the current value from the editor.

        Returns:
            The editor's current value. None if no value set.
        """
        pass


class ValueSettable(ABC):
    """
    ABC for editors that can accept a value.

    The binding surface pushes the model value through this on attach and
    on every refresh.
    """

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Set the editor's value.

        Args:
            value: The value to set. None clears the editor.
        """
        pass


class PlaceholderCapable(ABC):
    """ABC for editors that can display placeholder text (e.g. a property's description)."""

    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        pass


class RangeConfigurable(ABC):
    """
    ABC for editors that support numeric range configuration.

    Typically implemented by sliders and spinboxes.
    """

    @abstractmethod
    def configure_range(self, minimum: float, maximum: float, step: float = 1) -> None:
        """
        Configure the valid range for numeric input.

        Args:
            minimum: Minimum allowed value
            maximum: Maximum allowed value
            step: Increment between two consecutive values
        """
        pass


class ChoiceSelectable(ABC):
    """
    ABC for editors that pick from a table of named values.

    Implemented by combo boxes and flag lists fed by an EnumChoices table.
    """

    @abstractmethod
    def set_choices(self, choices: Any) -> None:
        """
        Configure the editor with the available choices.

        Args:
            choices: EnumChoices table to populate from
        """
        pass


class ReadOnlyCapable(ABC):
    """ABC for editors that can refuse user input while still showing a value."""

    @abstractmethod
    def set_read_only(self, read_only: bool) -> None:
        pass


class PasswordCapable(ABC):
    """
    ABC for editors that can mask their content.

    Implemented by text editors; the password editor strategy only applies
    masking when the created editor has this capability.
    """

    @abstractmethod
    def set_password_mode(self, enabled: bool) -> None:
        """Enable or disable masking of the editor content."""
        pass

    @abstractmethod
    def set_password_character(self, character: str) -> None:
        """
        Set the character displayed instead of each masked character.

        Args:
            character: Single display character (e.g. '●')
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for editors that emit change signals.

    Provides an explicit contract for signal connection, eliminating duck
    typing of signal names (textChanged vs valueChanged vs toggled).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Connect callback to the editor's change signal.

        The callback is invoked whenever the user changes the editor value,
        receiving the new value as its argument.

        Args:
            callback: Function to call when the editor value changes.
                     Signature: callback(new_value: Any) -> None
        """
        pass

    @abstractmethod
    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Disconnect callback from the editor's change signal.

        Args:
            callback: The callback function to disconnect
        """
        pass
