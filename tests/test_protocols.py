"""Tests for editor ABCs, widget adapters and host capabilities."""

import pytest


def test_line_edit_adapter(qapp):
    """Test LineEditAdapter implements the editor ABCs."""
    from pyqt_propgrid.protocols import (
        LineEditAdapter, ValueGettable, ValueSettable, PasswordCapable, ChangeSignalEmitter,
    )

    widget = LineEditAdapter()
    assert isinstance(widget, ValueGettable)
    assert isinstance(widget, ValueSettable)
    assert isinstance(widget, PasswordCapable)
    assert isinstance(widget, ChangeSignalEmitter)

    widget.set_value("hello")
    assert widget.get_value() == "hello"
    widget.set_value(None)
    assert widget.get_value() == ""


def test_line_edit_password_mode(qapp):
    """Password mode masks with the given character."""
    from pyqt_propgrid.protocols import LineEditAdapter

    widget = LineEditAdapter()
    assert not widget.is_password_mode
    widget.set_password_mode(True)
    widget.set_password_character("*")
    assert widget.is_password_mode
    assert widget.password_character == "*"
    assert str(ord("*")) in widget.styleSheet()


def test_change_signal_connect_and_disconnect(qapp):
    """Connected callbacks receive values until disconnected."""
    from pyqt_propgrid.protocols import LineEditAdapter

    widget = LineEditAdapter()
    received = []
    widget.connect_change_signal(received.append)
    widget.connect_change_signal(received.append)
    widget.setText("a")
    widget.disconnect_change_signal(received.append)
    widget.setText("b")
    assert received == ["a"]


def test_check_box_adapter(qapp):
    """CheckBoxAdapter maps None to False and read-only to disabled."""
    from pyqt_propgrid.protocols import CheckBoxAdapter

    widget = CheckBoxAdapter()
    widget.set_value(True)
    assert widget.get_value() is True
    widget.set_value(None)
    assert widget.get_value() is False
    widget.set_read_only(True)
    assert not widget.isEnabled()


def test_slider_adapter_range_mapping(qapp):
    """Slider positions map onto minimum + position * step."""
    from pyqt_propgrid.protocols import SliderAdapter

    slider = SliderAdapter()
    slider.configure_range(0, 100, 1)
    slider.set_value(75)
    assert slider.get_value() == 75
    assert isinstance(slider.get_value(), int)

    slider.configure_range(0.0, 1.0, 0.25)
    slider.set_value(0.5)
    assert slider.value() == 2
    assert slider.get_value() == pytest.approx(0.5)


def test_slider_adapter_allowed_values(qapp):
    """Allowed values become discrete ticks; other values snap to the nearest."""
    from pyqt_propgrid.protocols import SliderAdapter

    slider = SliderAdapter()
    slider.set_allowed_values([30, 10, 20])
    assert slider.allowed_values == [10, 20, 30]
    slider.set_value(21)
    assert slider.get_value() == 20
    assert slider.maximum() == 2


def test_choice_list_adapter(qapp):
    """ChoiceListAdapter stores values in item data."""
    from pyqt_propgrid.model import EnumChoices
    from pyqt_propgrid.protocols import ChoiceListAdapter
    from sample_objects import Mode

    widget = ChoiceListAdapter()
    widget.set_choices(EnumChoices.from_enum(Mode))
    assert widget.count() == 2

    widget.set_value(Mode.SAFE)
    assert widget.get_value() is Mode.SAFE
    widget.set_value("missing")
    assert widget.get_value() is None

    received = []
    widget.connect_change_signal(received.append)
    widget.select_row(0)
    assert received == [Mode.FAST]


def test_flags_check_list_adapter(qapp):
    """Checking rows combines bits; checking the zero row clears them."""
    from pyqt_propgrid.model import EnumChoices
    from pyqt_propgrid.protocols import FlagsCheckListAdapter
    from sample_objects import Days

    widget = FlagsCheckListAdapter()
    widget.set_choices(EnumChoices.from_enum(Days))
    widget.set_value(Days.MONDAY)
    assert widget.checked_names() == ["MONDAY"]

    received = []
    widget.connect_change_signal(received.append)
    widget.set_choice_checked(Days.THURSDAY, True)
    assert widget.get_value() == Days.MONDAY | Days.THURSDAY
    assert widget.checked_names() == ["MONDAY", "THURSDAY"]

    widget.set_choice_checked(Days.NONE, True)
    assert widget.get_value() == Days.NONE
    assert widget.checked_names() == ["NONE"]
    assert received == [Days.MONDAY | Days.THURSDAY, Days.NONE]

    with pytest.raises(KeyError):
        widget.set_choice_checked("Sunday", True)


def test_flags_check_list_multi_bit_entries(qapp):
    """Multi-bit entries follow their bits after each toggle."""
    from pyqt_propgrid.model import EnumChoices
    from pyqt_propgrid.protocols import FlagsCheckListAdapter

    widget = FlagsCheckListAdapter()
    widget.set_choices(EnumChoices(["None", "Read", "Write", "ReadWrite"], values=[0, 1, 2, 3], is_flags=True))
    widget.set_choice_checked(1, True)
    widget.set_choice_checked(2, True)
    assert widget.get_value() == 3
    assert "Read Write" in widget.checked_names()

    widget.set_choice_checked(1, False)
    assert widget.get_value() == 2
    assert widget.checked_names() == ["Write"]


def test_widget_registry(qapp):
    """Adapters register under their widget ids with their capabilities."""
    from pyqt_propgrid.protocols import (
        LineEditAdapter, PasswordCapable, RangeConfigurable, SliderAdapter,
        get_widget_capabilities, get_widget_class,
    )

    assert get_widget_class("line_edit") is LineEditAdapter
    assert get_widget_class("slider") is SliderAdapter
    assert PasswordCapable in get_widget_capabilities(LineEditAdapter)
    assert RangeConfigurable in get_widget_capabilities(SliderAdapter)
    assert PasswordCapable not in get_widget_capabilities(SliderAdapter)

    with pytest.raises(KeyError):
        get_widget_class("color_wheel")


def test_observable_object_notifies_on_change():
    """_set_property notifies only when the value changes."""
    from sample_objects import AudioSettings

    settings = AudioSettings()
    notifications = []

    def handler(sender, name):
        notifications.append((sender, name))

    settings.add_property_changed_handler(handler)
    settings.add_property_changed_handler(handler)
    assert settings.property_changed_handler_count() == 1

    settings.volume = 50
    settings.volume = 60
    assert notifications == [(settings, "volume")]

    settings.notify_property_changed()
    assert notifications[-1] == (settings, None)

    settings.remove_property_changed_handler(handler)
    settings.volume = 70
    assert len(notifications) == 2
