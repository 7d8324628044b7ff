"""Tests for editor creators, resolution and the picker host."""

import pytest

from sample_objects import AudioSettings, Customer, Days, Mode, ReadOnlyThing


def _surface(obj, name, metadata=None, resolver=None):
    from pyqt_propgrid.grid import PropertyValueSurface
    from pyqt_propgrid.model import ObjectSource

    source = ObjectSource()
    source.bind(obj, metadata)
    surface = PropertyValueSurface(resolver)
    surface.attach(source.get_property(name))
    # keep the source alive as long as the surface
    surface._test_source = source
    return surface


def test_builtin_creators_are_registered():
    """Creators register under their editor ids."""
    from pyqt_propgrid.editors import PasswordEditorCreator, get_editor_creator_class, list_editor_creators

    assert {"text", "boolean", "slider", "password", "enum"} <= set(list_editor_creators())
    assert get_editor_creator_class("password") is PasswordEditorCreator
    with pytest.raises(KeyError):
        get_editor_creator_class("color")


def test_type_rules(qapp):
    """bool gets a check box, ranged numbers a slider, enums a picker, the rest text."""
    from pyqt_propgrid.editors import (
        BooleanEditorCreator, EditorHost, EnumEditorCreator, SliderEditorCreator, TextEditorCreator,
    )
    from pyqt_propgrid.protocols import CheckBoxAdapter, LineEditAdapter
    from pyqt_propgrid.widgets import NoScrollSlider

    settings = AudioSettings()
    enabled = _surface(settings, "enabled")
    assert isinstance(enabled.creator, BooleanEditorCreator)
    assert isinstance(enabled.editor, CheckBoxAdapter)
    assert enabled.editor.get_value() is True

    volume = _surface(settings, "volume")
    assert isinstance(volume.creator, SliderEditorCreator)
    assert isinstance(volume.editor, NoScrollSlider)
    assert volume.editor.get_value() == 50
    assert volume.editor.toolTip() == "Output level"

    name = _surface(settings, "name")
    assert isinstance(name.creator, TextEditorCreator)
    assert isinstance(name.editor, LineEditAdapter)
    assert name.editor.get_value() == "speaker"

    mode = _surface(Customer(), "mode")
    assert isinstance(mode.creator, EnumEditorCreator)
    assert isinstance(mode.editor, EditorHost)
    assert mode.editor.header_text() == "FAST"


def test_numbers_without_range_use_text(qapp):
    """An unbounded number falls through to the text editor."""
    from pyqt_propgrid.editors import SliderEditorCreator, TextEditorCreator

    assert isinstance(_surface(Customer(), "age").creator, SliderEditorCreator)

    class Counter:
        def __init__(self):
            self.count = 3

    surface = _surface(Counter(), "count")
    assert isinstance(surface.creator, TextEditorCreator)
    assert surface.editor.get_value() == "3"


def test_read_only_enum_uses_text(qapp):
    """Read-only enumerations are shown as text."""
    from pyqt_propgrid.editors import TextEditorCreator
    from pyqt_propgrid.model import PropertyOptions, TypeMetadata

    metadata = TypeMetadata(properties={"mode": PropertyOptions(read_only=True)})
    surface = _surface(Customer(), "mode", metadata)
    assert isinstance(surface.creator, TextEditorCreator)
    assert surface.editor.get_value() == "FAST"
    assert surface.editor.isReadOnly()


def test_override_by_id_and_class(qapp):
    """The editor override may name a registered id or an EditorCreator subclass."""
    from pyqt_propgrid.editors import PasswordEditorCreator, TextEditorCreator
    from pyqt_propgrid.model import PropertyOptions, TypeMetadata

    by_id = TypeMetadata(properties={"name": PropertyOptions(editor="password")})
    assert isinstance(_surface(AudioSettings(), "name", by_id).creator, PasswordEditorCreator)

    by_class = TypeMetadata(properties={"volume": PropertyOptions(editor=TextEditorCreator)})
    surface = _surface(AudioSettings(), "volume", by_class)
    assert isinstance(surface.creator, TextEditorCreator)
    assert surface.editor.get_value() == "50"


def test_bad_override_fails(qapp):
    """Unknown ids and non-creator classes raise EditorResolutionError."""
    from pyqt_propgrid.exceptions import EditorResolutionError
    from pyqt_propgrid.model import PropertyOptions, TypeMetadata

    unknown = TypeMetadata(properties={"name": PropertyOptions(editor="color_wheel")})
    with pytest.raises(EditorResolutionError):
        _surface(AudioSettings(), "name", unknown)

    not_a_creator = TypeMetadata(properties={"name": PropertyOptions(editor=dict)})
    with pytest.raises(EditorResolutionError):
        _surface(AudioSettings(), "name", not_a_creator)


def test_declining_creator_falls_back_to_text(qapp):
    """A slider forced onto a property without range declines to the text editor."""
    from pyqt_propgrid.editors import TextEditorCreator
    from pyqt_propgrid.model import PropertyOptions, TypeMetadata

    class Counter:
        def __init__(self):
            self.count = 3

    metadata = TypeMetadata(properties={"count": PropertyOptions(editor="slider")})
    surface = _surface(Counter(), "count", metadata)
    assert isinstance(surface.creator, TextEditorCreator)


def test_creator_as_value(qapp):
    """A property whose value is an EditorCreator builds its own editor."""
    from PyQt6.QtWidgets import QLabel
    from pyqt_propgrid.editors import EditorCreator

    class BadgeEditorCreator(EditorCreator):
        def create_editor(self, surface):
            return QLabel("badge", surface)

    class Holder:
        def __init__(self):
            self.badge = BadgeEditorCreator()

    holder = Holder()
    surface = _surface(holder, "badge")
    assert surface.creator is holder.badge
    assert isinstance(surface.editor, QLabel)


def test_non_widget_editor_is_rejected(qapp):
    """A creator returning something that is not a widget fails resolution."""
    from pyqt_propgrid.editors import EditorCreator, EditorResolver
    from pyqt_propgrid.exceptions import EditorResolutionError

    class BrokenCreator(EditorCreator):
        def create_editor(self, surface):
            return "not a widget"

    with pytest.raises(EditorResolutionError):
        _surface(AudioSettings(), "name", resolver=EditorResolver(chain=[], default=BrokenCreator()))


def test_password_editor_masks_text(qapp):
    """Password editors mask with the default character or a dynamic override."""
    from pyqt_propgrid.model import PropertyOptions, TypeMetadata

    default = TypeMetadata(properties={"name": PropertyOptions(editor="password")})
    editor = _surface(AudioSettings(), "name", default).editor
    assert editor.is_password_mode
    assert editor.password_character == "●"
    assert editor.get_value() == "speaker"

    custom = TypeMetadata(properties={
        "name": PropertyOptions(editor="password", dynamic_options={"password_character": "*"}),
    })
    assert _surface(AudioSettings(), "name", custom).editor.password_character == "*"


def test_password_on_bool_passes_through(qapp):
    """Editors that cannot mask are left unchanged."""
    from pyqt_propgrid.model import PropertyOptions, TypeMetadata
    from pyqt_propgrid.protocols import CheckBoxAdapter

    metadata = TypeMetadata(properties={"enabled": PropertyOptions(editor="password")})
    assert isinstance(_surface(AudioSettings(), "enabled", metadata).editor, CheckBoxAdapter)


def test_editor_host_opens_one_overlay(qapp):
    """Opening twice keeps a single overlay; closing is idempotent too."""
    host = _surface(Customer(), "mode").editor
    opened, closed = [], []
    host.dialog_opened.connect(lambda: opened.append(True))
    host.dialog_closed.connect(lambda: closed.append(True))

    host.open_dialog()
    host.open_dialog()
    assert host.is_open
    assert host.header.isChecked()
    assert host.overlay_state.open_count == 1

    host.close_dialog()
    host.close_dialog()
    assert not host.is_open
    assert (len(opened), len(closed)) == (1, 1)


def test_simple_enum_closes_on_select(qapp):
    """Selecting a simple choice updates the model and closes the overlay."""
    customer = Customer()
    surface = _surface(customer, "mode")
    host = surface.editor

    host.open_dialog()
    host.editor.select_row(1)

    assert surface.model.value is Mode.SAFE
    assert host.header_text() == "SAFE"
    assert not host.is_open
    assert surface.model.commit_or_rollback()
    assert customer.mode is Mode.SAFE


def test_flags_picker_round_trip(qapp):
    """Toggling flag rows keeps the overlay open and round-trips through the model."""
    customer = Customer()
    surface = _surface(customer, "days")
    host = surface.editor
    picker = host.editor
    assert not host.close_on_select

    host.open_dialog()
    picker.set_choice_checked(Days.WEDNESDAY, True)

    assert host.is_open
    assert surface.model.value == Days.MONDAY | Days.WEDNESDAY
    assert surface.model.commit_or_rollback()
    assert customer.days == Days.MONDAY | Days.WEDNESDAY

    choices = surface.model.choices
    assert set(choices.decompose(host.get_value())) == {"MONDAY", "WEDNESDAY"}
    assert picker.checked_names() == ["MONDAY", "WEDNESDAY"]
    assert host.header_text() == "MONDAY, WEDNESDAY"


def test_read_only_host_closes(qapp):
    """Making a host read-only closes its overlay and disables the header."""
    host = _surface(Customer(), "mode").editor
    host.open_dialog()
    host.set_read_only(True)
    assert not host.is_open
    assert not host.header.isEnabled()


def test_update_editor_keeps_widget(qapp):
    """Model changes refresh the existing editor in place."""
    settings = AudioSettings()
    surface = _surface(settings, "volume")
    editor = surface.editor

    settings.volume = 20
    assert surface.editor is editor
    assert editor.get_value() == 20


def test_read_only_thing_gets_text(qapp):
    """A getter-only int is shown read-only in a text editor."""
    from pyqt_propgrid.editors import TextEditorCreator

    surface = _surface(ReadOnlyThing(), "identifier")
    assert isinstance(surface.creator, TextEditorCreator)
    assert surface.editor.isReadOnly()
    assert surface.editor.get_value() == "7"
