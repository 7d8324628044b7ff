"""Tests for value conversion helpers."""

from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional

import pytest

from sample_objects import Days, Mode


def test_try_change_type_numbers():
    """Strings, floats and decimals convert to int only when integral."""
    from pyqt_propgrid.core.conversions import try_change_type

    assert try_change_type("75", int) == (True, 75)
    assert try_change_type(" 7.0 ", int) == (True, 7)
    assert try_change_type(7.5, int) == (False, None)
    assert try_change_type(Decimal("4"), int) == (True, 4)
    assert try_change_type("abc", int) == (False, None)
    assert try_change_type("2.5", float) == (True, 2.5)
    assert try_change_type("1.10", Decimal) == (True, Decimal("1.10"))


def test_try_change_type_bool_strings():
    """Common boolean spellings are accepted, anything else is rejected."""
    from pyqt_propgrid.core.conversions import try_change_type

    assert try_change_type("yes", bool) == (True, True)
    assert try_change_type("Off", bool) == (True, False)
    assert try_change_type("maybe", bool) == (False, None)


def test_try_change_type_none_and_optional():
    """None only converts to nullable targets; empty text clears Optional numbers."""
    from pyqt_propgrid.core.conversions import try_change_type

    assert try_change_type(None, int) == (False, None)
    assert try_change_type(None, Optional[int]) == (True, None)
    assert try_change_type("", Optional[int]) == (True, None)
    assert try_change_type("", Optional[str]) == (True, "")
    assert try_change_type("12", Optional[int]) == (True, 12)


def test_try_change_type_enums():
    """Enums convert from names (case-insensitive); flags from separated names."""
    from pyqt_propgrid.core.conversions import try_change_type

    assert try_change_type("safe", Mode) == (True, Mode.SAFE)
    assert try_change_type("monday, wednesday", Days) == (True, Days.MONDAY | Days.WEDNESDAY)
    assert try_change_type("MONDAY|TUESDAY", Days) == (True, Days.MONDAY | Days.TUESDAY)
    assert try_change_type(["TUESDAY"], Days) == (True, Days.TUESDAY)
    assert try_change_type("SUNDAY", Days) == (False, None)


def test_try_change_type_containers_and_others():
    """Containers parse literal text; dates use ISO format; Literal picks an allowed value."""
    from pyqt_propgrid.core.conversions import try_change_type

    assert try_change_type("[1, 2]", List[int]) == (True, [1, 2])
    assert try_change_type(("3", "4"), List[int]) == (True, [3, 4])
    assert try_change_type("2024-01-02", date) == (True, date(2024, 1, 2))
    assert try_change_type("b", Literal["a", "b"]) == (True, "b")
    assert try_change_type("c", Literal["a", "b"]) == (False, None)


def test_change_type_raises():
    """change_type reports failures as ValueError."""
    from pyqt_propgrid.core.conversions import change_type

    assert change_type("3", int) == 3
    with pytest.raises(ValueError):
        change_type("three", int)


def test_values_equal_is_type_strict():
    """Values of different types never compare equal."""
    from pyqt_propgrid.core.conversions import values_equal

    assert values_equal(75, 75)
    assert not values_equal(75, "75")
    assert not values_equal(1, True)
    assert values_equal(None, None)


def test_decamelize():
    """Identifiers become display text."""
    from pyqt_propgrid.core.conversions import decamelize

    assert decamelize("first_name") == "First Name"
    assert decamelize("percentageOfSatisfaction") == "Percentage Of Satisfaction"
    assert decamelize("HTTPServer") == "HTTP Server"
    assert decamelize("") == ""


def test_to_text():
    """Type-aware text form used by text editors."""
    from pyqt_propgrid.core.conversions import to_text

    assert to_text(None) == ""
    assert to_text("plain") == "plain"
    assert to_text(b"\x01\xff") == "01FF"
    assert to_text(Mode.FAST) == "FAST"
    assert to_text(Days.MONDAY | Days.WEDNESDAY) == "MONDAY, WEDNESDAY"
    assert to_text([1, 2]) == "[1, 2]"
    assert to_text(3.5) == "3.5"
