"""
Type conversion utilities for property values.

Editors hand back whatever their widget produces (strings from text boxes,
ints from sliders, enum members from pickers). Property models coerce those
values into the declared type of the inspected property before writing them
through. Every conversion here is total: failures are reported as
``(False, None)`` rather than raised.
"""

import ast
import enum
import logging
import re
import uuid
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from functools import reduce
from pathlib import PurePath
from typing import Any, Literal, Tuple, Type, Union, get_args, get_origin

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "yes", "y", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "n", "off", "0"})

# Types that cannot hold None (value types)
_NON_NULLABLE = (bool, int, float, complex, Decimal)

_FLAG_SEPARATORS = re.compile(r"[,|]")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def is_optional(target: Any) -> bool:
    """Check if a type annotation is Optional[T] (Union[T, None])."""
    if get_origin(target) is Union:
        return type(None) in get_args(target)
    return False


def resolve_optional(target: Any) -> Any:
    """Resolve Optional[T] to T. Other unions resolve to their first non-None member."""
    if get_origin(target) is Union:
        non_none = [arg for arg in get_args(target) if arg is not type(None)]
        if non_none:
            return non_none[0]
    return target


def is_enum_type(target: Any) -> bool:
    """Check if type is an Enum."""
    return isinstance(target, type) and issubclass(target, enum.Enum)


def is_flags_enum_type(target: Any) -> bool:
    """Check if type is a bit-flag Enum."""
    return isinstance(target, type) and issubclass(target, enum.Flag)


def is_numeric_type(target: Any) -> bool:
    """Check if type is int/float/Decimal (bool excluded)."""
    return (isinstance(target, type)
            and issubclass(target, (int, float, Decimal))
            and not issubclass(target, bool))


def values_equal(first: Any, second: Any) -> bool:
    """
    Equality used to gate change propagation.

    Values of different types never compare equal (so ``1`` and ``True`` or
    ``75`` and ``"75"`` are distinct edits).
    """
    if first is second:
        return True
    if type(first) is not type(second):
        return False
    try:
        return bool(first == second)
    except (TypeError, ValueError):
        return False


def decamelize(name: str) -> str:
    """
    Convert an identifier to display text.

    Examples:
        >>> decamelize("first_name")
        'First Name'
        >>> decamelize("percentageOfSatisfaction")
        'Percentage Of Satisfaction'
        >>> decamelize("HTTPServer")
        'HTTP Server'
    """
    if not name:
        return name or ""
    words = []
    for chunk in name.replace("_", " ").split():
        words.extend(_CAMEL_BOUNDARY.split(chunk))
    return " ".join(word[:1].upper() + word[1:] for word in words if word)


def enum_text(value: enum.Enum) -> str:
    """Get display text for an enum member, joining flag combinations with ', '."""
    name = value.name
    if isinstance(value, enum.Flag) and (name is None or "|" in name):
        members = [m for m in type(value).__members__.values()
                   if _is_single_bit(m.value) and (value & m) == m]
        return ", ".join(m.name for m in members)
    return name if name is not None else str(value.value)


def _is_single_bit(number: int) -> bool:
    return number > 0 and (number & (number - 1)) == 0


def _convert_bool(value: Any) -> Tuple[bool, Any]:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True, True
        if text in _FALSE_STRINGS:
            return True, False
        return False, None
    if isinstance(value, (int, float, Decimal)):
        return True, bool(value)
    return False, None


def _convert_int(value: Any, target: Type) -> Tuple[bool, Any]:
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, bool):
        return True, target(int(value))
    if isinstance(value, int):
        return True, target(value)
    if isinstance(value, float):
        if value.is_integer():
            return True, target(int(value))
        return False, None
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return True, target(int(value))
        return False, None
    if isinstance(value, str):
        text = value.strip()
        try:
            return True, target(int(text, 0))
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return False, None
        if number.is_integer():
            return True, target(int(number))
    return False, None


def _convert_float(value: Any, target: Type) -> Tuple[bool, Any]:
    if isinstance(value, (bool, int, float, Decimal)):
        return True, target(value)
    if isinstance(value, str):
        try:
            return True, target(value.strip())
        except ValueError:
            return False, None
    return False, None


def _convert_decimal(value: Any) -> Tuple[bool, Any]:
    if isinstance(value, float):
        value = repr(value)
    try:
        return True, Decimal(str(value).strip())
    except InvalidOperation:
        return False, None


def _convert_str(value: Any) -> Tuple[bool, Any]:
    if isinstance(value, enum.Enum):
        return True, enum_text(value)
    if isinstance(value, (bytes, bytearray)):
        return True, value.hex().upper()
    return True, str(value)


def _convert_enum(value: Any, target: Type[enum.Enum]) -> Tuple[bool, Any]:
    if isinstance(value, target):
        return True, value

    flags = issubclass(target, enum.Flag)
    members = target.__members__

    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return _convert_enum(int(text), target)
        names = [part.strip() for part in _FLAG_SEPARATORS.split(text)] if flags else [text]
        names = [name for name in names if name]
        if not names:
            return (True, target(0)) if flags else (False, None)
        found = []
        for name in names:
            member = members.get(name)
            if member is None:
                member = next((m for key, m in members.items() if key.lower() == name.lower()), None)
            if member is None:
                return False, None
            found.append(member)
        if flags:
            return True, reduce(lambda a, b: a | b, found, target(0))
        return True, found[0]

    if isinstance(value, enum.Enum) and not isinstance(value, target):
        return _convert_enum(value.name, target)

    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return True, target(value)
        except ValueError:
            return False, None

    if flags and isinstance(value, (list, tuple, set, frozenset)):
        combined = target(0)
        for item in value:
            ok, member = _convert_enum(item, target)
            if not ok:
                return False, None
            combined |= member
        return True, combined

    return False, None


def _convert_container(value: Any, target: Any) -> Tuple[bool, Any]:
    origin = get_origin(target) or target
    args = get_args(target)

    if isinstance(value, str):
        try:
            value = ast.literal_eval(value)
        except (ValueError, SyntaxError):
            return False, None
        if not isinstance(value, (list, tuple, set, frozenset)):
            value = [value]

    if not isinstance(value, (list, tuple, set, frozenset)):
        return False, None

    items = list(value)
    if args and args[0] is not Ellipsis:
        converted = []
        for item in items:
            ok, item_value = try_change_type(item, args[0])
            if not ok:
                return False, None
            converted.append(item_value)
        items = converted
    return True, origin(items)


def try_change_type(value: Any, target: Any) -> Tuple[bool, Any]:
    """
    Attempt to coerce ``value`` into ``target``.

    ``target`` is a type annotation (plain type, Optional[T], List[T], ...) or
    any object exposing ``try_convert(value) -> (ok, converted)`` such as an
    EnumChoices table.

    Returns:
        (True, converted) on success, (False, None) otherwise.

    Example:
        >>> try_change_type("75", int)
        (True, 75)
        >>> try_change_type("abc", int)
        (False, None)
    """
    if target is None or target is Any or target is object:
        return True, value

    if not isinstance(target, type) and callable(getattr(target, "try_convert", None)):
        return target.try_convert(value)

    if is_optional(target):
        if value is None or (isinstance(value, str) and not value.strip()
                             and resolve_optional(target) is not str):
            return True, None
        return try_change_type(value, resolve_optional(target))

    origin = get_origin(target)
    if origin in (list, tuple, set, frozenset) or target in (list, tuple, set, frozenset):
        return _convert_container(value, target)

    if origin is Literal:
        for allowed in get_args(target):
            ok, converted = try_change_type(value, type(allowed))
            if ok and converted == allowed:
                return True, allowed
        return False, None

    if origin is not None:
        # Other parameterized generics (Dict[str, int], ...) are taken as-is
        return (True, value) if isinstance(value, origin) else (False, None)

    if not isinstance(target, type):
        return False, None

    if value is None:
        if issubclass(target, _NON_NULLABLE) or issubclass(target, enum.Enum):
            return False, None
        return True, None

    if issubclass(target, bool):
        return _convert_bool(value)
    if issubclass(target, enum.Enum):
        return _convert_enum(value, target)
    if isinstance(value, target) and not isinstance(value, bool):
        return True, value
    if issubclass(target, int):
        return _convert_int(value, target)
    if issubclass(target, float):
        return _convert_float(value, target)
    if issubclass(target, Decimal):
        return _convert_decimal(value)
    if issubclass(target, str):
        return _convert_str(value)
    if issubclass(target, PurePath):
        if isinstance(value, (str, PurePath)):
            return True, target(value)
        return False, None
    if issubclass(target, (datetime, date, time)):
        if isinstance(value, str):
            try:
                return True, target.fromisoformat(value.strip())
            except ValueError:
                return False, None
        return False, None
    if issubclass(target, uuid.UUID):
        try:
            return True, uuid.UUID(str(value).strip())
        except ValueError:
            return False, None
    if issubclass(target, (bytes, bytearray)):
        if isinstance(value, str):
            try:
                return True, target(bytes.fromhex(value))
            except ValueError:
                return False, None
        return False, None

    # Last resort: single-argument constructor (type converters on the host type)
    try:
        return True, target(value)
    except (TypeError, ValueError) as e:
        logger.debug(f"Cannot convert {value!r} to {target!r}: {e}")
        return False, None


def change_type(value: Any, target: Any) -> Any:
    """Coerce ``value`` into ``target`` or raise ValueError."""
    ok, converted = try_change_type(value, target)
    if not ok:
        raise ValueError(f"Cannot convert {value!r} to {getattr(target, '__name__', target)}")
    return converted


def to_text(value: Any) -> str:
    """
    Type-aware string form used by text editors.

    Strings are returned as-is, bytes as hexadecimal, enums by name, lists
    and tuples in literal form, everything else through ``str``. None
    becomes "".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.hex().upper()
    if isinstance(value, enum.Enum):
        return enum_text(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        # literal form so the text editor round-trips through ast.literal_eval
        return repr(value)
    return str(value)
