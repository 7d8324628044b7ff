"""
Tagged named-value tables.

An EnumChoices table lists ``(name, value)`` pairs plus an ``is_flags``
marker. It describes an ad hoc enumeration (for example the set of values a
string property may take) without creating a new enum type, and it also
wraps real Python ``Enum``/``Flag`` classes so picker editors only ever see
one shape.
"""

import enum
import logging
from dataclasses import dataclass
from functools import reduce
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Type

from pyqt_propgrid.core.conversions import decamelize, try_change_type
from pyqt_propgrid.exceptions import MetadataError

logger = logging.getLogger(__name__)

_SEPARATORS = (",", "|")
_MISSING = object()


def bit_count(bits: int) -> int:
    return bin(bits).count("1")


@dataclass(frozen=True)
class PickerItem:
    """One entry shown by a picker editor."""
    name: str
    display_name: str
    value: Any
    is_checked: bool
    is_zero: bool
    is_multi_valued: bool


class EnumChoices:
    """
    Named-value table with an optional bit-flag shape.

    Values not given explicitly are assigned automatically: 0, 1, 2, 4, ...
    for flags tables and the item index otherwise.

    Example:
        days = EnumChoices(["None", "Monday", "Tuesday", "Wednesday"], is_flags=True)
        days.compose(["Monday", "Wednesday"])   # 5
        days.format(5)                          # 'Monday, Wednesday'

    Raises:
        MetadataError: If names are empty or duplicated, if values do not
            match the names, or if a flags table holds non-integer values.
    """

    def __init__(
        self,
        names: Sequence[str],
        values: Optional[Sequence[Any]] = None,
        is_flags: bool = False,
        display_names: Optional[Mapping[str, str]] = None,
        enum_type: Optional[Type[enum.Enum]] = None,
    ):
        names = list(names)
        if not names:
            raise MetadataError("EnumChoices requires at least one name")
        if len(set(names)) != len(names):
            raise MetadataError(f"EnumChoices names must be unique: {names}")
        if any(not isinstance(name, str) or not name for name in names):
            raise MetadataError(f"EnumChoices names must be non-empty strings: {names}")

        if values is None:
            if is_flags:
                values = [0] + [1 << index for index in range(len(names) - 1)]
            else:
                values = list(range(len(names)))
        values = list(values)
        if len(values) != len(names):
            raise MetadataError(
                f"EnumChoices got {len(names)} names but {len(values)} values"
            )

        if is_flags and enum_type is None:
            for value in values:
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    raise MetadataError(f"Flags values must be non-negative integers, got {value!r}")
        if not is_flags:
            seen = []
            for value in values:
                if value in seen:
                    raise MetadataError(f"Duplicate EnumChoices value {value!r}")
                seen.append(value)

        self._names: Tuple[str, ...] = tuple(names)
        self._values: Tuple[Any, ...] = tuple(values)
        self._is_flags = is_flags
        self._enum_type = enum_type
        self._display_names: Dict[str, str] = dict(display_names or {})
        unknown = set(self._display_names) - set(self._names)
        if unknown:
            raise MetadataError(f"Display names given for unknown choices: {sorted(unknown)}")

    @classmethod
    def from_enum(cls, enum_type: Type[enum.Enum]) -> "EnumChoices":
        """Build a table over the members of an Enum or Flag class."""
        if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
            raise MetadataError(f"{enum_type!r} is not an Enum type")
        if issubclass(enum_type, enum.Flag):
            # named zero and composite members are only listed in __members__
            members = list(enum_type.__members__.items())
        else:
            members = [(member.name, member) for member in enum_type]
        if not members:
            raise MetadataError(f"{enum_type.__name__} has no members")
        return cls(
            [name for name, _ in members],
            [member for _, member in members],
            is_flags=issubclass(enum_type, enum.Flag),
            enum_type=enum_type,
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], is_flags: bool = False) -> "EnumChoices":
        return cls(list(mapping.keys()), list(mapping.values()), is_flags=is_flags)

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def values(self) -> Tuple[Any, ...]:
        return self._values

    @property
    def is_flags(self) -> bool:
        return self._is_flags

    @property
    def enum_type(self) -> Optional[Type[enum.Enum]]:
        return self._enum_type

    @property
    def zero(self) -> Any:
        """The empty combination of a flags table."""
        return self.from_bits(0)

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(zip(self._names, self._values))

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        kind = "flags" if self._is_flags else "choices"
        return f"EnumChoices({kind}: {', '.join(self._names)})"

    def display_name(self, name: str) -> str:
        return self._display_names.get(name) or decamelize(name)

    def get_name(self, value: Any) -> Optional[str]:
        """Name of the entry holding exactly ``value``, or None."""
        if self._is_flags:
            ok, bits = self._to_bits(value)
            if not ok:
                return None
            for name, candidate in self:
                if self.bits_of(candidate) == bits:
                    return name
            return None
        for name, candidate in self:
            if candidate == value and type(candidate) is type(value):
                return name
        return None

    def get_value(self, name: str, default: Any = None) -> Any:
        """Value for ``name`` (case-insensitive fallback)."""
        for candidate, value in self:
            if candidate == name:
                return value
        lowered = name.strip().lower()
        for candidate, value in self:
            if candidate.lower() == lowered:
                return value
        return default

    def decompose(self, value: Any) -> List[str]:
        """
        Names of the single-bit entries set in a flags value.

        An empty combination decomposes to the zero entry name if the table
        has one.
        """
        if not self._is_flags:
            name = self.get_name(value)
            return [name] if name is not None else []
        ok, bits = self._to_bits(value)
        if not ok:
            return []
        if bits == 0:
            return [name for name, candidate in self if self.bits_of(candidate) == 0][:1]
        names, seen = [], 0
        for name, candidate in self:
            candidate_bits = self.bits_of(candidate)
            if bit_count(candidate_bits) == 1 and (bits & candidate_bits) and not (seen & candidate_bits):
                seen |= candidate_bits
                names.append(name)
        return names

    def compose(self, names: Iterable[str]) -> Any:
        """
        Combine named entries into one flags value.

        Raises:
            KeyError: If a name is not in the table
        """
        if not self._is_flags:
            raise ValueError("compose() requires a flags table")
        bits = 0
        for name in names:
            value = self.get_value(name, _MISSING)
            if value is _MISSING:
                raise KeyError(f"Unknown choice {name!r}. Available: {list(self._names)}")
            bits |= self.bits_of(value)
        return self.from_bits(bits)

    def format(self, value: Any) -> str:
        """Display text of a value: its name, or the ', '-joined flag names."""
        name = self.get_name(value)
        if name is not None:
            return name
        if self._is_flags:
            return ", ".join(self.decompose(value))
        return "" if value is None else str(value)

    def try_convert(self, value: Any) -> Tuple[bool, Any]:
        """
        Coerce a value, a name, a separated list of names or a list of
        names into a value of this table.
        """
        if self._enum_type is not None:
            return try_change_type(value, self._enum_type)

        if isinstance(value, str):
            text = value.strip()
            direct = self.get_value(text, _MISSING)
            if direct is not _MISSING:
                return True, direct
            if self._is_flags:
                parts = text
                for separator in _SEPARATORS[1:]:
                    parts = parts.replace(separator, _SEPARATORS[0])
                names = [part.strip() for part in parts.split(_SEPARATORS[0]) if part.strip()]
                if not names:
                    return True, self.zero
                try:
                    return True, self.compose(names)
                except KeyError:
                    pass
                ok, bits = try_change_type(text, int)
                if ok and self._covers(bits):
                    return True, bits
                return False, None

        if self._is_flags:
            if isinstance(value, (list, tuple, set, frozenset)):
                bits = 0
                for item in value:
                    ok, converted = self.try_convert(item)
                    if not ok:
                        return False, None
                    bits |= self.bits_of(converted)
                return True, bits
            ok, bits = self._to_bits(value)
            if ok and self._covers(bits):
                return True, bits
            return False, None

        for candidate in self._values:
            if candidate == value and type(candidate) is type(value):
                return True, candidate
        for candidate in self._values:
            ok, converted = try_change_type(value, type(candidate))
            if ok and converted == candidate:
                return True, candidate
        return False, None

    def items(self, value: Any = None) -> List[PickerItem]:
        """Picker entries with their checked state for ``value``."""
        result = []
        ok, bits = self._to_bits(value) if self._is_flags else (False, 0)
        for name, candidate in self:
            if self._is_flags:
                candidate_bits = self.bits_of(candidate)
                is_zero = candidate_bits == 0
                if not ok:
                    checked = False
                elif is_zero:
                    checked = bits == 0
                else:
                    checked = (bits & candidate_bits) == candidate_bits
                multi = bit_count(candidate_bits) > 1
            else:
                is_zero = False
                multi = False
                checked = candidate == value and type(candidate) is type(value)
            result.append(PickerItem(
                name=name,
                display_name=self.display_name(name),
                value=candidate,
                is_checked=checked,
                is_zero=is_zero,
                is_multi_valued=multi,
            ))
        return result

    def _covers(self, bits: int) -> bool:
        known = reduce(lambda a, b: a | b, (self.bits_of(v) for v in self._values), 0)
        return bits >= 0 and (bits & ~known) == 0

    def bits_of(self, value: Any) -> int:
        if isinstance(value, enum.Enum):
            return int(value.value)
        return int(value)

    def _to_bits(self, value: Any) -> Tuple[bool, int]:
        if isinstance(value, enum.Enum):
            if self._enum_type is not None and not isinstance(value, self._enum_type):
                return False, 0
            return True, int(value.value)
        if isinstance(value, int) and not isinstance(value, bool):
            return True, value
        return False, 0

    def from_bits(self, bits: int) -> Any:
        if self._enum_type is not None:
            return self._enum_type(bits)
        return bits

