"""
Core data model for ARR files.

An ARR file is an ordered list of typed scalar entries:
- ValueType: the on-disk type tag of an entry
- ArrEntry: one tagged value (integer, string, boolean or fixed-point double)

Entries have no key; their position in the list is their only identity.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Union
import math


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
UINT32_MAX = 2 ** 32 - 1

# Doubles are stored as int32 fixed point with 4 decimal digits.
DOUBLE_SCALE = 10000
DOUBLE_MIN = INT32_MIN / DOUBLE_SCALE
DOUBLE_MAX = INT32_MAX / DOUBLE_SCALE


class ValueType(IntEnum):
    """Type tags as written in the file."""
    INTEGER = 1
    STRING = 2
    BOOLEAN = 3
    DOUBLE = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


EntryValue = Union[int, str, bool, float]


@dataclass(frozen=True)
class ArrEntry:
    """
    A single tagged value.

    The tag is explicit so that an integer and a double holding the same
    number stay distinguishable.

    Attributes:
        value_type: Which of the four variants this entry is
        value: Python value matching the tag (int, str, bool or float)
    """
    value_type: ValueType
    value: EntryValue

    def __post_init__(self):
        """Reject values that do not match the tag."""
        if not isinstance(self.value_type, ValueType):
            raise TypeError(f"value_type must be a ValueType, got {self.value_type!r}")

        expected = _PYTHON_TYPES[self.value_type]
        # bool is an int subclass, so integers and doubles must exclude it explicitly
        if not isinstance(self.value, expected) or (
            self.value_type is not ValueType.BOOLEAN and isinstance(self.value, bool)
        ):
            raise TypeError(
                f"{self.value_type.label} entry needs a {expected.__name__} value, "
                f"got {type(self.value).__name__}"
            )

        if self.value_type is ValueType.INTEGER and not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f"Integer entry {self.value} is outside the int32 range")
        if self.value_type is ValueType.DOUBLE and not math.isfinite(self.value):
            raise ValueError(f"Double entry must be finite, got {self.value}")

    @classmethod
    def integer(cls, value: int) -> 'ArrEntry':
        return cls(ValueType.INTEGER, int(value))

    @classmethod
    def string(cls, value: str) -> 'ArrEntry':
        return cls(ValueType.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> 'ArrEntry':
        return cls(ValueType.BOOLEAN, bool(value))

    @classmethod
    def double(cls, value: float) -> 'ArrEntry':
        return cls(ValueType.DOUBLE, float(value))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"type": int(self.value_type), "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ArrEntry':
        """Create from dictionary."""
        value_type = ValueType(data["type"])
        value = data["value"]
        # JSON has a single number type, so whole doubles come back as int
        if value_type is ValueType.DOUBLE and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return cls(value_type, value)


_PYTHON_TYPES = {
    ValueType.INTEGER: int,
    ValueType.STRING: str,
    ValueType.BOOLEAN: bool,
    ValueType.DOUBLE: float,
}
