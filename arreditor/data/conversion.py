"""
Value coercion between the four ARR value types.

Used when the user changes the type of an entry and when a value typed in
as text is stored back into an entry. User text is always accepted: text
that does not start with a number becomes 0 or 0.0.
"""

import math
import re
from typing import Callable, Dict, Optional, Union

from .arr_entry import (
    ArrEntry, ValueType,
    DOUBLE_MAX, DOUBLE_MIN, DOUBLE_SCALE, INT32_MAX, INT32_MIN,
)
from .errors import InvalidValueTypeError


TRUE_TEXT = "TRUE"
FALSE_TEXT = "FALSE"

# Booleans are written as 1 or 0
BOOLEAN_TRUE = 1
BOOLEAN_FALSE = 0

# Longest numeric prefix, the way a lenient float parser reads it
_NUMBER_PREFIX = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')


def parse_number(text: str) -> Optional[float]:
    """
    Parse the leading number of `text`.

    Leading whitespace is skipped and trailing garbage is ignored,
    so "12.5kg" gives 12.5. Returns None when there is no number at all.
    """
    match = _NUMBER_PREFIX.match(text.lstrip())
    if not match:
        return None
    return float(match.group(0))


def boolean_from_raw(raw: int) -> bool:
    """
    Truth of a stored boolean field.

    Only BOOLEAN_TRUE reads back as true; any other stored value is false.
    This is stricter than is_truthy_number, which is used when the user
    converts an Integer or Double entry and treats any nonzero as true.
    """
    return raw == BOOLEAN_TRUE


def is_truthy_number(value) -> bool:
    """Truth of a numeric entry converted to Boolean: nonzero is true."""
    return value != 0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def double_to_fixed(value: float) -> int:
    """
    Scale a double to its stored fixed-point integer.

    Rounds to the nearest 1/10000, halves away from zero. The result is not
    range checked; the writer rejects anything outside int32.
    """
    scaled = abs(value) * DOUBLE_SCALE
    fixed = int(math.floor(scaled + 0.5))
    return -fixed if value < 0 else fixed


def fixed_to_double(fixed: int) -> float:
    return fixed / DOUBLE_SCALE


def quantize_double(value: float) -> float:
    """Clamp and round a double to a value the file format can hold exactly."""
    if math.isnan(value):
        return 0.0
    value = _clamp(value, DOUBLE_MIN, DOUBLE_MAX)
    return fixed_to_double(double_to_fixed(value))


def _to_int32(value: float) -> int:
    if math.isnan(value):
        return 0
    return math.trunc(_clamp(value, INT32_MIN, INT32_MAX))


def _to_integer(entry: ArrEntry) -> ArrEntry:
    value_type, value = entry.value_type, entry.value
    if value_type is ValueType.INTEGER:
        return entry
    if value_type is ValueType.STRING:
        number = parse_number(value)
        return ArrEntry.integer(_to_int32(number) if number is not None else 0)
    if value_type is ValueType.BOOLEAN:
        return ArrEntry.integer(1 if value else 0)
    return ArrEntry.integer(_to_int32(value))


def _to_string(entry: ArrEntry) -> ArrEntry:
    if entry.value_type is ValueType.STRING:
        return entry
    return ArrEntry.string(to_display_string(entry))


def _to_boolean(entry: ArrEntry) -> ArrEntry:
    value_type, value = entry.value_type, entry.value
    if value_type is ValueType.BOOLEAN:
        return entry
    if value_type is ValueType.STRING:
        return ArrEntry.boolean(value == "1" or value.strip().upper() == TRUE_TEXT)
    return ArrEntry.boolean(is_truthy_number(value))


def _to_double(entry: ArrEntry) -> ArrEntry:
    value_type, value = entry.value_type, entry.value
    if value_type is ValueType.DOUBLE:
        return entry
    if value_type is ValueType.STRING:
        number = parse_number(value)
        return ArrEntry.double(quantize_double(number) if number is not None else 0.0)
    if value_type is ValueType.BOOLEAN:
        return ArrEntry.double(1.0 if value else 0.0)
    return ArrEntry.double(quantize_double(float(value)))


_CONVERTERS: Dict[ValueType, Callable[[ArrEntry], ArrEntry]] = {
    ValueType.INTEGER: _to_integer,
    ValueType.STRING: _to_string,
    ValueType.BOOLEAN: _to_boolean,
    ValueType.DOUBLE: _to_double,
}


def as_value_type(value_type) -> ValueType:
    """
    Resolve a tag, name or ValueType to a ValueType.

    Raises:
        InvalidValueTypeError: If it names none of the four types
    """
    if isinstance(value_type, ValueType):
        return value_type
    # bool is an int subclass and floats would truncate, so neither is a tag
    is_tag = isinstance(value_type, int) and not isinstance(value_type, bool)
    try:
        if isinstance(value_type, str):
            if value_type.isdigit():
                return ValueType(int(value_type))
            return ValueType[value_type.strip().upper()]
        if is_tag:
            return ValueType(value_type)
    except (KeyError, ValueError):
        raise InvalidValueTypeError(f"Unknown ARR value type: {value_type!r}") from None
    raise InvalidValueTypeError(f"Unknown ARR value type: {value_type!r}")


def convert_entry(source: Union[ArrEntry, str], target_type) -> ArrEntry:
    """
    Convert an entry (or raw user text) to another value type.

    Args:
        source: Entry to convert; a plain str is treated as a string entry
        target_type: ValueType, numeric tag or type name

    Returns:
        New entry of the target type. Converting to the entry's own type
        returns it unchanged.

    Raises:
        InvalidValueTypeError: If target_type is not a known type
    """
    target = as_value_type(target_type)
    if isinstance(source, str):
        source = ArrEntry.string(source)
    elif not isinstance(source, ArrEntry):
        raise TypeError(f"Cannot convert {type(source).__name__} to an ARR entry")
    return _CONVERTERS[target](source)


def default_entry(value_type) -> ArrEntry:
    """Value a freshly added entry of the given type starts with."""
    return convert_entry("", value_type)


def to_display_string(entry: ArrEntry) -> str:
    """Text shown for an entry in the editor table."""
    value_type, value = entry.value_type, entry.value
    if value_type is ValueType.STRING:
        return value
    if value_type is ValueType.BOOLEAN:
        return TRUE_TEXT if value else FALSE_TEXT
    if value_type is ValueType.DOUBLE:
        return f"{value:.4f}"
    return str(value)


def parse_display_string(text: str, value_type) -> ArrEntry:
    """Read edited table text back as an entry of `value_type`."""
    return convert_entry(ArrEntry.string(text), value_type)
