"""
File I/O for ARR files.

Handles serialization and deserialization of entry lists to/from the binary
.arr format. All fields are little-endian:

    [COUNT u32] then COUNT times [TYPE u32][PAYLOAD]

    INTEGER (1): i32 value
    STRING  (2): u32 byte length, then Windows-1250 bytes
    BOOLEAN (3): u32, 1 is true and anything else false (see boolean_from_raw)
    DOUBLE  (4): i32 fixed point, value * 10000

There is no header besides the count and no padding.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List

from .arr_entry import ArrEntry, ValueType
from .binary_buffer import BinaryReader, BinaryWriter
from .conversion import (
    BOOLEAN_FALSE, BOOLEAN_TRUE, boolean_from_raw, double_to_fixed, fixed_to_double,
)
from .errors import ArrEncodeError, ArrFormatError, UnknownValueTypeError
from .text_codec import decode_text, encode_text


logger = logging.getLogger(__name__)


def deserialize_array(data: bytes) -> List[ArrEntry]:
    """
    Decode a complete ARR buffer.

    An empty buffer is an empty array (a new, never saved file).

    Raises:
        ArrTruncatedError: If a field runs past the end of the buffer
        UnknownValueTypeError: If an entry has an unknown type tag
    """
    if not data:
        return []

    reader = BinaryReader(data)
    count = reader.read_u32()

    entries: List[ArrEntry] = []
    for _ in range(count):
        tag_offset = reader.offset
        tag = reader.read_u32()

        if tag == ValueType.INTEGER:
            entries.append(ArrEntry.integer(reader.read_i32()))
        elif tag == ValueType.STRING:
            length = reader.read_u32()
            entries.append(ArrEntry.string(decode_text(reader.read_bytes(length))))
        elif tag == ValueType.BOOLEAN:
            entries.append(ArrEntry.boolean(boolean_from_raw(reader.read_u32())))
        elif tag == ValueType.DOUBLE:
            entries.append(ArrEntry.double(fixed_to_double(reader.read_i32())))
        else:
            # Payload width depends on the tag, nothing after this can be located
            raise UnknownValueTypeError(tag, tag_offset)

    if reader.remaining:
        logger.warning("Ignoring %d trailing bytes after %d entries", reader.remaining, count)

    return entries


def serialize_array(entries: Iterable[ArrEntry]) -> bytes:
    """
    Encode entries into an ARR buffer.

    Raises:
        ArrEncodeError: If a value does not fit its field
        ArrTextEncodeError: If a string is not representable in Windows-1250
    """
    entries = list(entries)
    writer = BinaryWriter()
    writer.write_u32(len(entries))

    for index, entry in enumerate(entries):
        value_type, value = entry.value_type, entry.value
        writer.write_u32(value_type)

        if value_type is ValueType.INTEGER:
            writer.write_i32(value)
        elif value_type is ValueType.STRING:
            # Length is the byte count of the encoded form
            encoded = encode_text(value)
            writer.write_u32(len(encoded))
            writer.write_bytes(encoded)
        elif value_type is ValueType.BOOLEAN:
            writer.write_u32(BOOLEAN_TRUE if value else BOOLEAN_FALSE)
        elif value_type is ValueType.DOUBLE:
            writer.write_i32(double_to_fixed(value))
        else:
            raise ArrEncodeError(f"Entry {index} has no known value type: {value_type!r}")

    return writer.getvalue()


class ArrSerializer:
    """Writes entry lists to .arr files."""

    @staticmethod
    def save(entries: Iterable[ArrEntry], filepath: str) -> None:
        """
        Save entries to a .arr file.

        The buffer is fully encoded before the file is opened, so an
        encoding error never leaves a half-written file behind.

        Raises:
            ArrEncodeError: If an entry cannot be encoded
            IOError: If file cannot be written
        """
        data = serialize_array(entries)
        with open(filepath, 'wb') as f:
            f.write(data)
        logger.debug("Wrote %d bytes to %s", len(data), filepath)

    @staticmethod
    def save_json_debug(entries: Iterable[ArrEntry], filepath: str) -> None:
        """
        Save entries as readable JSON for debugging purposes.

        Args:
            entries: Entries to save
            filepath: Path to save the file (typically .json extension)
        """
        payload = [entry.to_dict() for entry in entries]
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)


class ArrDeserializer:
    """Reads entry lists from .arr files."""

    @staticmethod
    def load(filepath: str) -> List[ArrEntry]:
        """
        Load entries from a .arr file.

        Raises:
            IOError: If file cannot be read
            ArrFormatError: If the file content is not a valid array
        """
        with open(filepath, 'rb') as f:
            data = f.read()
        return deserialize_array(data)

    @staticmethod
    def load_json_debug(filepath: str) -> List[ArrEntry]:
        """
        Load entries from the readable JSON format.

        Raises:
            ArrFormatError: If the JSON does not describe a list of entries
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            payload = json.load(f)

        if not isinstance(payload, list):
            raise ArrFormatError("JSON array file must contain a list of entries")
        try:
            return [ArrEntry.from_dict(item) for item in payload]
        except (KeyError, TypeError, ValueError) as e:
            raise ArrFormatError(f"Invalid entry in JSON array file: {e}") from e


def validate_file(filepath: str) -> bool:
    """
    Check that a file decodes as an ARR array.

    Args:
        filepath: Path to check

    Returns:
        True if valid, False otherwise
    """
    path = Path(filepath)
    if not path.is_file():
        return False
    try:
        deserialize_array(path.read_bytes())
    except (OSError, ArrFormatError) as e:
        logger.info("Not a valid ARR file %s: %s", filepath, e)
        return False
    return True
