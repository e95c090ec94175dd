"""
Exceptions raised by the ARR codec.

Format errors make the whole file unreadable; conversion errors only
affect the single call that raised them.
"""

from typing import Optional


class ArrError(Exception):
    """Base class for all ARR errors."""


class ArrFormatError(ArrError, ValueError):
    """The buffer is not a readable ARR file."""

    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.offset = offset


class ArrTruncatedError(ArrFormatError):
    """A declared field extends past the end of the buffer."""


class UnknownValueTypeError(ArrFormatError):
    """A type tag outside the four known value types."""

    def __init__(self, tag: int, offset: Optional[int] = None):
        super().__init__(f"Unrecognized value type tag {tag} at offset {offset}", offset)
        self.tag = tag


class InvalidValueTypeError(ArrError, ValueError):
    """A conversion was requested to a type that does not exist."""


class ArrEncodeError(ArrError, ValueError):
    """An in-memory value cannot be written in the ARR layout."""


class ArrTextEncodeError(ArrEncodeError):
    """Text contains a character outside the Windows-1250 repertoire."""

    def __init__(self, char: str, position: int):
        super().__init__(
            f"Character {char!r} (U+{ord(char):04X}) at position {position} "
            f"cannot be encoded as Windows-1250"
        )
        self.char = char
        self.position = position
