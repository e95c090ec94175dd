"""
Windows-1250 text codec for ARR string payloads.

The game stores strings in the Central European code page. Python's cp1250
codec rejects the five bytes the code page leaves undefined; here they map
to the C1 control character with the same value, the way the WHATWG
windows-1250 decoder does, so any byte string read from a file can be
written back unchanged.
"""

import codecs

from .errors import ArrTextEncodeError


LEGACY_ENCODING = 'cp1250'


def _build_decoding_table() -> str:
    chars = []
    for byte in range(256):
        try:
            chars.append(bytes([byte]).decode(LEGACY_ENCODING))
        except UnicodeDecodeError:
            chars.append(chr(byte))
    return ''.join(chars)


DECODING_TABLE = _build_decoding_table()
ENCODING_TABLE = codecs.charmap_build(DECODING_TABLE)


def decode_text(data: bytes) -> str:
    """Decode a string payload. Never fails: every byte has a character."""
    return codecs.charmap_decode(data, 'strict', DECODING_TABLE)[0]


def encode_text(text: str) -> bytes:
    """
    Encode text for a string payload.

    Raises:
        ArrTextEncodeError: If a character has no Windows-1250 byte
    """
    try:
        return codecs.charmap_encode(text, 'strict', ENCODING_TABLE)[0]
    except UnicodeEncodeError as e:
        raise ArrTextEncodeError(e.object[e.start], e.start) from e


def is_encodable(text: str) -> bool:
    """Check whether text can be stored in a string entry."""
    try:
        encode_text(text)
    except ArrTextEncodeError:
        return False
    return True
