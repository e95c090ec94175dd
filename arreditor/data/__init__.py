"""Data module for ARR Editor."""
from .arr_entry import ArrEntry, ValueType
from .conversion import convert_entry, default_entry, to_display_string, parse_display_string
from .errors import (
    ArrError, ArrFormatError, ArrTruncatedError, UnknownValueTypeError,
    InvalidValueTypeError, ArrEncodeError, ArrTextEncodeError
)
from .file_io import (
    ArrSerializer, ArrDeserializer, serialize_array, deserialize_array, validate_file
)
from .text_codec import decode_text, encode_text

__all__ = [
    'ArrEntry',
    'ValueType',
    'convert_entry',
    'default_entry',
    'to_display_string',
    'parse_display_string',
    'ArrError',
    'ArrFormatError',
    'ArrTruncatedError',
    'UnknownValueTypeError',
    'InvalidValueTypeError',
    'ArrEncodeError',
    'ArrTextEncodeError',
    'ArrSerializer',
    'ArrDeserializer',
    'serialize_array',
    'deserialize_array',
    'validate_file',
    'decode_text',
    'encode_text',
]
