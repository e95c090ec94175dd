"""
Tests for the ARR binary codec and text codec.
"""

import pytest
import struct
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from arreditor.data import (
    ArrEntry, ArrSerializer, ArrDeserializer, ArrTruncatedError, UnknownValueTypeError,
    ArrFormatError, ArrEncodeError, ArrTextEncodeError,
    serialize_array, deserialize_array, validate_file, decode_text, encode_text
)
from arreditor.data.arr_entry import INT32_MAX, INT32_MIN, DOUBLE_MAX, DOUBLE_MIN
from arreditor.data.binary_buffer import BinaryReader, BinaryWriter
from arreditor.data.text_codec import is_encodable


def u32(value):
    return struct.pack('<I', value)


def i32(value):
    return struct.pack('<i', value)


def test_empty_buffer_is_empty_array():
    assert deserialize_array(b'') == []


def test_empty_array_encodes_to_zero_count():
    assert serialize_array([]) == b'\x00\x00\x00\x00'
    assert deserialize_array(b'\x00\x00\x00\x00') == []


def test_integer_and_string_scenario():
    """Count 2: Integer 42, then the 3-byte string "ABC"."""
    data = u32(2) + u32(1) + i32(42) + u32(2) + u32(3) + b'ABC'

    entries = deserialize_array(data)
    assert entries == [ArrEntry.integer(42), ArrEntry.string("ABC")]
    assert serialize_array(entries) == data


def test_field_layout():
    data = serialize_array([
        ArrEntry.integer(-1),
        ArrEntry.boolean(True),
        ArrEntry.boolean(False),
        ArrEntry.double(-1.5),
    ])
    assert data == (
        u32(4)
        + u32(1) + b'\xff\xff\xff\xff'
        + u32(3) + u32(1)
        + u32(3) + u32(0)
        + u32(4) + i32(-15000)
    )


def test_round_trip_all_types():
    entries = [
        ArrEntry.integer(0),
        ArrEntry.integer(INT32_MAX),
        ArrEntry.integer(INT32_MIN),
        ArrEntry.string(""),
        ArrEntry.string("Zażółć gęślą jaźń"),
        ArrEntry.boolean(True),
        ArrEntry.boolean(False),
        ArrEntry.double(1.2345),
        ArrEntry.double(-0.0001),
        ArrEntry.double(DOUBLE_MAX),
        ArrEntry.double(DOUBLE_MIN),
    ]
    assert deserialize_array(serialize_array(entries)) == entries


def test_double_rounds_to_nearest():
    """Doubles are rounded to the nearest 1/10000, halves away from zero."""
    data = serialize_array([ArrEntry.double(1.23456), ArrEntry.double(-1.23456)])
    assert deserialize_array(data) == [ArrEntry.double(1.2346), ArrEntry.double(-1.2346)]


def test_double_out_of_range_fails_to_encode():
    with pytest.raises(ArrEncodeError):
        serialize_array([ArrEntry.double(DOUBLE_MAX + 1)])


def test_boolean_only_one_is_true():
    data = u32(3) + u32(3) + u32(1) + u32(3) + u32(0) + u32(3) + u32(2)
    assert deserialize_array(data) == [
        ArrEntry.boolean(True), ArrEntry.boolean(False), ArrEntry.boolean(False)
    ]


def test_string_length_is_byte_count():
    text = "Łódź"
    data = serialize_array([ArrEntry.string(text)])
    encoded = encode_text(text)
    assert data[8:12] == u32(len(encoded))
    assert data[12:] == encoded


def test_unknown_type_tag():
    data = u32(2) + u32(1) + i32(7) + u32(5) + i32(0)
    with pytest.raises(UnknownValueTypeError) as exc_info:
        deserialize_array(data)
    assert exc_info.value.tag == 5
    assert exc_info.value.offset == 12


@pytest.mark.parametrize("data", [
    b'\x01\x00',                                # count
    u32(1),                                     # type tag
    u32(1) + u32(1) + b'\x00\x00',              # integer payload
    u32(1) + u32(2),                            # string length
    u32(1) + u32(2) + u32(10) + b'short',       # string bytes
    u32(2) + u32(3) + u32(1),                   # second entry missing
])
def test_truncated_buffer(data):
    with pytest.raises(ArrTruncatedError):
        deserialize_array(data)


def test_format_errors_are_value_errors():
    with pytest.raises(ValueError):
        deserialize_array(u32(1) + u32(9))
    assert issubclass(ArrTruncatedError, ArrFormatError)


def test_trailing_bytes_are_ignored():
    data = u32(1) + u32(1) + i32(3) + b'\x00\x00'
    assert deserialize_array(data) == [ArrEntry.integer(3)]


def test_reader_bounds_and_offset():
    reader = BinaryReader(u32(7) + i32(-2) + b'xy')
    assert reader.read_u32() == 7
    assert reader.read_i32() == -2
    assert reader.offset == 8
    assert reader.read_bytes(2) == b'xy'
    assert reader.remaining == 0
    with pytest.raises(ArrTruncatedError):
        reader.read_bytes(1)


def test_writer_grows_and_rejects_out_of_range():
    writer = BinaryWriter()
    writer.write_u32(1)
    writer.write_i32(-1)
    writer.write_bytes(b'abc')
    assert writer.offset == 11
    assert writer.getvalue() == u32(1) + i32(-1) + b'abc'
    with pytest.raises(ArrEncodeError):
        writer.write_u32(-1)
    with pytest.raises(ArrEncodeError):
        writer.write_i32(INT32_MAX + 1)


def test_text_codec_central_european():
    assert encode_text("€Šľ") == b'\x80\x8a\xbe'
    assert decode_text(b'\x80\x8a\xbe') == "€Šľ"


def test_text_codec_every_byte_round_trips():
    data = bytes(range(256))
    text = decode_text(data)
    assert len(text) == 256
    assert encode_text(text) == data


def test_text_codec_undefined_bytes_map_to_c1():
    assert decode_text(b'\x81\x83\x88\x90\x98') == '\x81\x83\x88\x90\x98'


def test_text_codec_rejects_unmappable():
    with pytest.raises(ArrTextEncodeError) as exc_info:
        encode_text("ab日")
    assert exc_info.value.position == 2
    assert exc_info.value.char == "日"
    assert not is_encodable("日本")
    assert is_encodable("Brno, Košice")


def test_unmappable_string_fails_to_serialize():
    with pytest.raises(ArrEncodeError):
        serialize_array([ArrEntry.string("😀")])


def test_save_and_load(tmp_path):
    path = tmp_path / "items.arr"
    entries = [ArrEntry.integer(5), ArrEntry.string("klíč"), ArrEntry.double(0.5)]

    ArrSerializer.save(entries, str(path))
    assert ArrDeserializer.load(str(path)) == entries
    assert validate_file(str(path))


def test_failed_save_leaves_no_file(tmp_path):
    path = tmp_path / "bad.arr"
    with pytest.raises(ArrTextEncodeError):
        ArrSerializer.save([ArrEntry.string("日")], str(path))
    assert not path.exists()


def test_json_debug_round_trip(tmp_path):
    path = tmp_path / "items.json"
    entries = [ArrEntry.boolean(True), ArrEntry.double(3.0), ArrEntry.string("x")]

    ArrSerializer.save_json_debug(entries, str(path))
    assert ArrDeserializer.load_json_debug(str(path)) == entries


def test_json_debug_rejects_bad_entries(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('[{"type": 9, "value": 1}]', encoding='utf-8')
    with pytest.raises(ArrFormatError):
        ArrDeserializer.load_json_debug(str(path))

    path.write_text('{"type": 1}', encoding='utf-8')
    with pytest.raises(ArrFormatError):
        ArrDeserializer.load_json_debug(str(path))


def test_validate_file(tmp_path):
    bad = tmp_path / "bad.arr"
    bad.write_bytes(u32(1) + u32(42))
    assert not validate_file(str(bad))
    assert not validate_file(str(tmp_path / "missing.arr"))

    empty = tmp_path / "empty.arr"
    empty.write_bytes(b'')
    assert validate_file(str(empty))
