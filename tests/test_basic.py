"""
Basic tests for ARR Editor.

Run with: python -m pytest tests/
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from arreditor.data import ArrEntry, ValueType
from arreditor.data.arr_entry import INT32_MAX, INT32_MIN
from arreditor.core import ArrDocument, HistoryManager, AddEntryCommand


def test_entry_creation():
    """Test creating one entry of each type."""
    assert ArrEntry.integer(42) == ArrEntry(ValueType.INTEGER, 42)
    assert ArrEntry.string("abc").value == "abc"
    assert ArrEntry.boolean(1).value is True
    assert ArrEntry.double(3).value == 3.0
    assert isinstance(ArrEntry.double(3).value, float)


def test_integer_and_double_stay_distinct():
    """Test that the tag, not the Python type, decides equality."""
    assert ArrEntry.integer(1) != ArrEntry.double(1.0)
    assert ArrEntry.integer(1) != ArrEntry.boolean(True)


def test_entry_rejects_mismatched_value():
    """Test that the value must match the tag."""
    with pytest.raises(TypeError):
        ArrEntry(ValueType.INTEGER, True)
    with pytest.raises(TypeError):
        ArrEntry(ValueType.DOUBLE, 1)
    with pytest.raises(TypeError):
        ArrEntry(ValueType.STRING, 5)
    with pytest.raises(TypeError):
        ArrEntry(2, "abc")


def test_integer_range():
    """Test int32 bounds on integer entries."""
    assert ArrEntry.integer(INT32_MAX).value == INT32_MAX
    assert ArrEntry.integer(INT32_MIN).value == INT32_MIN
    with pytest.raises(ValueError):
        ArrEntry.integer(INT32_MAX + 1)


def test_double_must_be_finite():
    with pytest.raises(ValueError):
        ArrEntry.double(float('inf'))


def test_entry_dict_round_trip():
    """Test the JSON dictionary form."""
    entry = ArrEntry.double(2.5)
    assert entry.to_dict() == {"type": 4, "value": 2.5}
    assert ArrEntry.from_dict(entry.to_dict()) == entry
    # whole doubles come back from JSON as int
    assert ArrEntry.from_dict({"type": 4, "value": 2}) == ArrEntry.double(2.0)


def test_history_manager_undo_redo():
    """Test undo/redo functionality."""
    document = ArrDocument("test.arr")
    history = HistoryManager(document, signal_hub=None)

    history.execute(AddEntryCommand(ValueType.INTEGER))
    assert document.entries == [ArrEntry.integer(0)]

    # Undo
    assert history.undo()
    assert document.entries == []
    assert not history.undo()

    # Redo
    assert history.redo()
    assert document.entries == [ArrEntry.integer(0)]
    assert not history.redo()


def test_history_descriptions():
    document = ArrDocument("test.arr")
    history = HistoryManager(document, signal_hub=None)
    history.execute(AddEntryCommand(ValueType.STRING))

    assert history.get_undo_description() == "Add entry"
    assert history.get_redo_description() is None
    history.undo()
    assert history.get_redo_description() == "Add entry"


def test_history_max_size():
    """Test that history respects max size limit."""
    document = ArrDocument("test.arr")
    history = HistoryManager(document, signal_hub=None, max_size=5)

    for _ in range(10):
        history.execute(AddEntryCommand(ValueType.BOOLEAN))

    assert history.get_history_size() == 5
    assert len(document.entries) == 10

    undone = 0
    while history.undo():
        undone += 1
    assert undone == 5
    assert len(document.entries) == 5


def test_history_set_max_size_trims():
    document = ArrDocument("test.arr")
    history = HistoryManager(document, signal_hub=None)
    for _ in range(4):
        history.execute(AddEntryCommand(ValueType.INTEGER))

    history.set_max_size(2)
    assert history.get_history_size() == 2
    with pytest.raises(ValueError):
        history.set_max_size(0)


def test_new_command_discards_redo():
    document = ArrDocument("test.arr")
    history = HistoryManager(document, signal_hub=None)
    history.execute(AddEntryCommand(ValueType.INTEGER))
    history.undo()
    history.execute(AddEntryCommand(ValueType.STRING))

    assert not history.can_redo()
    assert document.entries == [ArrEntry.string("")]


if __name__ == "__main__":
    # Run tests when executed directly
    pytest.main([__file__, "-v"])
