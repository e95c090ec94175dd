"""
Command classes for undo/redo functionality.

Implements the Command Pattern for the five edits an ARR document accepts.
Each command keeps whatever it needs to put the entry list back the way it
found it.
"""

from typing import Iterable, List, Optional

from arreditor.data import ArrEntry, ValueType, convert_entry, default_entry, parse_display_string


def _notify(document, signal_hub):
    if signal_hub:
        signal_hub.notify_entries_changed(document.rows)


def _check_index(document, index: int):
    if not 0 <= index < len(document.entries):
        raise IndexError(f"Entry index {index} out of range (0..{len(document.entries) - 1})")


class Command:
    """Base class for undoable commands."""

    def execute(self, document, signal_hub=None):
        """Execute the command."""
        raise NotImplementedError

    def undo(self, document, signal_hub=None):
        """Undo the command."""
        raise NotImplementedError

    def get_description(self) -> str:
        """Get a human-readable description of this command."""
        return "Action"


class AddEntryCommand(Command):
    """Append a new entry holding the default value of its type."""

    def __init__(self, value_type: ValueType):
        self.entry = default_entry(value_type)

    def execute(self, document, signal_hub=None):
        document.entries.append(self.entry)
        _notify(document, signal_hub)

    def undo(self, document, signal_hub=None):
        document.entries.pop()
        _notify(document, signal_hub)

    def get_description(self) -> str:
        return "Add entry"


class ReplaceEntryCommand(Command):
    """Swap the entry at one index for another, remembering the old one."""

    description = "Replace entry"

    def __init__(self, index: int, new_entry: ArrEntry):
        self.index = index
        self.new_entry = new_entry
        self.old_entry: Optional[ArrEntry] = None

    def execute(self, document, signal_hub=None):
        _check_index(document, self.index)
        self.old_entry = document.entries[self.index]
        document.entries[self.index] = self.new_entry
        _notify(document, signal_hub)

    def undo(self, document, signal_hub=None):
        document.entries[self.index] = self.old_entry
        _notify(document, signal_hub)

    def get_description(self) -> str:
        return self.description


class SetEntryTypeCommand(ReplaceEntryCommand):
    """Convert the entry at an index to another value type."""

    description = "Convert entry"

    def __init__(self, index: int, source: ArrEntry, value_type: ValueType):
        super().__init__(index, convert_entry(source, value_type))
        self.value_type = self.new_entry.value_type


class SetEntryValueCommand(ReplaceEntryCommand):
    """Store user-edited text into the entry, keeping its current type."""

    description = "Set entry value"

    def __init__(self, index: int, source: ArrEntry, text: str):
        super().__init__(index, parse_display_string(text, source.value_type))
        self.text = text


class RemoveEntriesCommand(Command):
    """Remove a set of entries by position."""

    def __init__(self, indices: Iterable[int]):
        self.indices: List[int] = sorted(set(indices))
        self.removed: List[ArrEntry] = []

    def execute(self, document, signal_hub=None):
        for index in self.indices:
            _check_index(document, index)
        self.removed = [document.entries[index] for index in self.indices]
        # Highest first so the remaining indices stay valid
        for index in reversed(self.indices):
            del document.entries[index]
        _notify(document, signal_hub)

    def undo(self, document, signal_hub=None):
        # Lowest first: each slot is back in place before a later one is restored
        for index, entry in zip(self.indices, self.removed):
            document.entries.insert(index, entry)
        _notify(document, signal_hub)

    def get_description(self) -> str:
        if len(self.indices) == 1:
            return "Remove entry"
        return f"Remove {len(self.indices)} entries"


class ClearEntriesCommand(Command):
    """Remove every entry."""

    def __init__(self):
        self.removed: List[ArrEntry] = []

    def execute(self, document, signal_hub=None):
        self.removed = list(document.entries)
        document.entries.clear()
        _notify(document, signal_hub)

    def undo(self, document, signal_hub=None):
        document.entries[:] = self.removed
        _notify(document, signal_hub)

    def get_description(self) -> str:
        return "Clear entries"
