"""
Document model for an open .arr file.

Owns the decoded entry list, applies the five edit commands through the
history manager, and handles save, revert and hot-exit backups.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional

from arreditor.common.editor_config import EditorConfig
from arreditor.core.command import (
    Command, AddEntryCommand, SetEntryTypeCommand, SetEntryValueCommand,
    RemoveEntriesCommand, ClearEntriesCommand
)
from arreditor.core.history_manager import HistoryManager
from arreditor.data import (
    ArrEntry, ArrSerializer, ArrDeserializer, parse_display_string, to_display_string
)
from arreditor.data.conversion import as_value_type


logger = logging.getLogger(__name__)


class ArrDocument:
    """
    An editable ARR array.

    `entries` is the live list the commands mutate. Views should use `rows`
    (or the entries_changed signal) rather than holding on to it.
    """

    def __init__(self, path: str, entries: Optional[Iterable[ArrEntry]] = None,
                 untitled: bool = False, signal_hub=None, config: Optional[EditorConfig] = None):
        self.path = path
        self.is_untitled = untitled
        self.entries: List[ArrEntry] = list(entries or [])
        self.config = config or EditorConfig()
        self._signal_hub = signal_hub
        self._history = HistoryManager(self, signal_hub=signal_hub,
                                       max_size=self.config.history_size)

    @classmethod
    def open(cls, path: str, backup_id: Optional[str] = None, signal_hub=None,
             config: Optional[EditorConfig] = None) -> 'ArrDocument':
        """
        Open a document from disk.

        When a backup id is given the entries come from the backup, but the
        document still belongs to `path` and starts out dirty.

        Raises:
            ArrFormatError: If the file cannot be read as an array
        """
        source = backup_id if backup_id else path
        entries = ArrDeserializer.load(source)
        document = cls(path, entries, signal_hub=signal_hub, config=config)
        if backup_id:
            document._history.mark_modified()
        logger.info("Opened %s (%d entries)", source, len(entries))
        if signal_hub:
            signal_hub.notify_document_loaded(document)
        return document

    @classmethod
    def untitled(cls, path: str, signal_hub=None,
                 config: Optional[EditorConfig] = None) -> 'ArrDocument':
        """Start a new, empty document that will be saved to `path`."""
        document = cls(path, untitled=True, signal_hub=signal_hub, config=config)
        if signal_hub:
            signal_hub.notify_document_loaded(document)
        return document

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def rows(self) -> List[Dict[str, str]]:
        """Display rows: the type tag and the value, both as text."""
        return [
            {"type": str(int(entry.value_type)), "value": to_display_string(entry)}
            for entry in self.entries
        ]

    @property
    def is_dirty(self) -> bool:
        return self._history.is_modified()

    # Edits

    def add_entry(self, value_type) -> Command:
        """Append an entry of the given type with its default value."""
        command = AddEntryCommand(as_value_type(value_type))
        self._history.execute(command)
        return command

    def set_type(self, index: int, value_type) -> Optional[Command]:
        """Convert an entry to another type. Same type is a no-op."""
        value_type = as_value_type(value_type)
        current = self._entry_at(index)
        if current.value_type is value_type:
            return None
        command = SetEntryTypeCommand(index, current, value_type)
        self._history.execute(command)
        return command

    def set_value(self, index: int, text: str) -> Optional[Command]:
        """
        Set an entry from edited text, parsed as the entry's current type.

        Text that parses to the value already stored records no history;
        the rows are still re-sent so the view shows the normalized text.
        """
        current = self._entry_at(index)
        if parse_display_string(text, current.value_type) == current:
            if to_display_string(current) != text:
                self._notify_entries_changed()
            return None
        command = SetEntryValueCommand(index, current, text)
        self._history.execute(command)
        return command

    def remove_entries(self, indices: Iterable[int]) -> Optional[Command]:
        """Remove the entries at the given positions."""
        indices = list(indices)
        if not indices:
            return None
        for index in indices:
            self._entry_at(index)
        command = RemoveEntriesCommand(indices)
        self._history.execute(command)
        return command

    def clear_entries(self) -> Command:
        command = ClearEntriesCommand()
        self._history.execute(command)
        return command

    def undo(self) -> bool:
        return self._history.undo()

    def redo(self) -> bool:
        return self._history.redo()

    # Persistence

    def save(self):
        """Write the document to its own path."""
        self.save_as(self.path)

    def save_as(self, target_path: str):
        """
        Write the entries to `target_path`.

        Saving to another path makes that the document's path.
        """
        ArrSerializer.save(self.entries, target_path)
        self.path = target_path
        self.is_untitled = False
        self._history.mark_saved()
        logger.info("Saved %d entries to %s", len(self.entries), target_path)
        if self._signal_hub:
            self._signal_hub.notify_document_saved(target_path)

    def revert(self):
        """Reload the entries from disk and drop the edit history."""
        if self.is_untitled:
            entries = []
        else:
            entries = ArrDeserializer.load(self.path)
        self.entries[:] = entries
        self._history.clear()
        if self._signal_hub:
            self._signal_hub.notify_document_reverted()
        self._notify_entries_changed()

    def backup(self, destination: Optional[str] = None) -> str:
        """
        Write a hot-exit backup and return its id.

        The backup uses the same format as a save but leaves the document
        dirty and its path unchanged.
        """
        destination = destination or self.config.backup_path_for(self.path)
        directory = os.path.dirname(destination)
        if directory:
            os.makedirs(directory, exist_ok=True)
        ArrSerializer.save(self.entries, destination)
        logger.debug("Backed up %s to %s", self.path, destination)
        return destination

    @staticmethod
    def delete_backup(backup_id: str):
        try:
            os.remove(backup_id)
        except FileNotFoundError:
            logger.debug("Backup %s already gone", backup_id)

    def _entry_at(self, index: int) -> ArrEntry:
        if not 0 <= index < len(self.entries):
            raise IndexError(f"Entry index {index} out of range (0..{len(self.entries) - 1})")
        return self.entries[index]

    def _notify_entries_changed(self):
        if self._signal_hub:
            self._signal_hub.notify_entries_changed(self.rows)
