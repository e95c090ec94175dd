"""Core module for ARR Editor."""
from .signal_hub import ArrSignalHub
from .history_manager import HistoryManager
from .command import (
    Command, AddEntryCommand, ReplaceEntryCommand, SetEntryTypeCommand,
    SetEntryValueCommand, RemoveEntriesCommand, ClearEntriesCommand
)
from .arr_document import ArrDocument

__all__ = [
    'ArrSignalHub', 'HistoryManager', 'ArrDocument', 'Command',
    'AddEntryCommand', 'ReplaceEntryCommand', 'SetEntryTypeCommand',
    'SetEntryValueCommand', 'RemoveEntriesCommand', 'ClearEntriesCommand'
]
