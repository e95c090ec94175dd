"""
History Manager for undo/redo functionality.

Manages a linear stack of Command objects for undo/redo operations and
remembers which point in the stack matches the file on disk.
"""

from typing import Optional, List
import logging

from arreditor.core.command import Command


logger = logging.getLogger(__name__)

# Saved state fell off the bottom of the stack and can't be reached again
_UNREACHABLE = object()


class HistoryManager:
    """Manages undo/redo history using a linear stack of commands."""

    def __init__(self, document=None, signal_hub=None, max_size: int = 100):
        """
        Initialize the history manager.

        Args:
            document: The ArrDocument to manage history for
            signal_hub: Signal hub for notifications
            max_size: Maximum number of commands to keep in history
        """
        if max_size <= 0:
            raise ValueError("Max size must be greater than 0")
        self._document = document
        self._signal_hub = signal_hub
        self._commands: List[Command] = []
        self._current_index = -1  # Points to current command (-1 means no commands)
        self._max_size = max_size
        self._saved_marker = None  # Command that was current at the last save

    def execute(self, command: Command):
        """
        Execute a command and add it to history.

        If the command raises, nothing is recorded.

        Args:
            command: The command to execute
        """
        if self._document is None:
            return

        command.execute(self._document, self._signal_hub)

        # Discard all redo history (everything after current index)
        self._commands = self._commands[:self._current_index + 1]
        self._commands.append(command)

        # Enforce max size by removing oldest commands
        if len(self._commands) > self._max_size:
            self._drop_oldest(1)
        self._current_index = len(self._commands) - 1

        logger.debug("Executed: %s", command.get_description())
        if self._signal_hub:
            self._signal_hub.notify_document_edited(command.get_description())
            self._update_undo_redo_state()

    def undo(self) -> bool:
        """
        Undo the last command.

        Returns:
            True if undo was performed, False if nothing to undo
        """
        if not self.can_undo():
            return False

        command = self._commands[self._current_index]
        command.undo(self._document, self._signal_hub)
        self._current_index -= 1
        logger.debug("Undid: %s", command.get_description())

        if self._signal_hub:
            self._update_undo_redo_state()

        return True

    def redo(self) -> bool:
        """
        Redo the next command.

        Returns:
            True if redo was performed, False if nothing to redo
        """
        if not self.can_redo():
            return False

        self._current_index += 1
        command = self._commands[self._current_index]
        command.execute(self._document, self._signal_hub)
        logger.debug("Redid: %s", command.get_description())

        if self._signal_hub:
            self._update_undo_redo_state()

        return True

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self._current_index >= 0

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self._current_index < len(self._commands) - 1

    def get_undo_description(self) -> Optional[str]:
        """Get description of the command that would be undone."""
        if self.can_undo():
            return self._commands[self._current_index].get_description()
        return None

    def get_redo_description(self) -> Optional[str]:
        """Get description of the command that would be redone."""
        if self.can_redo():
            return self._commands[self._current_index + 1].get_description()
        return None

    def clear(self):
        """Clear all history. The current state counts as saved."""
        self._commands.clear()
        self._current_index = -1
        self._saved_marker = None
        if self._signal_hub:
            self._update_undo_redo_state()

    def get_history_size(self) -> int:
        """Get the current number of commands in history."""
        return len(self._commands)

    def set_max_size(self, max_size: int):
        """
        Set the maximum history size.

        Args:
            max_size: New maximum size (must be > 0)
        """
        if max_size <= 0:
            raise ValueError("Max size must be greater than 0")

        self._max_size = max_size

        if len(self._commands) > max_size:
            self._drop_oldest(len(self._commands) - max_size)
            if self._signal_hub:
                self._update_undo_redo_state()

    def mark_saved(self):
        """Record the current position as matching the file on disk."""
        self._saved_marker = self._current_command()

    def mark_modified(self):
        """Treat the current state as differing from the file on disk."""
        self._saved_marker = _UNREACHABLE

    def is_modified(self) -> bool:
        """Check whether the document differs from the last save."""
        return self._current_command() is not self._saved_marker

    def _current_command(self) -> Optional[Command]:
        if self._current_index >= 0:
            return self._commands[self._current_index]
        return None

    def _drop_oldest(self, count: int):
        dropped = self._commands[:count]
        self._commands = self._commands[count:]
        self._current_index = max(self._current_index - count, -1)
        if self._saved_marker is dropped[-1]:
            # State after the last dropped command is now the bottom of the stack
            self._saved_marker = None
        elif self._saved_marker is None or any(c is self._saved_marker for c in dropped):
            self._saved_marker = _UNREACHABLE

    def _update_undo_redo_state(self):
        """Notify signal hub of undo/redo availability."""
        if self._signal_hub:
            self._signal_hub.notify_undo_redo_state_changed(
                self.can_undo(),
                self.can_redo(),
                self.get_undo_description(),
                self.get_redo_description()
            )
