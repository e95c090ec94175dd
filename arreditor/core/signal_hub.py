"""
Signal Hub for ARR Editor.

Central event dispatcher between the document model and whatever presents it.
Uses Qt signals so views can stay in sync without holding the document.
"""

from PySide6.QtCore import QObject, Signal


class ArrSignalHub(QObject):
    """
    Centralized signal dispatcher for ARR documents.

    A table view connects to entries_changed and redraws from the rows it
    receives; an edit-tracking host connects to document_edited.
    """

    # Document-level signals
    document_loaded = Signal(object)   # Emitted when a document is opened (passes ArrDocument)
    document_saved = Signal(str)       # Emitted after a save (passes filepath)
    document_reverted = Signal()       # Emitted when the document is reloaded from disk
    document_edited = Signal(str)      # Emitted for every undoable edit (passes label)

    # Content signals
    entries_changed = Signal(list)     # Emitted with fresh display rows after any change

    # History signals
    undo_redo_state_changed = Signal(bool, bool, str, str)  # (can_undo, can_redo, undo_desc, redo_desc)

    def __init__(self):
        super().__init__()

    def notify_document_loaded(self, document):
        """Notify that a document has been opened."""
        self.document_loaded.emit(document)

    def notify_document_saved(self, filepath: str):
        self.document_saved.emit(filepath)

    def notify_document_reverted(self):
        self.document_reverted.emit()

    def notify_document_edited(self, label: str):
        """Notify that an undoable edit happened."""
        self.document_edited.emit(label)

    def notify_entries_changed(self, rows: list):
        """Notify that the entry list changed."""
        self.entries_changed.emit(rows)

    def notify_undo_redo_state_changed(self, can_undo: bool, can_redo: bool,
                                       undo_desc: str = None, redo_desc: str = None):
        """Notify that undo/redo state has changed."""
        self.undo_redo_state_changed.emit(can_undo, can_redo,
                                          undo_desc or "", redo_desc or "")

