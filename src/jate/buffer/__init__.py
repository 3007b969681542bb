"""Text storage: lines, documents, editor state, and persistence."""

from .document import Cursor, Document
from .line import Line, render_column, render_tabs
from .state import BAR_ROWS, EditorState, StatusMessage
from .store import DiskFileStore, FileStore, FileStoreError

__all__ = [
    "Cursor",
    "Document",
    "Line",
    "render_column",
    "render_tabs",
    "EditorState",
    "StatusMessage",
    "BAR_ROWS",
    "DiskFileStore",
    "FileStore",
    "FileStoreError",
]
