"""Buffer, cursor, viewport, and undo/redo data structures."""

from .buffer import Buffer, Transaction, is_word_char
from .document import UNNAMED, BufferDocument
from .registers import RegisterBank, RegisterValue
from .state import BufferState, Cursor
from .sync import BufferMirror, BufferSync
from .undo import UndoHistory
from .validation import BufferValidationError, clamp_cursor, ensure_cursor
from .viewport import Viewport, expand_tabs, render_column

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "BufferSync",
    "BufferValidationError",
    "Cursor",
    "RegisterBank",
    "RegisterValue",
    "Transaction",
    "UNNAMED",
    "UndoHistory",
    "Viewport",
    "clamp_cursor",
    "ensure_cursor",
    "expand_tabs",
    "is_word_char",
    "render_column",
]
