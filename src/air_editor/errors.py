"""Exception hierarchy for recoverable editor failures.

Every error here is meant to be rendered as a short string on a UI surface
(status bar or chat entry); none of them should escape the UI loop.
"""

from __future__ import annotations


class EditorError(RuntimeError):
    """Base class for all editor errors."""


class BufferIOError(EditorError):
    """Raised when a buffer cannot be loaded from or saved to disk."""

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ReadOnlyBufferError(EditorError):
    """Raised when a mutation is attempted on a read-only buffer."""


class ChatError(EditorError):
    """Base class for failures surfaced inline in the chat history."""


class ChatConfigurationError(ChatError):
    """Raised when the chat client is missing required configuration."""


class ChatTransportError(ChatError):
    """Raised for network failures, bad statuses, and malformed replies."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


__all__ = [
    "EditorError",
    "BufferIOError",
    "ReadOnlyBufferError",
    "ChatError",
    "ChatConfigurationError",
    "ChatTransportError",
]
