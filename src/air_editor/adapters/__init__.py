"""Host adapters that render editor state and feed it key events."""
