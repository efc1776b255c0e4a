"""Textual host for the editor."""

from .controller import EditorAdapter, TextualUIHooks, normalize_key, render_chat

__all__ = ["EditorAdapter", "TextualUIHooks", "normalize_key", "render_chat"]
