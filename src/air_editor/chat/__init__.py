"""AI chat side panel: transcript model, API client, and background bridge."""

from .bridge import ChatBridge, Spawner, UpdateQueue, spawn_thread
from .client import ChatClient, GeminiClient, build_contents, extract_text
from .history import PENDING_CONTENT, ChatHistory, ChatMessage

__all__ = [
    "ChatBridge",
    "ChatClient",
    "ChatHistory",
    "ChatMessage",
    "GeminiClient",
    "PENDING_CONTENT",
    "Spawner",
    "UpdateQueue",
    "build_contents",
    "extract_text",
    "spawn_thread",
]
