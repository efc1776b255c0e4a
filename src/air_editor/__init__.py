"""Modal terminal text editor with an asynchronous AI chat side panel."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "chat",
    "config",
    "editor",
    "errors",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
