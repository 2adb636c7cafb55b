"""Which-key style modal launcher."""

__all__ = [
    "adapters",
    "config",
    "dispatch",
    "keymaps",
    "runtime",
    "session",
]

__version__ = "0.1.0"
