"""Textual front-end: key adapter, column layout, and the launcher app."""

from .controller import TextualUIHooks, TextualWhichKeyAdapter
from .layout import arrange_columns, truncate_label

__all__ = [
    "TextualUIHooks",
    "TextualWhichKeyAdapter",
    "arrange_columns",
    "truncate_label",
]
