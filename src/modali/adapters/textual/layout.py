"""Column layout for menu entries."""

from __future__ import annotations

from typing import Iterable, Optional

from modali.keymaps import MenuEntry

DEFAULT_COLUMNS = 3
ELLIPSIS = "..."


def truncate_label(entry: MenuEntry, max_description: Optional[int]) -> str:
    """Shorten the description part of ``entry.label`` to ``max_description``."""

    if max_description is None:
        return entry.label
    prefix = f"{entry.key}: "
    description = entry.label[len(prefix):] if entry.label.startswith(prefix) else entry.label
    if len(description) <= max_description:
        return entry.label
    keep = max(0, max_description - len(ELLIPSIS))
    return f"{prefix}{description[:keep]}{ELLIPSIS}"


def arrange_columns(
    entries: Iterable[MenuEntry],
    *,
    columns: int = DEFAULT_COLUMNS,
    max_description: Optional[int] = None,
) -> list[list[str]]:
    """Deal labels round-robin into ``columns`` lists, row by row."""

    if columns <= 0:
        raise ValueError("columns must be positive")
    grid: list[list[str]] = [[] for _ in range(columns)]
    for index, entry in enumerate(entries):
        grid[index % columns].append(truncate_label(entry, max_description))
    return grid


__all__ = ["DEFAULT_COLUMNS", "ELLIPSIS", "arrange_columns", "truncate_label"]
