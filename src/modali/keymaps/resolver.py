"""Resolution of a typed key buffer against the which-key tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .models import Branch, Leaf, MenuEntry, WhichTreeNode


@dataclass(frozen=True, slots=True)
class Menu:
    """The buffer stops at a branch; these are its selectable children."""

    entries: tuple[MenuEntry, ...]

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(entry.key for entry in self.entries)


@dataclass(frozen=True, slots=True)
class Command:
    """The buffer completes a path ending at a leaf."""

    command: str


@dataclass(frozen=True, slots=True)
class NoMatch:
    """The buffer leaves the tree."""


Resolution = Union[Menu, Command, NoMatch]


def resolve(root: WhichTreeNode, buffer: Sequence[str]) -> Resolution:
    """Resolve ``buffer`` from ``root``, one key per tree level.

    ``buffer`` may be a string or any sequence of one-character strings.
    The walk always restarts at ``root``; neither argument is modified.
    """

    assert root.is_root, "resolve() only accepts the tree root"
    assert isinstance(root.kind, Branch), "resolve() only accepts the tree root"

    node = root
    remaining = len(buffer)
    for char in buffer:
        remaining -= 1
        child = _find_child(node, char)
        if child is None:
            return NoMatch()
        match child.kind:
            case Leaf(command=command):
                return Command(command) if remaining == 0 else NoMatch()
            case Branch():
                node = child
    return menu_for(node)


def menu_for(node: WhichTreeNode) -> Menu:
    entries = []
    for child in node.children:
        assert child.key is not None
        entries.append(MenuEntry(key=child.key, label=child.label))
    return Menu(tuple(entries))


def _find_child(node: WhichTreeNode, char: str) -> Optional[WhichTreeNode]:
    for child in node.children:
        if child.key == char:
            return child
    return None


__all__ = [
    "Command",
    "Menu",
    "NoMatch",
    "Resolution",
    "menu_for",
    "resolve",
]
