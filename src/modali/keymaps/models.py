"""Dataclasses describing configured actions and the built which-key tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class BranchAction:
    """Configured binding that opens a nested menu."""

    key: str
    description: str
    sub_actions: tuple["Action", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sub_actions", tuple(self.sub_actions))

    @property
    def label(self) -> str:
        return format_label(self.key, self.description)


@dataclass(frozen=True, slots=True)
class LeafAction:
    """Configured binding that runs a shell command."""

    key: str
    description: str
    command: str

    @property
    def label(self) -> str:
        return format_label(self.key, self.description)


Action = Union[BranchAction, LeafAction]


@dataclass(frozen=True, slots=True)
class Branch:
    """Node kind holding an ordered menu of children."""

    children: tuple["WhichTreeNode", ...] = ()


@dataclass(frozen=True, slots=True)
class Leaf:
    """Node kind holding the command a completed key path runs."""

    command: str


NodeKind = Union[Branch, Leaf]


@dataclass(frozen=True, slots=True)
class WhichTreeNode:
    """Immutable node of the which-key tree.

    ``key`` is ``None`` only for the synthetic root, whose ``label`` is empty
    and whose ``kind`` is always a ``Branch``.
    """

    key: Optional[str]
    label: str
    kind: NodeKind

    @property
    def is_root(self) -> bool:
        return self.key is None

    @property
    def children(self) -> tuple["WhichTreeNode", ...]:
        match self.kind:
            case Branch(children=children):
                return children
            case Leaf():
                return ()


@dataclass(frozen=True, slots=True)
class MenuEntry:
    """One selectable row handed to the renderer."""

    key: str
    label: str


def format_label(key: str, description: str) -> str:
    return f"{key}: {description}"


__all__ = [
    "Action",
    "Branch",
    "BranchAction",
    "Leaf",
    "LeafAction",
    "MenuEntry",
    "NodeKind",
    "WhichTreeNode",
    "format_label",
]
