"""Turns configured actions into the immutable which-key tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .models import (
    Action,
    Branch,
    BranchAction,
    Leaf,
    LeafAction,
    WhichTreeNode,
)


class ValidationError(ValueError):
    """Raised when a configured binding cannot become part of the tree."""

    def __init__(self, label: str, reason: str):
        super().__init__(f"Invalid binding '{label}': {reason}")
        self.label = label
        self.reason = reason


def build_tree(actions: Iterable[Action]) -> WhichTreeNode:
    """Build the rooted tree for ``actions``, preserving their order.

    Raises ``ValidationError`` if any key is not exactly one character or if
    two siblings share a key.
    """

    return WhichTreeNode(key=None, label="", kind=Branch(_build_children(actions)))


@dataclass(slots=True)
class TreeStats:
    """Lightweight snapshot describing a built tree."""

    branch_count: int
    leaf_count: int
    depth: int


def tree_stats(root: WhichTreeNode) -> TreeStats:
    """Count nodes below ``root``; the root itself is not counted."""

    branches = leaves = depth = 0
    stack = [(child, 1) for child in root.children]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        match node.kind:
            case Branch(children=children):
                branches += 1
                stack.extend((child, level + 1) for child in children)
            case Leaf():
                leaves += 1
    return TreeStats(branch_count=branches, leaf_count=leaves, depth=depth)


def _build_children(actions: Iterable[Action]) -> tuple[WhichTreeNode, ...]:
    nodes = tuple(_build_node(action) for action in actions)
    _reject_duplicate_keys(nodes)
    return nodes


def _build_node(action: Action) -> WhichTreeNode:
    key = _single_char(action.key, action.label)
    match action:
        case BranchAction(sub_actions=sub_actions):
            kind: Branch | Leaf = Branch(_build_children(sub_actions))
        case LeafAction(command=command):
            kind = Leaf(command)
        case _:
            raise TypeError(f"Unsupported action type {type(action).__name__}")
    return WhichTreeNode(key=key, label=action.label, kind=kind)


def _single_char(key: str, label: str) -> str:
    if not isinstance(key, str) or len(key) != 1:
        raise ValidationError(label, f"key {key!r} must be exactly one character")
    return key


def _reject_duplicate_keys(nodes: Sequence[WhichTreeNode]) -> None:
    seen: dict[str, WhichTreeNode] = {}
    for node in nodes:
        assert node.key is not None
        first = seen.setdefault(node.key, node)
        if first is not node:
            raise ValidationError(
                node.label,
                f"key {node.key!r} is already bound by '{first.label}'",
            )


__all__ = ["TreeStats", "ValidationError", "build_tree", "tree_stats"]
