"""Which-key tree: configured actions, tree building, and resolution."""

from .models import (
    Action,
    Branch,
    BranchAction,
    Leaf,
    LeafAction,
    MenuEntry,
    WhichTreeNode,
)
from .builder import TreeStats, ValidationError, build_tree, tree_stats
from .resolver import Command, Menu, NoMatch, Resolution, menu_for, resolve

__all__ = [
    "Action",
    "Branch",
    "BranchAction",
    "Leaf",
    "LeafAction",
    "MenuEntry",
    "WhichTreeNode",
    "TreeStats",
    "ValidationError",
    "build_tree",
    "tree_stats",
    "Command",
    "Menu",
    "NoMatch",
    "Resolution",
    "menu_for",
    "resolve",
]
