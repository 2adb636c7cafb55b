"""Loading key bindings from disk.

Bindings live in ``$XDG_CONFIG_HOME/modali/bindings.json`` by default. The
file holds a list of entries; each entry is either a branch (``key``,
``description``, ``sub_actions``) or a leaf (``key``, ``description``,
``command``). Three spellings of the discriminant are accepted::

    {"type": "Branch", "key": "g", ...}        # internally tagged
    {"SubAction": {"key": "g", ...}}           # externally tagged
    {"key": "g", "sub_actions": [...], ...}    # untagged

``Branch``/``SubAction`` and ``Leaf``/``KeyAction`` are synonyms. Files with
a ``.yaml`` or ``.yml`` suffix are read with PyYAML instead of ``json``.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import yaml

from modali.keymaps import (
    Action,
    BranchAction,
    LeafAction,
    WhichTreeNode,
    build_tree,
)
from modali.runtime import telemetry

BRANCH_TAGS = frozenset({"Branch", "SubAction"})
LEAF_TAGS = frozenset({"Leaf", "KeyAction"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class ConfigError(RuntimeError):
    """Raised when the bindings file is missing, malformed, or mis-shaped."""

    def __init__(self, message: str, *, location: str | None = None):
        super().__init__(f"{location}: {message}" if location else message)
        self.location = location


def default_bindings_path() -> Path:
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    elif os.environ.get("HOME"):
        base = Path(os.environ["HOME"]) / ".config"
    else:
        raise ConfigError("Unable to find home: neither XDG_CONFIG_HOME nor HOME is set")
    return base / "modali" / "bindings.json"


def read_bindings_file(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read bindings file: {exc}", location=str(path)) from exc

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML: {exc}", location=str(path)) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON: {exc}", location=str(path)) from exc


def parse_actions(data: Any) -> tuple[Action, ...]:
    """Convert decoded bindings data into ``Action`` objects."""

    if not isinstance(data, list):
        raise ConfigError("bindings must be a list of actions", location="$")
    return _parse_list(data, "")


def _parse_list(items: Iterable[Any], where: str) -> tuple[Action, ...]:
    return tuple(_parse_entry(item, f"{where}[{index}]") for index, item in enumerate(items))


def _parse_entry(entry: Any, where: str) -> Action:
    if not isinstance(entry, Mapping):
        raise ConfigError("action must be an object", location=where)

    tag: Optional[str] = None
    body: Mapping[str, Any] = entry
    if "type" in entry:
        tag = entry["type"]
        if not isinstance(tag, str):
            raise ConfigError("'type' must be a string", location=f"{where}.type")
    elif len(entry) == 1:
        (only_key,) = entry.keys()
        if only_key in BRANCH_TAGS | LEAF_TAGS:
            tag = only_key
            body = entry[only_key]
            if not isinstance(body, Mapping):
                raise ConfigError(f"'{tag}' must wrap an object", location=where)
    if tag is None:
        if "sub_actions" in body:
            tag = "Branch"
        elif "command" in body:
            tag = "Leaf"
        else:
            raise ConfigError(
                "action needs either 'sub_actions' or 'command'", location=where
            )

    key = _string_field(body, "key", where)
    description = _string_field(body, "description", where)
    if tag in BRANCH_TAGS:
        sub_actions = body.get("sub_actions")
        if not isinstance(sub_actions, list):
            raise ConfigError("'sub_actions' must be a list", location=f"{where}.sub_actions")
        return BranchAction(
            key=key,
            description=description,
            sub_actions=_parse_list(sub_actions, f"{where}.sub_actions"),
        )
    if tag in LEAF_TAGS:
        return LeafAction(
            key=key,
            description=description,
            command=_string_field(body, "command", where),
        )
    raise ConfigError(f"unknown action type {tag!r}", location=f"{where}.type")


def _string_field(body: Mapping[str, Any], name: str, where: str) -> str:
    value = body.get(name)
    if not isinstance(value, str):
        message = f"'{name}' must be a string"
        if isinstance(value, (bool, int, float)):
            # YAML turns unquoted 1, 1.5, yes/no into non-strings
            message += f" (got {value!r}; quote it, e.g. {name}: \"{value}\")"
        raise ConfigError(message, location=f"{where}.{name}")
    return value


def dump_actions(actions: Iterable[Action]) -> list[dict[str, Any]]:
    """Inverse of ``parse_actions``, always in the internally tagged form."""

    dumped: list[dict[str, Any]] = []
    for action in actions:
        if isinstance(action, BranchAction):
            dumped.append(
                {
                    "type": "Branch",
                    "key": action.key,
                    "description": action.description,
                    "sub_actions": dump_actions(action.sub_actions),
                }
            )
        else:
            dumped.append(
                {
                    "type": "Leaf",
                    "key": action.key,
                    "description": action.description,
                    "command": action.command,
                }
            )
    return dumped


def load_actions(path: Path | str | None = None) -> tuple[Action, ...]:
    target = Path(path) if path is not None else default_bindings_path()
    with telemetry.span(
        "config::load",
        logger_name="modali.config",
        component="config",
        metadata={"path": str(target)},
    ) as handle:
        actions = parse_actions(read_bindings_file(target))
        handle.add_metadata("actions", len(actions))
        return actions


def load_tree(path: Path | str | None = None) -> WhichTreeNode:
    """Load the bindings file and build its tree."""

    actions = load_actions(path)
    with telemetry.span(
        "config::build_tree",
        logger_name="modali.config",
        component="config",
        metadata={"actions": len(actions)},
    ):
        return build_tree(actions)


__all__ = [
    "ConfigError",
    "default_bindings_path",
    "dump_actions",
    "load_actions",
    "load_tree",
    "parse_actions",
    "read_bindings_file",
]
