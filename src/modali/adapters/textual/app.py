"""Executable Textual launcher hosting a which-key session."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the launcher is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modali.adapters.textual.app"
    ) from exc

from modali.config import (
    ConfigError,
    default_bindings_path,
    dump_actions,
    load_actions,
    load_tree,
)
from modali.dispatch import run_command_detached
from modali.keymaps import Menu, ValidationError, WhichTreeNode, build_tree, tree_stats
from modali.runtime import telemetry
from modali.session import Dispatcher, SessionResult, WhichKeySession

from .controller import CANCEL_KEYS, ERASE_KEYS, TextualUIHooks, TextualWhichKeyAdapter
from .layout import DEFAULT_COLUMNS, arrange_columns

INFO_TEXT = "Esc: Close | Backspace: Up"
EMPTY_MENU_TEXT = "(No key bindings loaded or root is empty)"
MAX_DESCRIPTION = 40


@dataclass
class UIState:
    menu_columns: list[list[str]] = field(default_factory=list)
    status_text: str = ""


class ModaliApp(App[Optional[SessionResult]]):
    """Full-screen which-key menu; exits once a command runs or on Esc."""

    CSS = """
	Screen {
		align: center middle;
		background: transparent;
	}

	#panel {
		width: auto;
		height: auto;
		max-width: 100%;
		border: round $accent;
		padding: 1 2;
	}

	#menu {
		width: auto;
		height: auto;
	}

	.menu-column {
		width: auto;
		margin: 0 4 0 0;
	}

	#status-line {
		height: 1;
		margin: 1 0 0 0;
		text-style: dim;
	}

	#info-line {
		height: 1;
		text-style: dim;
	}
	"""

    BINDINGS = [
        Binding("escape", "cancel", "Close", priority=True),
        Binding("backspace", "erase", "Up", priority=True),
    ]

    def __init__(
        self,
        tree: WhichTreeNode,
        *,
        dispatcher: Dispatcher = run_command_detached,
        css_path: str | Path | None = None,
        columns: int = DEFAULT_COLUMNS,
    ) -> None:
        super().__init__(css_path=css_path)
        self.which_tree = tree
        self.ui_state = UIState()
        self.session = WhichKeySession(tree, dispatcher=dispatcher)
        self.adapter: TextualWhichKeyAdapter | None = None
        self._columns = columns
        self._column_widgets: list[Static] = []
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._column_widgets = [
            Static("", classes="menu-column") for _ in range(self._columns)
        ]
        self._status_widget = Static("", id="status-line")
        with Vertical(id="panel"):
            with Horizontal(id="menu"):
                yield from self._column_widgets
            yield self._status_widget
            yield Static(INFO_TEXT, id="info-line")

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            show_menu=self._show_menu,
            update_status=self._update_status,
            on_exit=self._on_session_exit,
            log=self._log_line,
        )
        self.adapter = TextualWhichKeyAdapter(self.session, hooks)
        telemetry.milestone("menu mounted")

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in CANCEL_KEYS | ERASE_KEYS:
            return
        if self.adapter.handle_textual_key(event.key, character=event.character):
            event.stop()

    def action_cancel(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("escape")

    def action_erase(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("backspace")

    def _show_menu(self, menu: Menu, buffer: str) -> None:
        del buffer
        if not self._column_widgets:
            return
        grid = arrange_columns(
            menu.entries, columns=self._columns, max_description=MAX_DESCRIPTION
        )
        if not menu.entries:
            grid[0] = [EMPTY_MENU_TEXT]
        self.ui_state.menu_columns = grid
        for widget, labels in zip(self._column_widgets, grid):
            widget.update("\n".join(labels))

    def _update_status(self, status: str) -> None:
        self.ui_state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _on_session_exit(self, result: SessionResult) -> None:
        self.exit(result)

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "ui.key", level="debug", data={"line": line}, logger_name="modali.ui"
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="modali", description="Which-key style launcher.")
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=None,
        help="Key bindings file (default: $XDG_CONFIG_HOME/modali/bindings.json)",
    )
    parser.add_argument(
        "-s",
        "--style",
        type=Path,
        default=None,
        help="Textual CSS file applied on top of the built-in style",
    )
    parser.add_argument(
        "-v",
        "--validate",
        action="store_true",
        help="Check the bindings and style files for errors, then exit",
    )
    parser.add_argument(
        "--print",
        dest="print_bindings",
        action="store_true",
        help="With --validate, print the normalized bindings as JSON",
    )
    parser.add_argument(
        "--preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset (default: MODALI_* environment variables)",
    )
    args = parser.parse_args(argv)
    if args.print_bindings and not args.validate:
        parser.error("--print requires --validate")
    return args


def validate(path: Path | None, style: Path | None, *, print_bindings: bool = False) -> int:
    """Load and build the bindings; report problems on stderr."""

    try:
        target = path or default_bindings_path()
        actions = load_actions(target)
        stats = tree_stats(build_tree(actions))
        if style is not None and not style.is_file():
            raise ConfigError("style file not found", location=str(style))
    except (ConfigError, ValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(
        f"{target}: ok ({stats.branch_count} menus, {stats.leaf_count} commands, "
        f"depth {stats.depth})"
    )
    if print_bindings:
        print(json.dumps(dump_actions(actions), indent=2))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset=args.preset)
    telemetry.milestone("arguments parsed")

    if args.validate:
        return validate(args.input, args.style, print_bindings=args.print_bindings)

    try:
        tree = load_tree(args.input)
    except (ConfigError, ValidationError) as exc:
        print(f"modali: {exc}", file=sys.stderr)
        return 1
    telemetry.milestone("bindings loaded")

    app = ModaliApp(tree, css_path=args.style)
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual launch
    sys.exit(main())
