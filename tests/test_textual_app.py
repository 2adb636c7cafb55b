from __future__ import annotations

import asyncio
from typing import List

from modali.adapters.textual.app import EMPTY_MENU_TEXT, ModaliApp
from modali.keymaps import BranchAction, LeafAction, build_tree


def make_app(dispatched: List[str]) -> ModaliApp:
    tree = build_tree(
        [
            BranchAction(
                key="g",
                description="git",
                sub_actions=(
                    LeafAction(key="s", description="status", command="git status"),
                ),
            )
        ]
    )
    return ModaliApp(tree, dispatcher=dispatched.append)


def test_typing_a_path_dispatches_and_exits() -> None:
    dispatched: List[str] = []
    app = make_app(dispatched)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            assert app.ui_state.menu_columns[0] == ["g: git"]
            await pilot.press("g", "s")

    asyncio.run(scenario())

    assert dispatched == ["git status"]
    assert app.return_value is not None
    assert app.return_value.status == "dispatched"
    assert app.return_value.command == "git status"


def test_invalid_key_leaves_buffer_and_status_unchanged() -> None:
    dispatched: List[str] = []
    app = make_app(dispatched)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press("g")
            await pilot.pause()
            assert app.session.buffer == "g"
            assert app.ui_state.status_text == "g"
            assert app.ui_state.menu_columns[0] == ["s: status"]

            await pilot.press("x")
            await pilot.pause()
            assert app.session.buffer == "g"
            assert app.ui_state.status_text == "g"
            assert app.ui_state.menu_columns[0] == ["s: status"]
            assert not app.session.finished

            await pilot.press("escape")
            await pilot.pause()

    asyncio.run(scenario())

    assert dispatched == []
    assert app.return_value is not None
    assert app.return_value.status == "cancelled"


def test_backspace_returns_to_parent_menu() -> None:
    app = make_app([])

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press("g")
            await pilot.press("backspace")
            await pilot.pause()
            assert app.session.buffer == ""
            assert app.ui_state.status_text == ""
            assert app.ui_state.menu_columns[0] == ["g: git"]
            await pilot.press("escape")

    asyncio.run(scenario())


def test_empty_tree_shows_placeholder() -> None:
    app = ModaliApp(build_tree([]), dispatcher=lambda command: None)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.ui_state.menu_columns[0] == [EMPTY_MENU_TEXT]
            await pilot.press("escape")

    asyncio.run(scenario())
