from __future__ import annotations

import pytest

from modali.keymaps import BranchAction, LeafAction, Menu, MenuEntry, build_tree
from modali.session import SessionClosedError, WhichKeySession


def make_session(**kwargs: object) -> tuple[WhichKeySession, list[str]]:
    dispatched: list[str] = []
    root = build_tree(
        [
            BranchAction(
                key="g",
                description="git",
                sub_actions=(
                    LeafAction(key="s", description="status", command="git status"),
                    BranchAction(
                        key="l",
                        description="log",
                        sub_actions=(
                            LeafAction(key="o", description="oneline", command="git log --oneline"),
                        ),
                    ),
                ),
            ),
            LeafAction(key="t", description="terminal", command="foot"),
        ]
    )
    session = WhichKeySession(root, dispatcher=dispatched.append, **kwargs)
    return session, dispatched


def test_session_starts_with_top_level_menu() -> None:
    session, _ = make_session()

    assert session.buffer == ""
    assert session.menu().keys == ("g", "t")


def test_press_branch_key_extends_buffer() -> None:
    session, dispatched = make_session()

    result = session.press("g")

    assert result.status == "menu"
    assert result.menu is not None
    assert result.menu.keys == ("s", "l")
    assert session.buffer == "g"
    assert dispatched == []


def test_invalid_key_is_reverted() -> None:
    session, dispatched = make_session()
    session.press("g")

    result = session.press("x")

    assert result.status == "noop"
    assert session.buffer == "g"
    assert result.menu == Menu((MenuEntry("s", "s: status"), MenuEntry("l", "l: log")))
    assert dispatched == []


def test_command_is_dispatched_and_session_finishes() -> None:
    session, dispatched = make_session()
    session.press("g")

    result = session.press("s")

    assert result.status == "dispatched"
    assert result.command == "git status"
    assert result.menu is None
    assert dispatched == ["git status"]
    assert session.finished
    assert session.buffer == ""


def test_keys_after_finish_raise() -> None:
    session, _ = make_session()
    session.press("t")

    with pytest.raises(SessionClosedError):
        session.press("g")
    with pytest.raises(SessionClosedError):
        session.erase()


def test_session_can_stay_open_after_dispatch() -> None:
    session, dispatched = make_session(close_on_dispatch=False)

    result = session.press("t")

    assert dispatched == ["foot"]
    assert not session.finished
    assert result.menu is not None
    assert result.menu.keys == ("g", "t")
    assert session.press("g").status == "menu"


def test_erase_steps_back_one_level() -> None:
    session, _ = make_session()
    session.press("g")
    session.press("l")

    result = session.erase()

    assert session.buffer == "g"
    assert result.menu is not None
    assert result.menu.keys == ("s", "l")


def test_erase_on_empty_buffer_is_safe() -> None:
    session, _ = make_session()

    result = session.erase()

    assert session.buffer == ""
    assert result.status == "menu"
    assert result.menu is not None
    assert result.menu.keys == ("g", "t")


def test_reset_clears_buffer() -> None:
    session, _ = make_session()
    session.press("g")
    session.press("l")

    result = session.reset()

    assert session.buffer == ""
    assert result.menu is not None
    assert result.menu.keys == ("g", "t")


def test_cancel_finishes_without_dispatch() -> None:
    session, dispatched = make_session()
    session.press("g")

    result = session.cancel()

    assert result.status == "cancelled"
    assert session.finished
    assert dispatched == []


def test_press_requires_single_character() -> None:
    session, _ = make_session()

    with pytest.raises(ValueError):
        session.press("gs")
    assert session.buffer == ""
