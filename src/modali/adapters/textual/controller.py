"""Bridges Textual key events to a ``WhichKeySession``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from modali.keymaps import Menu
from modali.session import SessionResult, WhichKeySession

CANCEL_KEYS = frozenset({"escape"})
ERASE_KEYS = frozenset({"backspace"})


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to update Textual widgets."""

    show_menu: Callable[[Menu, str], None]
    update_status: Callable[[str], None] = _noop
    on_exit: Callable[[SessionResult], None] = _noop
    log: Callable[[str], None] = _noop


class TextualWhichKeyAdapter:
    """Turns key names and characters into session calls and UI refreshes."""

    def __init__(self, session: WhichKeySession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._refresh(self.session.menu())

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[SessionResult]:
        """Apply one key event; returns ``None`` for keys the launcher ignores."""

        if self.session.finished:
            return None
        self._log_state("key ->", key=key, character=character)

        if key in CANCEL_KEYS:
            result = self.session.cancel()
        elif key in ERASE_KEYS:
            result = self.session.erase()
        elif character and len(character) == 1 and character.isprintable():
            result = self.session.press(character)
        else:
            return None

        self._after_result(result)
        self._log_state("result <-", status=result.status, command=result.command)
        return result

    def _after_result(self, result: SessionResult) -> None:
        if self.session.finished:
            self.hooks.on_exit(result)
            return
        if result.menu is not None:
            self._refresh(result.menu)
        if result.command:
            self.hooks.update_status(f"run: {result.command}")

    def _refresh(self, menu: Menu) -> None:
        self.hooks.show_menu(menu, self.session.buffer)
        self.hooks.update_status(self.session.buffer)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "buffer": self.session.buffer,
            "finished": self.session.finished,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["CANCEL_KEYS", "ERASE_KEYS", "TextualUIHooks", "TextualWhichKeyAdapter"]
