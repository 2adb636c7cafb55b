"""Typed-key buffer and keystroke handling around the which-key tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional

from modali.dispatch import run_command_detached
from modali.keymaps import Command, Menu, NoMatch, WhichTreeNode, resolve
from modali.runtime import telemetry

Dispatcher = Callable[[str], object]
SessionStatus = Literal["menu", "noop", "dispatched", "cancelled"]


class SessionClosedError(RuntimeError):
    """Raised when keys arrive after the session dispatched or was cancelled."""


@dataclass(slots=True)
class SessionResult:
    """Outcome of one keystroke, returned to the host loop."""

    status: SessionStatus
    menu: Optional[Menu] = None
    command: Optional[str] = None


class WhichKeySession:
    """Owns the typed buffer and applies keystrokes to it.

    The buffer only ever holds keys that resolve to a menu: a key that leads
    nowhere is appended, resolved, and popped again. A key that completes a
    command hands it to ``dispatcher`` and ends the session, unless
    ``close_on_dispatch`` is false, in which case the buffer is cleared and
    the top-level menu comes back.
    """

    def __init__(
        self,
        root: WhichTreeNode,
        *,
        dispatcher: Dispatcher = run_command_detached,
        close_on_dispatch: bool = True,
        logger_name: str | None = None,
    ) -> None:
        self.root = root
        self._dispatcher = dispatcher
        self._close_on_dispatch = close_on_dispatch
        self._logger_name = logger_name or "modali.session"
        self._buffer: list[str] = []
        self._finished = False

    @property
    def buffer(self) -> str:
        return "".join(self._buffer)

    @property
    def finished(self) -> bool:
        return self._finished

    def menu(self) -> Menu:
        resolution = resolve(self.root, self._buffer)
        assert isinstance(resolution, Menu), "buffer must always resolve to a menu"
        return resolution

    def press(self, char: str) -> SessionResult:
        self._ensure_open()
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")

        with telemetry.span(
            "session::press",
            logger_name=self._logger_name,
            component="session",
            metadata={"key": char, "buffer": self.buffer},
        ) as handle:
            self._buffer.append(char)
            resolution = resolve(self.root, self._buffer)
            match resolution:
                case NoMatch():
                    self._buffer.pop()
                    handle.add_metadata("status", "noop")
                    telemetry.record_event(
                        "session.noop",
                        level="debug",
                        data={"key": char, "buffer": self.buffer},
                        logger_name=self._logger_name,
                    )
                    return SessionResult(status="noop", menu=self.menu())
                case Menu():
                    handle.add_metadata("status", "menu")
                    return SessionResult(status="menu", menu=resolution)
                case Command(command=command):
                    handle.add_metadata("status", "dispatched")
                    return self._dispatch(command)

    def erase(self) -> SessionResult:
        """Step back one level; a no-op on an empty buffer."""

        self._ensure_open()
        if self._buffer:
            self._buffer.pop()
        return SessionResult(status="menu", menu=self.menu())

    def reset(self) -> SessionResult:
        self._ensure_open()
        self._buffer.clear()
        return SessionResult(status="menu", menu=self.menu())

    def cancel(self) -> SessionResult:
        self._ensure_open()
        telemetry.record_event(
            "session.cancel",
            data={"buffer": self.buffer},
            logger_name=self._logger_name,
        )
        self._buffer.clear()
        self._finished = True
        return SessionResult(status="cancelled")

    def _dispatch(self, command: str) -> SessionResult:
        path = self.buffer
        self._buffer.clear()
        if self._close_on_dispatch:
            self._finished = True
        telemetry.record_event(
            "session.dispatch",
            data={"path": path, "command": command},
            logger_name=self._logger_name,
        )
        self._dispatcher(command)
        menu = None if self._finished else self.menu()
        return SessionResult(status="dispatched", menu=menu, command=command)

    def _ensure_open(self) -> None:
        if self._finished:
            raise SessionClosedError("session already finished")


__all__ = [
    "Dispatcher",
    "SessionClosedError",
    "SessionResult",
    "SessionStatus",
    "WhichKeySession",
]
