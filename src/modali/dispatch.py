"""Fire-and-forget launching of resolved commands."""

from __future__ import annotations

import subprocess
from typing import Optional, Sequence

from modali.runtime import telemetry

DEFAULT_SHELL: tuple[str, ...] = ("sh", "-c")


class DispatchError(RuntimeError):
    """Raised when the shell for a resolved command cannot be started."""

    def __init__(self, command: str, cause: OSError):
        super().__init__(f"Failed to start command '{command}': {cause}")
        self.command = command
        self.cause = cause


def run_command_detached(
    command: str,
    *,
    shell: Sequence[str] = DEFAULT_SHELL,
    logger_name: Optional[str] = None,
) -> subprocess.Popen[bytes]:
    """Start ``command`` through ``shell`` and return without waiting.

    ``command`` is handed to the shell verbatim, so lists (``a; b``), pipes
    and leading assignments (``FOO=1 cmd``) behave as typed. The shell gets
    its own session and ``/dev/null`` for stdio, so it keeps running after
    the launcher exits.
    """

    if not command.strip():
        raise ValueError("command cannot be empty")

    with telemetry.span(
        "dispatch::run",
        logger_name=logger_name or "modali.dispatch",
        component="dispatch",
        metadata={"command": command},
    ) as handle:
        try:
            process = subprocess.Popen(
                [*shell, command],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
                close_fds=True,
            )
        except OSError as exc:
            raise DispatchError(command, exc) from exc
        handle.add_metadata("pid", process.pid)
        return process


__all__ = ["DEFAULT_SHELL", "DispatchError", "run_command_detached"]
