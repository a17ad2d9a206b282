"""Helpers for invoking external command line tools (mvn, gh).

Calls are synchronous and block until the child exits; there is no internal
timeout. Output is captured line by line so failures can be reported with
the tool's own diagnostics.
"""
from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Tuple

from common.errors import ExternalToolError, UnavailableCommandError
from common.logging_utils import extra_context, is_debug_enabled, Timer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScriptResult:
    """Exit status and captured output of one external process."""

    command: Tuple[str, ...]
    status_code: int
    out: Tuple[str, ...]
    err: Tuple[str, ...]

    @property
    def ok(self) -> bool:
        return self.status_code == 0

    def assert_ok(self) -> "ScriptResult":
        """Return self, or raise ExternalToolError if the process failed."""
        if not self.ok:
            raise ExternalToolError(self.command, self.status_code, self.out, self.err)
        return self


def check_command(command: str) -> None:
    """Raise UnavailableCommandError unless ``command`` is on PATH."""
    if shutil.which(command) is None:
        raise UnavailableCommandError(command)


def run_script(*command: str) -> ScriptResult:
    """Run a command to completion and capture its output.

    Args:
        *command: Program and arguments; no shell is involved.

    Returns:
        ScriptResult with stdout/stderr split into lines.

    Raises:
        UnavailableCommandError: If the program cannot be found.
    """
    if is_debug_enabled(logger):
        logger.debug(
            "Running external command",
            extra=extra_context(
                event="process_start",
                component="cli_support",
                action=command[0] if command else None,
                target=" ".join(command)
            )
        )
    with Timer() as t:
        try:
            proc = subprocess.run(
                list(command),
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise UnavailableCommandError(command[0]) from exc

    result = ScriptResult(
        command=tuple(command),
        status_code=proc.returncode,
        out=tuple(proc.stdout.splitlines()),
        err=tuple(proc.stderr.splitlines()),
    )
    if is_debug_enabled(logger):
        logger.debug(
            "External command finished",
            extra=extra_context(
                event="process_exit",
                component="cli_support",
                action=command[0] if command else None,
                outcome="success" if result.ok else "failure",
                status_code=result.status_code,
                duration_ms=t.duration_ms()
            )
        )
    return result
