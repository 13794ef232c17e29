"""Post-run cleanup hooks.

Hooks run after the launch concludes, whatever its outcome. A failing hook is
reported and otherwise ignored; it never changes the launcher's exit code.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Protocol, Sequence

from ttydoc.common.errors import PostRunHookError

logger = logging.getLogger(__name__)

__all__ = [
    "PostRunHook",
    "CommandPostRunHook",
    "NullPostRunHook",
    "postRunHook_create",
    "postRunHook_invoke",
]


class PostRunHook(Protocol):
    """Cleanup action invoked once after the launch concludes."""

    def describe(self) -> str:
        """Short human-readable label for log lines."""
        ...

    def run(self) -> None:
        """Perform the cleanup, raising on failure."""
        ...


class CommandPostRunHook:
    """Run an external command, e.g. `ollama stop llama2:latest`."""

    def __init__(self, command: Sequence[str], timeout: float) -> None:
        """
        Args:
            command: Argument vector to execute.
            timeout: Seconds to wait before giving up.

        Raises:
            ValueError: If command is empty.
        """
        if not command:
            raise ValueError("CommandPostRunHook requires a non-empty command")
        self._command: list[str] = list(command)
        self._timeout: float = timeout

    def describe(self) -> str:
        """Return the command as a shell-quoted string."""
        return shlex.join(self._command)

    def run(self) -> None:
        """
        Execute the command and wait for it.

        Raises:
            PostRunHookError: If the command is missing, cannot be run, times out,
                or exits non-zero.
        """
        try:
            completed = subprocess.run(
                self._command,
                check=False,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise PostRunHookError(f"{self._command[0]} not found on PATH") from exc
        except subprocess.TimeoutExpired as exc:
            raise PostRunHookError(f"timed out after {self._timeout}s") from exc
        except OSError as exc:
            raise PostRunHookError(f"{self._command[0]} could not be run: {exc}") from exc

        if completed.returncode != 0:
            raise PostRunHookError(
                completed.stderr.strip() or f"exited with {completed.returncode}"
            )


class NullPostRunHook:
    """Hook used when no cleanup command is configured."""

    def describe(self) -> str:
        """Return a fixed label; nothing is configured."""
        return "none"

    def run(self) -> None:
        """Do nothing."""
        return None


def postRunHook_create(command: Sequence[str], timeout: float) -> PostRunHook:
    """
    Create the hook for a configured command.

    Args:
        command: Argument vector; empty means no cleanup.
        timeout: Seconds to wait for the command.

    Returns:
        Command hook, or a no-op hook when command is empty.
    """
    if not command:
        return NullPostRunHook()
    return CommandPostRunHook(command=command, timeout=timeout)


def postRunHook_invoke(hook: PostRunHook) -> bool:
    """
    Run hook, isolating any failure.

    Args:
        hook: Hook to run.

    Returns:
        True if the hook completed, False if it failed.
    """
    if isinstance(hook, NullPostRunHook):
        return True

    label: str = hook.describe()
    logger.info("Running post-run hook: %s", label)
    try:
        hook.run()
    except Exception as exc:
        logger.warning("Post-run hook '%s' failed: %s", label, exc)
        return False
    logger.info("Post-run hook finished: %s", label)
    return True
