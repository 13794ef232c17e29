"""X server access grant for containerized X11 clients."""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol

from ttydoc.common.errors import PermissionGrantError
from ttydoc.common.settings import settings

logger = logging.getLogger(__name__)


class AccessGranter(Protocol):
    """Grants the container's X11 client access to the host X server."""

    def access_grant(self) -> None:
        """Apply the grant, raising PermissionGrantError on failure."""
        ...


class XhostAccessGranter:
    """Add a local host-access entry with `xhost +local:<target>`."""

    def __init__(self, grant_target: str = "docker", timeout: float | None = None) -> None:
        self._grant_target: str = grant_target
        self._timeout: float = settings.XHOST_TIMEOUT_SEC if timeout is None else timeout

    def command_get(self) -> list[str]:
        """Return the xhost argument vector"""
        return ["xhost", f"+local:{self._grant_target}"]

    def access_grant(self) -> None:
        """
        Run xhost to authorize local connections.

        Raises:
            PermissionGrantError: If xhost is missing, cannot be run, hangs, or
                exits non-zero.
        """
        command: list[str] = self.command_get()
        try:
            completed = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise PermissionGrantError("xhost not found on PATH") from exc
        except subprocess.TimeoutExpired as exc:
            raise PermissionGrantError(f"xhost timed out after {self._timeout}s") from exc
        except OSError as exc:
            raise PermissionGrantError(f"xhost could not be run: {exc}") from exc

        if completed.returncode != 0:
            raise PermissionGrantError(
                completed.stderr.strip() or f"xhost exited with {completed.returncode}"
            )
        logger.debug("X11 access granted: %s", " ".join(command))


class NullAccessGranter:
    """Granter used when access grants are disabled in config."""

    def access_grant(self) -> None:
        logger.debug("X11 access grant disabled by config")
