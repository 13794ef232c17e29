"""Common types and data structures for ttydoc"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class DisplayBackend(Enum):
    """Display server protocol the container speaks to reach the host"""
    X11 = "x11"
    WAYLAND = "wayland"


class LaunchStatus(Enum):
    """Result class of one container run"""
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ControllerState(Enum):
    """Fallback controller states, in the order they can be visited"""
    INIT = "init"
    ATTEMPT_PRIMARY = "attempt_primary"
    ATTEMPT_COMPAT = "attempt_compat"  # X11 over XWayland after a Wayland failure
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionEnvironment:
    """Snapshot of the host display-session signals

    Taken once at the CLI boundary so that nothing downstream reads
    process environment directly.
    """
    session_type: str | None
    display: str | None
    wayland_display: str | None
    runtime_dir: str | None

    @classmethod
    def fromEnviron_build(cls, environ: Mapping[str, str]) -> "SessionEnvironment":
        """
        Capture session signals from an environment mapping.

        Args:
            environ: Mapping such as `os.environ`.

        Returns:
            Immutable session snapshot.
        """
        return cls(
            session_type=environ.get("XDG_SESSION_TYPE"),
            display=environ.get("DISPLAY"),
            wayland_display=environ.get("WAYLAND_DISPLAY"),
            runtime_dir=environ.get("XDG_RUNTIME_DIR"),
        )


@dataclass(frozen=True)
class TargetFile:
    """File handed to the containerized viewer"""
    host_path: str
    base_name: str

    def containerPath_get(self, mount_dir: str) -> str:
        """Return the path the file is mounted at inside the container"""
        return posixpath.join(mount_dir, self.base_name)


@dataclass(frozen=True)
class MountBinding:
    """Host path exposed at a container path"""
    host_path: str
    container_path: str

    def volumeSpec_get(self) -> str:
        """Render as a `host:container` volume argument"""
        return f"{self.host_path}:{self.container_path}"


@dataclass(frozen=True)
class InvocationDescriptor:
    """Complete, immutable description of one container launch attempt"""
    backend: DisplayBackend
    image: str
    network_mode: str
    environment: tuple[tuple[str, str], ...]
    mounts: tuple[MountBinding, ...]
    command: tuple[str, ...]

    @property
    def executable(self) -> str:
        """In-container program path"""
        return self.command[0]

    @property
    def arguments(self) -> tuple[str, ...]:
        """Arguments passed to the in-container program"""
        return self.command[1:]


@dataclass(frozen=True)
class LaunchOutcome:
    """Exit status of one container run"""
    status: LaunchStatus
    exit_code: int
    interrupted: bool = False

    @classmethod
    def succeeded(cls) -> "LaunchOutcome":
        """Build a successful outcome"""
        return cls(status=LaunchStatus.SUCCEEDED, exit_code=0)

    @classmethod
    def failed(cls, exit_code: int, interrupted: bool = False) -> "LaunchOutcome":
        """Build a failed outcome carrying the process exit code"""
        return cls(status=LaunchStatus.FAILED, exit_code=exit_code, interrupted=interrupted)

    @classmethod
    def fromExitCode_build(cls, exit_code: int) -> "LaunchOutcome":
        """
        Classify a raw process exit code.

        Args:
            exit_code: Process return code. Negative values (signal deaths
                reported by subprocess) count as failures.

        Returns:
            SUCCEEDED for 0, FAILED otherwise.
        """
        if exit_code == 0:
            return cls.succeeded()
        return cls.failed(exit_code)

    def isSuccess(self) -> bool:
        """Check if the run succeeded"""
        return self.status == LaunchStatus.SUCCEEDED


@dataclass(frozen=True)
class ControllerResult:
    """Final report of one fallback-controller run"""
    outcome: LaunchOutcome
    attempts: tuple[InvocationDescriptor, ...]
    states: tuple[ControllerState, ...]

    @property
    def exit_code(self) -> int:
        """Exit code of the last attempt"""
        return self.outcome.exit_code

    @property
    def backends(self) -> tuple[DisplayBackend, ...]:
        """Backends tried, in launch order"""
        return tuple(descriptor.backend for descriptor in self.attempts)
