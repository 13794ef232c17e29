"""
Container invocation construction per display backend.

This module turns a display backend and a resolved target file into an
immutable InvocationDescriptor. Descriptor construction is a pure function of
its inputs; the one side effect the X11 path needs, authorizing the container
against the host X server, lives on InvocationBuilder and runs at most once
per builder.
"""

from __future__ import annotations

import logging
import posixpath

from ttydoc.common.config import ContainerConfig, DisplayConfig
from ttydoc.common.errors import PermissionGrantError
from ttydoc.common.settings import settings
from ttydoc.common.types import (
    DisplayBackend,
    InvocationDescriptor,
    MountBinding,
    SessionEnvironment,
    TargetFile,
)
from ttydoc.launch.x11_access import AccessGranter

logger = logging.getLogger(__name__)

__all__ = [
    "InvocationBuilder",
    "invocationDescriptor_build",
    "x11Environment_build",
    "waylandEnvironment_build",
    "displayMount_build",
    "waylandSocketPath_get",
]


def x11Environment_build(
    session_environment: SessionEnvironment, display_config: DisplayConfig
) -> tuple[tuple[str, str], ...]:
    """
    Build container environment for an X11 client.

    Args:
        session_environment: Host session snapshot.
        display_config: Display bridging settings.

    Returns:
        Ordered environment assignments.
    """
    display: str = _sessionValue_get("DISPLAY", session_environment.display)
    return (
        ("DISPLAY", display),
        (settings.BACKEND_HINT_VARIABLE, display_config.x11_backend_hint),
    )


def waylandEnvironment_build(
    session_environment: SessionEnvironment,
) -> tuple[tuple[str, str], ...]:
    """
    Build container environment for a native Wayland client.

    Args:
        session_environment: Host session snapshot.

    Returns:
        Ordered environment assignments.
    """
    wayland_display: str = _sessionValue_get(
        "WAYLAND_DISPLAY", session_environment.wayland_display
    )
    runtime_dir: str = _sessionValue_get("XDG_RUNTIME_DIR", session_environment.runtime_dir)
    return (
        ("WAYLAND_DISPLAY", wayland_display),
        ("XDG_RUNTIME_DIR", runtime_dir),
    )


def displayMount_build(
    backend: DisplayBackend,
    session_environment: SessionEnvironment,
    display_config: DisplayConfig,
) -> MountBinding:
    """
    Build the mount that exposes the host display socket.

    Both paths are identical: clients inside the container look the
    socket up by the same path the host uses.

    Args:
        backend: Display backend being launched.
        session_environment: Host session snapshot.
        display_config: Display bridging settings.

    Returns:
        Display socket mount binding.
    """
    if backend == DisplayBackend.X11:
        socket_dir: str = display_config.x11_socket_dir
        return MountBinding(host_path=socket_dir, container_path=socket_dir)

    socket_path: str = waylandSocketPath_get(session_environment)
    return MountBinding(host_path=socket_path, container_path=socket_path)


def waylandSocketPath_get(session_environment: SessionEnvironment) -> str:
    """
    Return the host path of the Wayland socket.

    Mirrors `"$XDG_RUNTIME_DIR/$WAYLAND_DISPLAY"`: the result is always absolute,
    even with an unset runtime dir. An absolute WAYLAND_DISPLAY is used as-is.

    Args:
        session_environment: Host session snapshot.

    Returns:
        Absolute socket path.
    """
    wayland_display: str = session_environment.wayland_display or ""
    if posixpath.isabs(wayland_display):
        return wayland_display
    runtime_dir: str = (session_environment.runtime_dir or "").rstrip("/")
    return f"{runtime_dir}/{wayland_display}"


def invocationDescriptor_build(
    backend: DisplayBackend,
    target: TargetFile,
    session_environment: SessionEnvironment,
    container_config: ContainerConfig,
    display_config: DisplayConfig,
) -> InvocationDescriptor:
    """
    Build a complete container invocation for one launch attempt.

    Args:
        backend: Display backend to bridge.
        target: Resolved file to open in the viewer.
        session_environment: Host session snapshot.
        container_config: Image and runtime settings.
        display_config: Display bridging settings.

    Returns:
        Immutable invocation descriptor.
    """
    if backend == DisplayBackend.X11:
        environment = x11Environment_build(session_environment, display_config)
    else:
        environment = waylandEnvironment_build(session_environment)

    file_container_path: str = target.containerPath_get(container_config.mount_dir)
    mounts: tuple[MountBinding, ...] = (
        displayMount_build(backend, session_environment, display_config),
        MountBinding(host_path=target.host_path, container_path=file_container_path),
    )

    return InvocationDescriptor(
        backend=backend,
        image=container_config.image,
        network_mode=container_config.network,
        environment=environment,
        mounts=mounts,
        command=(container_config.executable, file_container_path),
    )


def _sessionValue_get(name: str, value: str | None) -> str:
    """Return a session value, warning when the host left it unset."""
    if not value:
        logger.warning("%s is not set on the host; passing an empty value", name)
        return ""
    return value


class InvocationBuilder:
    """Builds invocation descriptors bound to one host session and config."""

    def __init__(
        self,
        session_environment: SessionEnvironment,
        container_config: ContainerConfig,
        display_config: DisplayConfig,
        access_granter: AccessGranter,
    ) -> None:
        self._session_environment: SessionEnvironment = session_environment
        self._container_config: ContainerConfig = container_config
        self._display_config: DisplayConfig = display_config
        self._access_granter: AccessGranter = access_granter
        self._x11_access_attempted: bool = False

    def x11Access_ensure(self) -> None:
        """
        Grant the container access to the host X server, once.

        Failure is logged and swallowed: many hosts already authorize local
        clients.
        """
        if self._x11_access_attempted:
            return
        self._x11_access_attempted = True
        try:
            self._access_granter.access_grant()
        except PermissionGrantError as exc:
            logger.warning("X11 access grant failed, continuing: %s", exc)

    def descriptor_build(self, backend: DisplayBackend, target: TargetFile) -> InvocationDescriptor:
        """
        Build a descriptor, authorizing X11 access first when needed.

        Args:
            backend: Display backend to bridge.
            target: Resolved target file.

        Returns:
            Immutable invocation descriptor.
        """
        if backend == DisplayBackend.X11:
            self.x11Access_ensure()
        descriptor: InvocationDescriptor = invocationDescriptor_build(
            backend=backend,
            target=target,
            session_environment=self._session_environment,
            container_config=self._container_config,
            display_config=self._display_config,
        )
        logger.debug("Built %s invocation for %s", backend.value, target.host_path)
        return descriptor
