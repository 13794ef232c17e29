"""Foreground container execution."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Protocol

from ttydoc.common.config import ContainerConfig
from ttydoc.common.settings import settings
from ttydoc.common.types import InvocationDescriptor, LaunchOutcome

logger = logging.getLogger(__name__)

__all__ = ["Launcher", "ContainerLauncher", "containerArgv_build"]


class Launcher(Protocol):
    """Runs one invocation descriptor and reports how it ended."""

    def descriptor_run(self, descriptor: InvocationDescriptor) -> LaunchOutcome:
        """Run descriptor to completion."""
        ...


def containerArgv_build(
    descriptor: InvocationDescriptor, container_config: ContainerConfig
) -> list[str]:
    """
    Render a descriptor as a container runtime command line.

    Args:
        descriptor: Invocation to render.
        container_config: Runtime binary and privilege settings.

    Returns:
        Argument vector, e.g.
        `sudo docker run --rm -it --network=host -e ... -v ... --entrypoint EXE IMAGE FILE`.
    """
    argv: list[str] = []
    if container_config.use_sudo:
        argv.append("sudo")
    argv.extend([container_config.runtime, "run", "--rm"])
    if container_config.interactive:
        argv.append("-it")
    argv.append(f"--network={descriptor.network_mode}")
    for name, value in descriptor.environment:
        argv.extend(["-e", f"{name}={value}"])
    for mount in descriptor.mounts:
        argv.extend(["-v", mount.volumeSpec_get()])
    argv.extend(["--entrypoint", descriptor.executable, descriptor.image])
    argv.extend(descriptor.arguments)
    return argv


class ContainerLauncher:
    """Runs descriptors through the configured container runtime CLI.

    The child inherits this process's stdin/stdout/stderr, so the viewer
    gets the terminal and Ctrl-C reaches it directly.
    """

    def __init__(self, container_config: ContainerConfig) -> None:
        self._container_config: ContainerConfig = container_config

    def descriptor_run(self, descriptor: InvocationDescriptor) -> LaunchOutcome:
        """
        Run the container in the foreground and wait for it.

        Args:
            descriptor: Invocation to run.

        Returns:
            Outcome carrying the real exit code; 127 if the runtime binary is
            missing, 126 if it cannot be executed, 130 if the user interrupted
            the wait.
        """
        argv: list[str] = containerArgv_build(descriptor, self._container_config)
        logger.debug("Running: %s", shlex.join(argv))

        try:
            completed = subprocess.run(argv, check=False)
        except FileNotFoundError:
            logger.error("Container runtime not found: %s", argv[0])
            return LaunchOutcome.failed(settings.EXIT_COMMAND_NOT_FOUND)
        except PermissionError:
            logger.error("Container runtime not executable: %s", argv[0])
            return LaunchOutcome.failed(settings.EXIT_COMMAND_NOT_EXECUTABLE)
        except OSError as exc:
            logger.error("Container runtime could not be started: %s", exc)
            return LaunchOutcome.failed(settings.EXIT_COMMAND_NOT_EXECUTABLE)
        except KeyboardInterrupt:
            logger.warning("Launch interrupted by user")
            return LaunchOutcome.failed(settings.EXIT_INTERRUPTED, interrupted=True)

        exit_code: int = completed.returncode
        if exit_code < 0:
            # Killed by signal N: report 128 + N the way a shell does
            exit_code = 128 - exit_code
        outcome: LaunchOutcome = LaunchOutcome.fromExitCode_build(exit_code)
        logger.debug("Container exited with %s", outcome.exit_code)
        return outcome
