"""Bootstrap helpers for config, logging, and launch pipeline wiring."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ttydoc.common.config import Config, ConfigLoader
from ttydoc.common.types import SessionEnvironment
from ttydoc.launch.fallback_controller import FallbackController
from ttydoc.launch.invocation_builder import InvocationBuilder
from ttydoc.launch.launch_logging import logging_setup
from ttydoc.launch.launcher import ContainerLauncher, Launcher
from ttydoc.launch.post_run import PostRunHook, postRunHook_create
from ttydoc.launch.session_classifier import SessionClassifier
from ttydoc.launch.x11_access import AccessGranter, NullAccessGranter, XhostAccessGranter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchComponents:
    """Wired launch pipeline for one CLI invocation."""

    controller: FallbackController
    post_run_hook: PostRunHook


def configFromEnvironment_load(environ: Mapping[str, str]) -> Config:
    """
    Load configuration from TTYDOC_CONFIG or the standard paths.

    Args:
        environ: Environment mapping consulted for TTYDOC_CONFIG.

    Returns:
        Loaded config (built-in defaults when no file is found).
    """
    config_path: Path | None = ConfigLoader.configFile_find(dict(environ))
    config: Config = ConfigLoader.config_load(config_path)
    return config


def loggingWithConfig_setup(config: Config) -> None:
    """
    Setup logging from config.

    Args:
        config: Loaded config.
    """
    logging_setup(config.logging.level, config.logging.format, config.logging.file)


def accessGranter_create(config: Config) -> AccessGranter:
    """
    Create the X11 access granter selected by config.

    Args:
        config: Loaded config.

    Returns:
        xhost-based granter, or a no-op granter when grants are disabled.
    """
    if not config.display.grant_x11_access:
        return NullAccessGranter()
    return XhostAccessGranter(grant_target=config.display.xhost_grant_target)


def launchComponents_create(
    config: Config,
    session_environment: SessionEnvironment,
    launcher: Launcher | None = None,
    access_granter: AccessGranter | None = None,
    post_run_hook: PostRunHook | None = None,
) -> LaunchComponents:
    """
    Wire classifier, builder, launcher, controller and post-run hook.

    Args:
        config: Loaded config.
        session_environment: Host session snapshot.
        launcher: Optional launcher override (defaults to ContainerLauncher).
        access_granter: Optional X11 granter override.
        post_run_hook: Optional hook override (defaults to config's command).

    Returns:
        Wired components.
    """
    classifier = SessionClassifier(session_environment)
    builder = InvocationBuilder(
        session_environment=session_environment,
        container_config=config.container,
        display_config=config.display,
        access_granter=access_granter or accessGranter_create(config),
    )
    controller = FallbackController(
        classifier=classifier,
        builder=builder,
        launcher=launcher or ContainerLauncher(config.container),
    )
    hook: PostRunHook = post_run_hook or postRunHook_create(
        config.post_run.command, config.post_run.timeout_seconds
    )
    logger.debug("Post-run hook: %s", hook.describe())
    return LaunchComponents(controller=controller, post_run_hook=hook)
