"""
Session-detection and fallback launch policy.

This module owns the launch state machine:

    INIT -> ATTEMPT_PRIMARY -> (SUCCEEDED | ATTEMPT_COMPAT) -> (SUCCEEDED | FAILED)

The primary attempt uses the classified backend. Only a failed Wayland
attempt moves to ATTEMPT_COMPAT, which relaunches once under X11 (XWayland).
X11 is the universal fallback target, so X11 failures are terminal. A user
interrupt is terminal too: the attempt was cancelled, not broken.
"""

from __future__ import annotations

import logging

from ttydoc.common.types import (
    ControllerResult,
    ControllerState,
    DisplayBackend,
    InvocationDescriptor,
    LaunchOutcome,
    TargetFile,
)
from ttydoc.launch.invocation_builder import InvocationBuilder
from ttydoc.launch.launcher import Launcher
from ttydoc.launch.session_classifier import SessionClassifier

logger = logging.getLogger(__name__)

__all__ = ["FallbackController", "compatRetry_isWarranted"]

_COMPAT_BACKEND: DisplayBackend = DisplayBackend.X11


def compatRetry_isWarranted(backend: DisplayBackend, outcome: LaunchOutcome) -> bool:
    """
    Decide whether a primary attempt earns the X11 compatibility retry.

    Args:
        backend: Backend of the primary attempt.
        outcome: Outcome of the primary attempt.

    Returns:
        True only for a non-interrupted Wayland failure.
    """
    if outcome.isSuccess():
        return False
    if outcome.interrupted:
        return False
    return backend == DisplayBackend.WAYLAND


class FallbackController:
    """Classify, build, launch, and retry once under X11 when Wayland fails."""

    def __init__(
        self,
        classifier: SessionClassifier,
        builder: InvocationBuilder,
        launcher: Launcher,
    ) -> None:
        self._classifier: SessionClassifier = classifier
        self._builder: InvocationBuilder = builder
        self._launcher: Launcher = launcher

    def run(self, target: TargetFile) -> ControllerResult:
        """
        Run the launch state machine for one target file.

        Args:
            target: Resolved file to open.

        Returns:
            Final outcome plus the descriptors launched and states visited.
        """
        states: list[ControllerState] = [ControllerState.INIT]
        attempts: list[InvocationDescriptor] = []

        primary_backend: DisplayBackend = self._classifier.backend_classify()

        states.append(ControllerState.ATTEMPT_PRIMARY)
        outcome: LaunchOutcome = self._attempt_launch(primary_backend, target, attempts)

        if compatRetry_isWarranted(primary_backend, outcome):
            logger.warning(
                "Wayland launch failed (exit %s). Retrying with X11 (XWayland)...",
                outcome.exit_code,
            )
            states.append(ControllerState.ATTEMPT_COMPAT)
            outcome = self._attempt_launch(_COMPAT_BACKEND, target, attempts)

        final_state: ControllerState = (
            ControllerState.SUCCEEDED if outcome.isSuccess() else ControllerState.FAILED
        )
        states.append(final_state)
        if outcome.isSuccess():
            logger.info("Viewer exited normally")
        else:
            logger.error("Launch failed with exit code %s", outcome.exit_code)

        return ControllerResult(
            outcome=outcome,
            attempts=tuple(attempts),
            states=tuple(states),
        )

    def _attempt_launch(
        self,
        backend: DisplayBackend,
        target: TargetFile,
        attempts: list[InvocationDescriptor],
    ) -> LaunchOutcome:
        """Build a fresh descriptor for backend, record it, and launch it."""
        if backend == DisplayBackend.X11:
            logger.info("Launching under X11 (XWayland)...")
        else:
            logger.info("Launching under native Wayland...")
        descriptor: InvocationDescriptor = self._builder.descriptor_build(backend, target)
        attempts.append(descriptor)
        return self._launcher.descriptor_run(descriptor)
