"""Host display-session classification."""

from __future__ import annotations

import logging

from ttydoc.common.types import DisplayBackend, SessionEnvironment

logger = logging.getLogger(__name__)


class SessionClassifier:
    """Map the host session-type signal onto a display backend."""

    _KNOWN_SESSIONS: dict[str, DisplayBackend] = {
        "wayland": DisplayBackend.WAYLAND,
        "x11": DisplayBackend.X11,
    }
    _DEFAULT_BACKEND: DisplayBackend = DisplayBackend.X11

    def __init__(self, session_environment: SessionEnvironment) -> None:
        self._session_environment: SessionEnvironment = session_environment

    def backend_classify(self) -> DisplayBackend:
        """
        Classify the session into X11 or Wayland.

        Unset or unrecognized session types fall back to X11 with an
        advisory warning; this never raises.

        Returns:
            Display backend for the primary launch attempt.
        """
        raw_session: str | None = self._session_environment.session_type
        session: str = (raw_session or "").strip().lower()
        logger.info("Detected session type: %s", session or "(unset)")

        backend: DisplayBackend | None = self._KNOWN_SESSIONS.get(session)
        if backend is None:
            logger.warning(
                "Ambiguous session type %r, defaulting to %s",
                raw_session,
                self._DEFAULT_BACKEND.value,
            )
            return self._DEFAULT_BACKEND
        return backend
