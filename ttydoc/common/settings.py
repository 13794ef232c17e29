"""Application settings singleton - single source of launcher constants

This module provides a singleton Settings class that consolidates:
1. Exit codes shared by the CLI, launcher and controller
2. Application constants (timeouts, environment variable names)

Runtime configuration from config.yml is not held here; the loaded Config is
passed explicitly to the components that need it.

Usage:
    from ttydoc.common.settings import settings

    if outcome.exit_code == settings.EXIT_INTERRUPTED:
        ...
"""

from typing import Optional


class Settings:
    """Singleton holder for launcher constants

    The singleton pattern ensures all parts of the application use the same
    exit codes and display constants.
    """

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    # =========================================================================
    # Exit Codes
    # =========================================================================

    EXIT_USAGE: int = 1
    """Exit code for a missing target-file argument or unusable config"""

    EXIT_COMMAND_NOT_EXECUTABLE: int = 126
    """Exit code reported when the container runtime exists but cannot be executed"""

    EXIT_COMMAND_NOT_FOUND: int = 127
    """Exit code reported when the container runtime binary is missing

    Mirrors the shell's code for an unknown command.
    """

    EXIT_INTERRUPTED: int = 130
    """Exit code reported when the user interrupts a foreground launch (128 + SIGINT)"""

    # =========================================================================
    # Display Constants
    # =========================================================================

    BACKEND_HINT_VARIABLE: str = "WINIT_UNIX_BACKEND"
    """Container environment variable that forces the viewer's windowing backend"""

    XHOST_TIMEOUT_SEC: float = 5.0
    """Upper bound on the xhost access grant

    The grant is best-effort; a hung X server must not block the launch.
    """


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from ttydoc.common.settings import settings
"""
