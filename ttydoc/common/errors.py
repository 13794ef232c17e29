"""Exception types raised by the launch pipeline"""


class LauncherError(Exception):
    """Base class for ttydoc errors"""


class UsageError(LauncherError):
    """Command line is missing the target file argument"""


class PermissionGrantError(LauncherError):
    """X server access grant for the container could not be applied"""


class PostRunHookError(LauncherError):
    """Post-run cleanup action failed"""
