"""Target file argument resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ttydoc.common.errors import UsageError
from ttydoc.common.types import TargetFile

logger = logging.getLogger(__name__)

__all__ = ["targetFile_resolve"]


def targetFile_resolve(argument: str | None, cwd: str | None = None) -> TargetFile:
    """
    Resolve the CLI file argument to an absolute path and base name.

    The file is not required to exist; a missing file surfaces when the
    container runtime tries to mount it.

    Args:
        argument: Raw positional argument.
        cwd: Directory relative paths resolve against (defaults to the
            process working directory).

    Returns:
        Resolved target file.

    Raises:
        UsageError: If the argument is absent or empty.
    """
    if argument is None or argument == "":
        raise UsageError("missing target file argument")

    path: Path = Path(argument).expanduser()
    if not path.is_absolute():
        path = Path(cwd or os.getcwd()) / path
    resolved: Path = path.resolve(strict=False)

    logger.debug("Resolved target file %r -> %s", argument, resolved)
    return TargetFile(host_path=str(resolved), base_name=resolved.name)
