"""ttydoc command-line interface"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Mapping
from typing import NoReturn, Sequence

from ttydoc.bootstrap import (
    LaunchComponents,
    configFromEnvironment_load,
    launchComponents_create,
    loggingWithConfig_setup,
)
from ttydoc.common.config import Config
from ttydoc.common.errors import UsageError
from ttydoc.common.settings import settings
from ttydoc.common.types import ControllerResult, SessionEnvironment, TargetFile
from ttydoc.launch.path_resolver import targetFile_resolve
from ttydoc.launch.post_run import postRunHook_invoke

USAGE: str = "Usage: ttydoc <file>"


def parser_create() -> argparse.ArgumentParser:
    """
    Create the CLI argument parser.

    The file argument is optional at the argparse level so that a missing
    argument is reported as a UsageError with exit code 1.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="ttydoc",
        description="Open a file in the containerized tty_doc viewer on the host display",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="File to open in the viewer",
    )
    return parser


def arguments_parse(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed CLI arguments.
    """
    return parser_create().parse_args(argv)


def launch_run(
    target: TargetFile,
    components: LaunchComponents,
) -> int:
    """
    Run the fallback controller, then the post-run hook.

    Args:
        target: Resolved file to open.
        components: Wired launch pipeline.

    Returns:
        Exit code of the final container attempt.
    """
    try:
        result: ControllerResult = components.controller.run(target)
    finally:
        postRunHook_invoke(components.post_run_hook)
    return result.exit_code


def exitCode_compute(
    file_argument: str | None,
    environ: Mapping[str, str],
) -> int:
    """
    Resolve inputs, load config, and launch; map every outcome to an exit code.

    Args:
        file_argument: Raw positional argument.
        environ: Process environment.

    Returns:
        Process exit code.
    """
    try:
        target: TargetFile = targetFile_resolve(file_argument)
    except UsageError:
        print(USAGE, file=sys.stderr)
        return settings.EXIT_USAGE

    try:
        config: Config = configFromEnvironment_load(environ)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return settings.EXIT_USAGE

    loggingWithConfig_setup(config)
    session_environment = SessionEnvironment.fromEnviron_build(environ)
    components: LaunchComponents = launchComponents_create(config, session_environment)
    return launch_run(target, components)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """
    Main entry point for the ttydoc command

    Args:
        argv: Optional argument list for testing.
    """
    args = arguments_parse(argv)
    try:
        sys.exit(exitCode_compute(args.file, os.environ))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(settings.EXIT_INTERRUPTED)


if __name__ == "__main__":
    main()
