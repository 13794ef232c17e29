"""Unit tests for post-run cleanup hooks."""

from __future__ import annotations

import logging
import subprocess
from types import SimpleNamespace

import pytest

from ttydoc.common.errors import PostRunHookError
from ttydoc.launch import post_run
from ttydoc.launch.post_run import (
    CommandPostRunHook,
    NullPostRunHook,
    postRunHook_create,
    postRunHook_invoke,
)


class _ExplodingHook:
    """Hook that always fails."""

    def __init__(self) -> None:
        """Initialize call counter."""
        self.calls: int = 0

    def describe(self) -> str:
        """Return label."""
        return "explode"

    def run(self) -> None:
        """Record call and fail."""
        self.calls += 1
        raise RuntimeError("model server not running")


class TestCommandPostRunHook:
    """Tests for command-based hooks."""

    def test_runs_command(self, monkeypatch) -> None:
        """The configured command is executed with a timeout."""
        calls: list[tuple[list[str], float]] = []

        def fake_run(argv, **kwargs):
            calls.append((argv, kwargs["timeout"]))
            return SimpleNamespace(returncode=0, stdout="", stderr="")

        monkeypatch.setattr(post_run.subprocess, "run", fake_run)

        CommandPostRunHook(["ollama", "stop", "llama2:latest"], timeout=3.0).run()

        assert calls == [(["ollama", "stop", "llama2:latest"], 3.0)]

    def test_nonzero_exit_raises(self, monkeypatch) -> None:
        """A failing command raises PostRunHookError."""
        monkeypatch.setattr(
            post_run.subprocess,
            "run",
            lambda argv, **kwargs: SimpleNamespace(returncode=1, stdout="", stderr="not running"),
        )

        with pytest.raises(PostRunHookError, match="not running"):
            CommandPostRunHook(["ollama", "stop", "x"], timeout=1.0).run()

    def test_missing_binary_raises(self, monkeypatch) -> None:
        """A missing command raises PostRunHookError."""

        def fake_run(argv, **kwargs):
            raise FileNotFoundError(argv[0])

        monkeypatch.setattr(post_run.subprocess, "run", fake_run)

        with pytest.raises(PostRunHookError, match="ollama not found"):
            CommandPostRunHook(["ollama", "stop", "x"], timeout=1.0).run()

    def test_timeout_raises(self, monkeypatch) -> None:
        """A hung command raises PostRunHookError."""

        def fake_run(argv, **kwargs):
            raise subprocess.TimeoutExpired(argv, kwargs["timeout"])

        monkeypatch.setattr(post_run.subprocess, "run", fake_run)

        with pytest.raises(PostRunHookError, match="timed out"):
            CommandPostRunHook(["sleep", "99"], timeout=0.1).run()

    def test_unexecutable_binary_raises(self, monkeypatch) -> None:
        """A command that cannot be executed raises PostRunHookError."""

        def fake_run(argv, **kwargs):
            raise PermissionError(13, "Permission denied", argv[0])

        monkeypatch.setattr(post_run.subprocess, "run", fake_run)

        with pytest.raises(PostRunHookError, match="ollama could not be run"):
            CommandPostRunHook(["ollama", "stop", "x"], timeout=1.0).run()

    def test_describe_is_shell_quoted(self) -> None:
        """The label quotes arguments that contain spaces."""
        hook = CommandPostRunHook(["ollama", "stop", "my model"], timeout=1.0)

        assert hook.describe() == "ollama stop 'my model'"

    def test_empty_command_rejected(self) -> None:
        """A command hook needs a command."""
        with pytest.raises(ValueError):
            CommandPostRunHook([], timeout=1.0)


class TestPostRunHookCreate:
    """Tests for hook selection from config."""

    def test_empty_command_is_null_hook(self) -> None:
        """No command configured means no-op hook."""
        assert isinstance(postRunHook_create([], 5.0), NullPostRunHook)

    def test_command_hook(self) -> None:
        """A command yields a CommandPostRunHook."""
        hook = postRunHook_create(["ollama", "stop", "llama2:latest"], 5.0)

        assert isinstance(hook, CommandPostRunHook)
        assert hook.describe() == "ollama stop llama2:latest"


class TestPostRunHookInvoke:
    """Tests for failure isolation."""

    def test_failure_is_isolated(self, caplog) -> None:
        """A failing hook is reported, not raised."""
        hook = _ExplodingHook()

        assert postRunHook_invoke(hook) is False
        assert hook.calls == 1
        assert any(
            "model server not running" in r.getMessage()
            for r in caplog.records
            if r.levelno == logging.WARNING
        )

    def test_null_hook_succeeds_silently(self, caplog) -> None:
        """The no-op hook logs nothing."""
        assert postRunHook_invoke(NullPostRunHook()) is True
        assert not any("post-run" in r.getMessage().lower() for r in caplog.records)
