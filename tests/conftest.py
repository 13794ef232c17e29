"""Pytest configuration and shared fixtures for ttydoc tests

This module provides common fixtures and test doubles used across the
unit tests.
"""

import logging
from pathlib import Path

import pytest

from ttydoc.common.config import Config, ConfigLoader
from ttydoc.common.types import SessionEnvironment, TargetFile


@pytest.fixture
def default_config() -> Config:
    """Config with built-in defaults (no file)"""
    return Config()


@pytest.fixture
def sample_config() -> Config:
    """Load the repository's sample config.yml

    Returns:
        Config object with sample values
    """
    config_path = Path(__file__).parent.parent / "config.yml"
    if not config_path.exists():
        pytest.skip("config.yml not found - required for this test")
    return ConfigLoader.config_load(config_path)


@pytest.fixture
def wayland_session() -> SessionEnvironment:
    """Host running a native Wayland session"""
    return SessionEnvironment(
        session_type="wayland",
        display=":0",
        wayland_display="wayland-0",
        runtime_dir="/run/user/1000",
    )


@pytest.fixture
def x11_session() -> SessionEnvironment:
    """Host running an X11 session"""
    return SessionEnvironment(
        session_type="x11",
        display=":1",
        wayland_display=None,
        runtime_dir="/run/user/1000",
    )


@pytest.fixture
def target_file() -> TargetFile:
    """Resolved target file"""
    return TargetFile(host_path="/home/user/docs/notes.txt", base_name="notes.txt")


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
