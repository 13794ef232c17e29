"""Unit tests for common types (TargetFile, MountBinding, LaunchOutcome, ...)"""

import pytest

from ttydoc.common.types import (
    ControllerResult,
    ControllerState,
    DisplayBackend,
    InvocationDescriptor,
    LaunchOutcome,
    LaunchStatus,
    MountBinding,
    SessionEnvironment,
    TargetFile,
)


class TestSessionEnvironment:
    """Test SessionEnvironment snapshot"""

    def test_fromEnviron_reads_display_signals(self):
        """Test all four session signals are captured"""
        env = SessionEnvironment.fromEnviron_build(
            {
                "XDG_SESSION_TYPE": "wayland",
                "DISPLAY": ":0",
                "WAYLAND_DISPLAY": "wayland-1",
                "XDG_RUNTIME_DIR": "/run/user/42",
                "HOME": "/home/user",
            }
        )
        assert env == SessionEnvironment(
            session_type="wayland",
            display=":0",
            wayland_display="wayland-1",
            runtime_dir="/run/user/42",
        )

    def test_fromEnviron_missing_values_are_none(self):
        """Test absent variables stay None"""
        env = SessionEnvironment.fromEnviron_build({})
        assert env.session_type is None
        assert env.display is None
        assert env.wayland_display is None
        assert env.runtime_dir is None


class TestTargetFile:
    """Test TargetFile dataclass"""

    def test_containerPath_joins_mount_dir(self):
        """Test container path is mount dir plus base name"""
        target = TargetFile(host_path="/tmp/a/b.txt", base_name="b.txt")
        assert target.containerPath_get("/app") == "/app/b.txt"
        assert target.containerPath_get("/app/") == "/app/b.txt"

    def test_immutable(self):
        """Test TargetFile is immutable"""
        target = TargetFile(host_path="/tmp/a.txt", base_name="a.txt")
        with pytest.raises(AttributeError):
            target.base_name = "other.txt"


class TestMountBinding:
    """Test MountBinding dataclass"""

    def test_volumeSpec(self):
        """Test host:container rendering"""
        mount = MountBinding(host_path="/tmp/.X11-unix", container_path="/tmp/.X11-unix")
        assert mount.volumeSpec_get() == "/tmp/.X11-unix:/tmp/.X11-unix"


class TestLaunchOutcome:
    """Test LaunchOutcome classification"""

    def test_zero_is_success(self):
        """Test exit code 0 maps to SUCCEEDED"""
        outcome = LaunchOutcome.fromExitCode_build(0)
        assert outcome.status == LaunchStatus.SUCCEEDED
        assert outcome.isSuccess() is True
        assert outcome.exit_code == 0

    def test_nonzero_is_failure(self):
        """Test nonzero exit codes map to FAILED and keep the code"""
        outcome = LaunchOutcome.fromExitCode_build(3)
        assert outcome.status == LaunchStatus.FAILED
        assert outcome.isSuccess() is False
        assert outcome.exit_code == 3
        assert outcome.interrupted is False

    def test_failed_interrupted_flag(self):
        """Test interrupted failures carry the flag"""
        outcome = LaunchOutcome.failed(130, interrupted=True)
        assert outcome.interrupted is True
        assert outcome.isSuccess() is False


class TestControllerResult:
    """Test ControllerResult helpers"""

    def test_exit_code_and_backends(self):
        """Test exit code comes from outcome and backends follow attempt order"""

        def descriptor(backend: DisplayBackend) -> InvocationDescriptor:
            return InvocationDescriptor(
                backend=backend,
                image="tty-doc",
                network_mode="host",
                environment=(),
                mounts=(),
                command=("/usr/local/bin/tty_doc", "/app/x.txt"),
            )

        result = ControllerResult(
            outcome=LaunchOutcome.failed(4),
            attempts=(descriptor(DisplayBackend.WAYLAND), descriptor(DisplayBackend.X11)),
            states=(ControllerState.INIT, ControllerState.FAILED),
        )
        assert result.exit_code == 4
        assert result.backends == (DisplayBackend.WAYLAND, DisplayBackend.X11)


class TestInvocationDescriptor:
    """Test InvocationDescriptor accessors"""

    def test_executable_and_arguments(self):
        """Test command splits into executable and arguments"""
        descriptor = InvocationDescriptor(
            backend=DisplayBackend.X11,
            image="tty-doc",
            network_mode="host",
            environment=(("DISPLAY", ":0"),),
            mounts=(),
            command=("/usr/local/bin/tty_doc", "/app/x.txt"),
        )
        assert descriptor.executable == "/usr/local/bin/tty_doc"
        assert descriptor.arguments == ("/app/x.txt",)
