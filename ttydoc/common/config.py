"""Configuration file loading and management"""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


@dataclass
class ContainerConfig:
    """Container runtime and image settings"""
    runtime: str = "docker"
    image: str = "tty-doc"
    executable: str = "/usr/local/bin/tty_doc"
    mount_dir: str = "/app"  # Where the target file appears inside the container
    network: str = "host"
    use_sudo: bool = True
    interactive: bool = True


@dataclass
class DisplayConfig:
    """Host display bridging settings"""
    x11_socket_dir: str = "/tmp/.X11-unix"
    x11_backend_hint: str = "x11"
    grant_x11_access: bool = True
    xhost_grant_target: str = "docker"


@dataclass
class PostRunConfig:
    """Cleanup action run after the viewer exits"""
    command: List[str] = field(default_factory=list)
    timeout_seconds: float = 30.0


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Config:
    """Complete application configuration"""
    container: ContainerConfig = field(default_factory=ContainerConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    post_run: PostRunConfig = field(default_factory=PostRunConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    CONFIG_ENV_VAR = "TTYDOC_CONFIG"

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/ttydoc/config.yml",
        "/etc/ttydoc/config.yml",
    ]

    LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    @staticmethod
    def configFile_find(environ: Optional[Dict[str, str]] = None) -> Optional[Path]:
        """
        Find configuration file, honouring TTYDOC_CONFIG first

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Path to config file, or None if not found

        Raises:
            FileNotFoundError: If TTYDOC_CONFIG names a missing file
        """
        env = os.environ if environ is None else environ
        explicit = env.get(ConfigLoader.CONFIG_ENV_VAR)
        if explicit:
            path = Path(explicit).expanduser().resolve()
            if not path.is_file():
                raise FileNotFoundError(
                    f"{ConfigLoader.CONFIG_ENV_VAR} points to missing file: {path}"
                )
            return path

        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        # An empty file is a valid "use all defaults" config
        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def section_get(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """
        Fetch one optional config section

        Args:
            data: Raw configuration dictionary
            name: Section key

        Returns:
            Section dictionary (empty when absent)

        Raises:
            ValueError: If the section is present but not a mapping
        """
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{name}' must be a dictionary")
        return section

    @staticmethod
    def command_parse(value: Any) -> List[str]:
        """
        Normalize a command given as a string or a list

        Args:
            value: Raw YAML value

        Returns:
            Argument vector (empty when no command is configured)
        """
        if value is None:
            return []
        if isinstance(value, str):
            return shlex.split(value)
        if isinstance(value, list):
            return [str(item) for item in value]
        raise ValueError(f"post_run.command must be a string or list, got {type(value).__name__}")

    @staticmethod
    def flag_parse(section: Dict[str, Any], key: str, default: bool) -> bool:
        """
        Read an on/off setting, accepting only YAML booleans

        A quoted "false" is a non-empty string and would be truthy, so
        strings are rejected instead of coerced.

        Args:
            section: Raw section dictionary
            key: Setting name
            default: Value used when the key is absent

        Returns:
            Parsed flag

        Raises:
            ValueError: If the value is not true or false
        """
        value = section.get(key, default)
        if not isinstance(value, bool):
            raise ValueError(f"Config key '{key}' must be true or false, got {value!r}")
        return value

    @staticmethod
    def level_parse(value: Any) -> str:
        """
        Validate a logging level name

        Args:
            value: Raw YAML value

        Returns:
            Upper-case level name

        Raises:
            ValueError: If the value is not a known level name
        """
        if not isinstance(value, str) or value.upper() not in ConfigLoader.LOG_LEVELS:
            levels = ", ".join(ConfigLoader.LOG_LEVELS)
            raise ValueError(f"logging.level must be one of {levels}, got {value!r}")
        return value.upper()

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Every key is optional; missing keys keep their dataclass defaults.

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            ValueError: If a flag is not a boolean or the log level is unknown
        """
        container_defaults = ContainerConfig()
        container_data = ConfigLoader.section_get(data, "container")
        container = ContainerConfig(
            runtime=container_data.get("runtime", container_defaults.runtime),
            image=container_data.get("image", container_defaults.image),
            executable=container_data.get("executable", container_defaults.executable),
            mount_dir=container_data.get("mount_dir", container_defaults.mount_dir),
            network=container_data.get("network", container_defaults.network),
            use_sudo=ConfigLoader.flag_parse(
                container_data, "use_sudo", container_defaults.use_sudo
            ),
            interactive=ConfigLoader.flag_parse(
                container_data, "interactive", container_defaults.interactive
            ),
        )

        display_defaults = DisplayConfig()
        display_data = ConfigLoader.section_get(data, "display")
        display = DisplayConfig(
            x11_socket_dir=display_data.get("x11_socket_dir", display_defaults.x11_socket_dir),
            x11_backend_hint=display_data.get(
                "x11_backend_hint", display_defaults.x11_backend_hint
            ),
            grant_x11_access=ConfigLoader.flag_parse(
                display_data, "grant_x11_access", display_defaults.grant_x11_access
            ),
            xhost_grant_target=display_data.get(
                "xhost_grant_target", display_defaults.xhost_grant_target
            ),
        )

        post_run_defaults = PostRunConfig()
        post_run_data = ConfigLoader.section_get(data, "post_run")
        post_run = PostRunConfig(
            command=ConfigLoader.command_parse(post_run_data.get("command")),
            timeout_seconds=float(
                post_run_data.get("timeout_seconds", post_run_defaults.timeout_seconds)
            ),
        )

        logging_defaults = LoggingConfig()
        logging_data = ConfigLoader.section_get(data, "logging")
        logging = LoggingConfig(
            level=ConfigLoader.level_parse(logging_data.get("level", logging_defaults.level)),
            file=logging_data.get("file"),
            format=logging_data.get("format", logging_defaults.format),
        )

        return Config(
            container=container,
            display=display,
            post_run=post_run,
            logging=logging,
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard
                locations and falls back to built-in defaults.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If an explicitly requested config file is missing
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                return Config()

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)
