"""
Configuration module for secret-sync.

Values are layered in this order (later wins):
1. defaults.yaml shipped with the package
2. the workspace startup.conf (STARTUP_VERBOSITY only)
3. environment variables
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import dotenv_values

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

DEFAULT_WORKSPACE = "/workspace"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section, {})
    return section_defaults.get(key, fallback)


class Verbosity(str, Enum):
    """Report verbosity levels."""

    QUIET = "quiet"
    SUMMARY = "summary"
    VERBOSE = "verbose"

    @classmethod
    def parse(cls, value: str | None) -> "Verbosity":
        """
        Parse a verbosity setting.

        "default", empty and unknown values all map to VERBOSE.
        """
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        if normalized and normalized != "default":
            logger.debug(f"Unknown verbosity '{value}', using verbose")
        return cls.VERBOSE

    @staticmethod
    def is_default_setting(value: str | None) -> bool:
        """True for an unset, empty or "default" setting."""
        return (value or "").strip().lower() in ("", "default")


@dataclass
class PathsConfig:
    """Workspace-relative locations of the files the checker reads."""

    claude_settings: str = field(
        default_factory=lambda: _get_default("paths", "claude_settings", ".claude/settings.json")
    )
    devcontainer_compose: str = field(
        default_factory=lambda: _get_default(
            "paths", "devcontainer_compose", ".devcontainer/docker-compose.yml"
        )
    )
    cli_compose: str = field(
        default_factory=lambda: _get_default(
            "paths", "cli_compose", "cli_sandbox/docker-compose.yml"
        )
    )
    sync_ignore: str = field(
        default_factory=lambda: _get_default("paths", "sync_ignore", ".sandbox/config/sync-ignore")
    )
    startup_config: str = field(
        default_factory=lambda: _get_default(
            "paths", "startup_config", ".sandbox/config/startup.conf"
        )
    )


@dataclass
class ScanConfig:
    """Configuration for pattern discovery and filesystem expansion."""

    ai_ignore_files: list[str] = field(
        default_factory=lambda: list(
            _get_default("scan", "ai_ignore_files", [".aiexclude", ".geminiignore"])
        )
    )
    ignored_dirs: list[str] = field(
        default_factory=lambda: list(
            _get_default("scan", "ignored_dirs", ["node_modules", ".git", ".sandbox"])
        )
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class SyncConfig:
    """Main configuration for a secret-sync run."""

    workspace: Path = field(default_factory=lambda: Path(DEFAULT_WORKSPACE))
    sandbox_env: str = ""
    verbosity: Verbosity = Verbosity.VERBOSE
    verbosity_setting: str = ""
    language: str = "en"
    paths: PathsConfig = field(default_factory=PathsConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def is_cli_sandbox(self) -> bool:
        return self.sandbox_env.startswith("cli_")

    @property
    def settings_path(self) -> Path:
        return self.workspace / self.paths.claude_settings

    @property
    def devcontainer_compose_path(self) -> Path:
        return self.workspace / self.paths.devcontainer_compose

    @property
    def cli_compose_path(self) -> Path:
        return self.workspace / self.paths.cli_compose

    @property
    def compose_path(self) -> Path:
        """Compose file for the current environment, chosen by SANDBOX_ENV."""
        if self.is_cli_sandbox:
            return self.cli_compose_path
        return self.devcontainer_compose_path

    @property
    def sync_ignore_path(self) -> Path:
        return self.workspace / self.paths.sync_ignore

    @property
    def startup_config_path(self) -> Path:
        return self.workspace / self.paths.startup_config

    @property
    def compare_verbosity(self) -> Verbosity:
        """
        Verbosity for the compose comparison.

        Unlike the check, the comparison prints its one-line summary when
        no verbosity was chosen.
        """
        if Verbosity.is_default_setting(self.verbosity_setting):
            return Verbosity.SUMMARY
        return self.verbosity

    @property
    def title_gap(self) -> bool:
        """Title banners get a trailing blank line only when verbose was chosen explicitly."""
        return self.verbosity_setting.strip().lower() == Verbosity.VERBOSE.value

    def set_verbosity(self, value: str) -> None:
        self.verbosity_setting = value
        self.verbosity = Verbosity.parse(value)

    def load_startup_config(self) -> "SyncConfig":
        """
        Read STARTUP_VERBOSITY from the workspace startup.conf if present.

        The file uses shell KEY=VALUE syntax. Unreadable files are logged
        and skipped.

        Returns:
            Self with the file's values applied
        """
        path = self.startup_config_path
        if not path.is_file():
            logger.debug(f"Startup config not found: {path}")
            return self

        try:
            values = dotenv_values(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Error reading startup config {path}: {e}")
            return self

        verbosity = values.get("STARTUP_VERBOSITY")
        if verbosity:
            self.set_verbosity(verbosity)

        return self

    def apply_env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> "SyncConfig":
        """
        Apply environment variable overrides to the configuration.

        Recognized variables:
            - SANDBOX_ENV
            - STARTUP_VERBOSITY
            - LANG / LC_ALL (ja_JP* selects Japanese messages)
            - SECRET_SYNC_LOG_LEVEL

        WORKSPACE is resolved by load_config() since it decides where
        startup.conf lives.

        Returns:
            Self with environment overrides applied
        """
        env = os.environ if environ is None else environ

        if "SANDBOX_ENV" in env:
            self.sandbox_env = env["SANDBOX_ENV"]

        if env.get("STARTUP_VERBOSITY"):
            self.set_verbosity(env["STARTUP_VERBOSITY"])

        self.language = _detect_language(env)

        log_level = env.get("SECRET_SYNC_LOG_LEVEL")
        if log_level:
            self.logging.level = log_level.upper()

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        data = asdict(self)
        data["workspace"] = str(self.workspace)
        data["verbosity"] = self.verbosity.value
        return data


def _detect_language(env: Mapping[str, str]) -> str:
    """Return 'ja' when LANG or LC_ALL selects a Japanese locale."""
    for var in ("LANG", "LC_ALL"):
        if env.get(var, "").startswith("ja_JP"):
            return "ja"
    return "en"


def load_config(environ: Optional[Mapping[str, str]] = None) -> SyncConfig:
    """
    Load configuration for a run.

    Args:
        environ: Environment mapping to read. Defaults to os.environ.

    Returns:
        SyncConfig instance
    """
    env = os.environ if environ is None else environ

    workspace = Path(env.get("WORKSPACE") or DEFAULT_WORKSPACE).absolute()
    config = SyncConfig(workspace=workspace)
    config.load_startup_config()
    config.apply_env_overrides(env)

    return config
