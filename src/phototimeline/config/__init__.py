"""Configuration management for photo-timeline."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .exceptions import ConfigError
from .models import TimelineConfig
from .resolver import ENV_PREFIX, flatten_for_env, parse_env, resolve_with_precedence, set_dotted

DEFAULT_CONFIG_PATH = Path("~/.phototimeline/config.yaml")
STAMP_PREFIX = "# Last updated:"
_HEADER = (
    "# photo-timeline configuration file\n"
    "# Change it with `phototimeline config edit` or `phototimeline config set KEY --value V`.\n"
    f"{STAMP_PREFIX} {{stamp}}\n"
)


class ConfigManager:
    """Read, write and resolve the YAML configuration file.

    Args:
        config_path: File to use instead of ``~/.phototimeline/config.yaml``.
        env: Environment consulted for ``PHOTOTIMELINE__`` overrides; defaults
            to ``os.environ``.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        *,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = os.environ if env is None else env

    def load(
        self,
        *,
        cli_overrides: Optional[Mapping[str, Any]] = None,
        include_env: bool = True,
        ensure_file: bool = True,
        env_overrides: Optional[Mapping[str, str]] = None,
    ) -> TimelineConfig:
        """Return the effective configuration.

        Args:
            cli_overrides: Dotted-key overrides with the highest precedence.
            include_env: Whether environment variables are applied.
            ensure_file: Create the file with defaults when it is missing.
            env_overrides: Environment to use instead of the manager's own.

        Raises:
            ConfigError: If the file or any override is invalid.
        """
        if ensure_file:
            self.ensure_exists()

        env_layer = None
        if include_env:
            env_layer = parse_env(self._env if env_overrides is None else env_overrides)

        return resolve_with_precedence(
            defaults=TimelineConfig(),
            file_overrides=self.load_file_overrides(),
            env_overrides=env_layer,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return the mapping stored in the file, or an empty one when there is none."""
        text = self.read_text()
        try:
            data = yaml.safe_load(text) if text else None
        except yaml.YAMLError as exc:
            raise ConfigError(f"{self.config_path} is not valid YAML: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path} must contain a mapping of sections.")
        return data

    def save(self, config: TimelineConfig | Mapping[str, Any]) -> None:
        """Write ``config`` to the file under a fresh header."""
        if isinstance(config, TimelineConfig):
            data = config.model_dump(mode="python")
        else:
            data = dict(config)
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        text = _HEADER.format(stamp=stamp) + yaml.safe_dump(data, sort_keys=False)
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Unable to write {self.config_path}: {exc}") from exc

    def ensure_exists(self) -> Path:
        if not self.config_path.exists():
            self.save(TimelineConfig())
        return self.config_path

    def read_text(self) -> str:
        try:
            return self.config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except OSError as exc:
            raise ConfigError(f"Unable to read {self.config_path}: {exc}") from exc


__all__ = [
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "STAMP_PREFIX",
    "TimelineConfig",
    "flatten_for_env",
    "resolve_with_precedence",
    "set_dotted",
]
