"""Settings and credential loading.

Settings come from three layers, later layers overriding earlier ones:

1. YAML config file (default ~/.config/diffnav/config.yaml, optional)
2. Environment variables (GITHUB_TOKEN, GH_TOKEN)
3. Explicit overrides (CLI flags)

A missing token is not an error; requests are then sent unauthenticated.
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from diffnav.infrastructure.github.client import (
    DEFAULT_API_URL,
    DEFAULT_RAW_URL,
    DEFAULT_TIMEOUT,
)

DEFAULT_CONFIG_PATH = Path("~/.config/diffnav/config.yaml")
DEFAULT_DIFF_COMMAND = ["diff", "-u"]

# Checked in order; the first non-empty value wins
TOKEN_ENV_VARS = ["GITHUB_TOKEN", "GH_TOKEN"]

_KNOWN_KEYS = {"token", "api_url", "raw_url", "diff_command", "timeout"}


class SettingsError(Exception):
    """Raised when the config file cannot be used."""

    pass


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings.

    Attributes:
        token: API token, or None for anonymous access
        api_url: Base URL of the REST API
        raw_url: Base URL of the raw content host
        diff_command: Command run by the external comparison viewer
        timeout: Transport timeout in seconds
    """

    token: str | None = None
    api_url: str = DEFAULT_API_URL
    raw_url: str = DEFAULT_RAW_URL
    diff_command: list[str] = field(default_factory=lambda: list(DEFAULT_DIFF_COMMAND))
    timeout: float = DEFAULT_TIMEOUT

    # ============================================================
    # Factory Methods
    # ============================================================

    @classmethod
    def from_file(cls, path: str | Path) -> Settings:
        """Load settings from a YAML file.

        Args:
            path: Config file path ("~" is expanded). A missing file yields defaults.

        Raises:
            SettingsError: If the file is not valid YAML or not a mapping
        """
        config_path = Path(path).expanduser()
        if not config_path.exists():
            return cls()

        try:
            data = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"Config file {config_path} must contain a mapping")

        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise SettingsError(
                f"Unknown keys in {config_path}: {', '.join(sorted(unknown))}"
            )
        return cls()._with_values(data, source=str(config_path))

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        environ: dict[str, str] | None = None,
        **overrides,
    ) -> Settings:
        """Load settings from file, environment, and explicit overrides.

        Args:
            config_path: Config file path (default: DEFAULT_CONFIG_PATH)
            environ: Environment mapping (default: os.environ)
            **overrides: Explicit values; None values are ignored

        Returns:
            Resolved Settings
        """
        settings = cls.from_file(config_path or DEFAULT_CONFIG_PATH)

        env = os.environ if environ is None else environ
        for name in TOKEN_ENV_VARS:
            if env.get(name):
                settings = replace(settings, token=env[name])
                break

        values = {key: value for key, value in overrides.items() if value is not None}
        return settings._with_values(values, source="overrides")

    # ============================================================
    # Private Methods
    # ============================================================

    def _with_values(self, values: dict, source: str) -> Settings:
        changes: dict = {}
        for key, value in values.items():
            if key == "diff_command":
                changes[key] = _parse_command(value, source)
            elif key == "timeout":
                try:
                    changes[key] = float(value)
                except (TypeError, ValueError) as e:
                    raise SettingsError(f"Invalid timeout in {source}: {value!r}") from e
            elif key in ("token", "api_url", "raw_url"):
                changes[key] = str(value) if value else None
            else:
                raise SettingsError(f"Unknown setting in {source}: {key}")
        if changes.get("api_url") is None:
            changes.pop("api_url", None)
        if changes.get("raw_url") is None:
            changes.pop("raw_url", None)
        return replace(self, **changes)


def _parse_command(value, source: str) -> list[str]:
    if isinstance(value, str):
        command = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(part, str) for part in value):
        command = list(value)
    else:
        raise SettingsError(f"diff_command in {source} must be a string or list of strings")
    if not command:
        raise SettingsError(f"diff_command in {source} must not be empty")
    return command
