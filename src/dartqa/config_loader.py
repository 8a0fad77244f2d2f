# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import Config
from .errors import ConfigError

PROJECT_CONFIG_NAME: Final[str] = ".dartqa.toml"
USER_CONFIG_RELATIVE: Final[Path] = Path(".config") / "dartqa" / "config.toml"
_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class TomlConfigSource:
    """Load configuration data from a TOML document."""

    def __init__(self, path: Path, *, env: Mapping[str, str] | None = None) -> None:
        self.path = path
        self._env = env if env is not None else os.environ

    def load(self) -> dict[str, Any]:
        """Return the parsed document, or an empty mapping when the file is absent.

        Raises:
            ConfigError: If the document cannot be read or parsed.
        """

        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Unable to read configuration at {self.path}: {exc}") from exc
        return _expand_env(data, self._env)


def default_sources(root: Path, *, home: Path | None = None) -> list[TomlConfigSource]:
    """Return the user and project configuration sources, lowest precedence first."""

    user_home = home if home is not None else Path.home()
    return [
        TomlConfigSource(user_home / USER_CONFIG_RELATIVE),
        TomlConfigSource(root / PROJECT_CONFIG_NAME),
    ]


def load_config(
    root: Path,
    *,
    config_path: Path | None = None,
    home: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Build a :class:`Config` from defaults, TOML files and explicit overrides.

    Args:
        root: Analysis root searched for ``.dartqa.toml``.
        config_path: Explicit configuration file replacing the project file.
        home: Home directory override used to locate the user configuration.
        overrides: Nested mapping applied last (for example CLI flags).

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If any source is unreadable or the merged data is invalid.
    """

    sources: Sequence[TomlConfigSource] = default_sources(root, home=home)
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Configuration file {config_path} does not exist")
        sources = [sources[0], TomlConfigSource(config_path)]
    merged: dict[str, Any] = {}
    for source in sources:
        merged = _deep_merge(merged, source.load())
    if overrides:
        merged = _deep_merge(merged, overrides)
    try:
        return Config.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "PROJECT_CONFIG_NAME",
    "USER_CONFIG_RELATIVE",
    "TomlConfigSource",
    "default_sources",
    "load_config",
]
