"""Runtime configuration support for the fundamentals library."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import tomllib

from .errors import ConfigError


class BuildMode(str, Enum):
    """Which runtime checks are evaluated.

    ``debug`` evaluates assertions and preconditions, ``release`` only
    preconditions, and ``unchecked`` neither. ``fatal_error`` always halts.
    """

    DEBUG = "debug"
    RELEASE = "release"
    UNCHECKED = "unchecked"

    def __str__(self) -> str:
        return self.value


# Exit status of a process killed by SIGABRT, as reported by most shells.
DEFAULT_FATAL_EXIT_CODE = 134

_LOG_LEVELS = ("debug", "info", "warning", "warn", "error", "critical")

ENV_BUILD_MODE = "FUNDAMENTALS_BUILD_MODE"
ENV_FATAL_EXIT_CODE = "FUNDAMENTALS_FATAL_EXIT_CODE"
ENV_LOG_LEVEL = "FUNDAMENTALS_LOG_LEVEL"


@dataclass(frozen=True)
class RuntimeConfig:
    """Resolved runtime configuration."""

    build_mode: BuildMode = BuildMode.DEBUG
    fatal_exit_code: int = DEFAULT_FATAL_EXIT_CODE
    log_level: str = "warning"
    source: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def assertions_enabled(self) -> bool:
        return self.build_mode is BuildMode.DEBUG

    @property
    def preconditions_enabled(self) -> bool:
        return self.build_mode is not BuildMode.UNCHECKED

    def describe(self) -> Dict[str, Any]:
        return {
            "build_mode": self.build_mode.value,
            "fatal_exit_code": self.fatal_exit_code,
            "log_level": self.log_level,
            "source": str(self.source) if self.source else None,
        }


def parse_build_mode(value: Any) -> BuildMode:
    if isinstance(value, BuildMode):
        return value
    try:
        return BuildMode(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(mode.value for mode in BuildMode)
        raise ConfigError(
            f"Unknown build mode '{value}'.",
            hint=f"Use one of: {choices}.",
        ) from None


def parse_exit_code(value: Any) -> int:
    try:
        code = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Fatal exit code must be an integer, got '{value}'.") from None
    if not 1 <= code <= 255:
        raise ConfigError(
            f"Fatal exit code {code} is out of range.",
            hint="A fatal exit status must be between 1 and 255.",
        )
    return code


def parse_log_level(value: Any) -> str:
    level = str(value).strip().lower()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level '{value}'.",
            hint=f"Use one of: {', '.join(_LOG_LEVELS)}.",
        )
    return level


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        if path.suffix == ".toml":
            data = _read_toml_config(path)
        else:
            data = _read_json_config(path)
    except OSError as exc:
        raise ConfigError(
            f"Could not read configuration file: {exc.strerror or exc}.",
            path=str(path),
            hint="Check that the file exists and is readable.",
        ) from exc
    except ValueError as exc:
        raise ConfigError(
            f"Configuration file is not valid: {exc}.",
            path=str(path),
            hint="fundamentals.toml must be TOML and .fundamentalsrc must be a JSON object.",
        ) from exc
    if not isinstance(data, Mapping):
        raise ConfigError(
            f"Configuration file must contain a table, got {type(data).__name__}.",
            path=str(path),
            hint="Put settings under a top-level \"runtime\" key.",
        )
    return dict(data)


def _parse_runtime_section(data: Mapping[str, Any]) -> Dict[str, Any]:
    section = data.get("runtime") or {}
    if not isinstance(section, Mapping):
        raise ConfigError("The [runtime] section must be a table.")
    values: Dict[str, Any] = {}
    if section.get("build_mode") is not None:
        values["build_mode"] = parse_build_mode(section["build_mode"])
    if section.get("fatal_exit_code") is not None:
        values["fatal_exit_code"] = parse_exit_code(section["fatal_exit_code"])
    if section.get("log_level") is not None:
        values["log_level"] = parse_log_level(section["log_level"])
    return values


def _parse_environment(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    if environ.get(ENV_BUILD_MODE):
        values["build_mode"] = parse_build_mode(environ[ENV_BUILD_MODE])
    if environ.get(ENV_FATAL_EXIT_CODE):
        values["fatal_exit_code"] = parse_exit_code(environ[ENV_FATAL_EXIT_CODE])
    if environ.get(ENV_LOG_LEVEL):
        values["log_level"] = parse_log_level(environ[ENV_LOG_LEVEL])
    return values


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    candidates = ["fundamentals.toml", ".fundamentalsrc"]
    for candidate in candidates:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_runtime_config(
    root: Optional[Path] = None,
    explicit: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> RuntimeConfig:
    """Resolve configuration from a config file, then the environment.

    Environment variables win over file values so a single run can switch
    build mode without editing the workspace file.
    """

    root = (root or Path.cwd()).resolve()
    environ = os.environ if environ is None else environ
    config_path = locate_config_file(root, explicit)

    data: Dict[str, Any] = {}
    if config_path is not None:
        data = _read_config_file(config_path)

    values = _parse_runtime_section(data)
    values.update(_parse_environment(environ))
    return RuntimeConfig(source=config_path, raw=data, **values)


_ACTIVE_CONFIG: Optional[RuntimeConfig] = None


def get_config() -> RuntimeConfig:
    """Return the process-wide configuration, loading it on first use."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = load_runtime_config()
    return _ACTIVE_CONFIG


def set_config(config: Optional[RuntimeConfig] = None, **overrides: Any) -> RuntimeConfig:
    """Install ``config`` (or the current one with ``overrides``) as active."""

    global _ACTIVE_CONFIG
    base = config if config is not None else get_config()
    if "build_mode" in overrides:
        overrides["build_mode"] = parse_build_mode(overrides["build_mode"])
    if "fatal_exit_code" in overrides:
        overrides["fatal_exit_code"] = parse_exit_code(overrides["fatal_exit_code"])
    if "log_level" in overrides:
        overrides["log_level"] = parse_log_level(overrides["log_level"])
    _ACTIVE_CONFIG = replace(base, **overrides) if overrides else base
    return _ACTIVE_CONFIG


def reset_config() -> None:
    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = None


__all__ = [
    "BuildMode",
    "DEFAULT_FATAL_EXIT_CODE",
    "ENV_BUILD_MODE",
    "ENV_FATAL_EXIT_CODE",
    "ENV_LOG_LEVEL",
    "RuntimeConfig",
    "get_config",
    "load_runtime_config",
    "locate_config_file",
    "parse_build_mode",
    "parse_exit_code",
    "parse_log_level",
    "reset_config",
    "set_config",
]
