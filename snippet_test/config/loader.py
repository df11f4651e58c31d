"""Configuration loader.

Reads ``doctest.config.toml`` / ``doctest.config.yaml`` and merges it over the
built-in defaults.
"""

import logging
import math
import tomllib
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .schema import (
    Config,
    HookConfig,
    LoadedConfig,
    UnknownLanguageMode,
    VALID_UNKNOWN_LANGUAGE_MODES,
)

logger = logging.getLogger(__name__)

CONFIG_NAMES = (
    "doctest.config.toml",
    "doctest.config.yaml",
    "doctest.config.yml",
)

DEFAULT_INCLUDE = ["**/*.md", "**/*.mdx"]
DEFAULT_EXCLUDE = ["**/node_modules/**", "**/dist/**"]
DEFAULT_TIMEOUT = 20.0
DEFAULT_RUNNERS = {
    "lua": "lua",
    "sh": "/bin/sh -e",
    "bash": "/bin/sh -e",
    "js": "bun",
    "ts": "bun",
    "python": "python3",
    "py": "python3",
}


def default_config() -> Config:
    """Return a fresh Config holding the built-in defaults."""
    return Config(
        include=list(DEFAULT_INCLUDE),
        exclude=list(DEFAULT_EXCLUDE),
        timeout=DEFAULT_TIMEOUT,
        unknown_language=UnknownLanguageMode.SKIP,
        runners=dict(DEFAULT_RUNNERS),
        env={},
        hooks=HookConfig(),
    )


def merge_config(parsed: Optional[dict[str, Any]] = None) -> Config:
    """Resolve an override mapping against the defaults.

    Values of the wrong type are ignored (with a warning) and the default is
    kept. ``runners`` and ``env`` replace the defaults wholesale when given.

    Args:
        parsed: Mapping as read from a config file. None = all defaults.

    Returns:
        A new Config.
    """
    config = default_config()
    if not parsed:
        return config

    include = _read_string_list(parsed, "include")
    if include is not None:
        config.include = include

    exclude = _read_string_list(parsed, "exclude")
    if exclude is not None:
        config.exclude = exclude

    timeout = _read_timeout(parsed)
    if timeout is not None:
        config.timeout = timeout

    mode = parsed.get("unknown_language")
    if mode is not None:
        if mode in VALID_UNKNOWN_LANGUAGE_MODES:
            config.unknown_language = UnknownLanguageMode(mode)
        else:
            logger.warning("Ignoring unknown_language=%r (expected skip or fail)", mode)

    runners = _read_runners(parsed.get("runners"))
    if runners is not None:
        config.runners = runners

    env = _read_string_map(parsed, "env")
    if env is not None:
        config.env = env

    config.hooks = _read_hooks(parsed.get("hooks"))
    return config


def find_config(cwd: Union[str, Path]) -> Optional[Path]:
    """Return the first default-named config file in ``cwd``, if any."""
    for name in CONFIG_NAMES:
        candidate = Path(cwd) / name
        if candidate.is_file():
            return candidate
    return None


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    cwd: Optional[Union[str, Path]] = None,
) -> LoadedConfig:
    """Load and merge the configuration file.

    Args:
        config_path: Explicit config file. Relative paths resolve against cwd.
        cwd: Directory to search for a default-named config. Default: os cwd.

    Returns:
        LoadedConfig. Without a config file, defaults rooted at cwd.

    Raises:
        FileNotFoundError: If an explicit config path does not exist.
        ValueError: If the file has an unsupported suffix or is malformed.
    """
    cwd = Path(cwd).resolve() if cwd else Path.cwd()

    if config_path:
        resolved = (cwd / config_path).resolve()
        if not resolved.is_file():
            raise FileNotFoundError(f"Config file not found: {resolved}")
    else:
        resolved = find_config(cwd)

    if resolved is None:
        logger.debug("No config file in %s, using defaults", cwd)
        return LoadedConfig(config=default_config(), root_dir=cwd)

    parsed = _read_config_file(resolved)
    logger.debug("Loaded config from %s", resolved)
    return LoadedConfig(
        config=merge_config(parsed),
        root_dir=resolved.parent,
        config_path=resolved,
    )


def _read_config_file(path: Path) -> dict[str, Any]:
    """Parse a TOML or YAML config file into a mapping."""
    if path.suffix == ".toml":
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e
    elif path.suffix in (".yaml", ".yml"):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    else:
        raise ValueError(f"Expected .toml, .yaml or .yml config, got: {path.suffix}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__} in {path}")
    return data


def _read_string_list(parsed: dict[str, Any], key: str) -> Optional[list[str]]:
    value = parsed.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        logger.warning("Ignoring %s: expected a list of strings", key)
        return None
    return [entry for entry in value if isinstance(entry, str) and entry]


def _read_timeout(parsed: dict[str, Any]) -> Optional[float]:
    """Read ``timeout`` (seconds) or the legacy ``timeout_ms``."""
    if "timeout" in parsed:
        value, scale = parsed["timeout"], 1.0
    elif "timeout_ms" in parsed:
        value, scale = parsed["timeout_ms"], 1000.0
    else:
        return None

    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        logger.warning("Ignoring timeout %r: expected a number", value)
        return None
    return value / scale


def _read_string_map(parsed: dict[str, Any], key: str) -> Optional[dict[str, str]]:
    value = parsed.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        logger.warning("Ignoring %s: expected a mapping", key)
        return None
    return {str(k): v for k, v in value.items() if isinstance(v, str)}


def _read_runners(value: Any) -> Optional[dict[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        logger.warning("Ignoring runners: expected a mapping")
        return None

    runners: dict[str, Any] = {}
    for lang, entry in value.items():
        if isinstance(entry, str):
            runners[str(lang)] = entry
        elif isinstance(entry, dict) and isinstance(entry.get("command"), str):
            runners[str(lang)] = {
                k: v for k, v in entry.items()
                if k in ("command", "extension") and isinstance(v, str)
            }
        else:
            logger.warning("Ignoring runner for %r: expected a command string", lang)
    return runners


def _read_hooks(value: Any) -> HookConfig:
    if not isinstance(value, dict):
        return HookConfig()
    setup = value.get("setup")
    teardown = value.get("teardown")
    return HookConfig(
        setup=setup if isinstance(setup, str) and setup else None,
        teardown=teardown if isinstance(teardown, str) and teardown else None,
    )
