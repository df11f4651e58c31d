"""Config module - configuration loading and defaults."""

from .schema import (
    Config,
    HookConfig,
    LoadedConfig,
    RunnerSpec,
    UnknownLanguageMode,
)
from .loader import (
    CONFIG_NAMES,
    default_config,
    find_config,
    load_config,
    merge_config,
)

__all__ = [
    "Config",
    "HookConfig",
    "LoadedConfig",
    "RunnerSpec",
    "UnknownLanguageMode",
    "CONFIG_NAMES",
    "default_config",
    "find_config",
    "load_config",
    "merge_config",
]
