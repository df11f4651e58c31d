"""Configuration data models for doc snippet runs."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class UnknownLanguageMode(str, Enum):
    """What to do with a block whose language has no runner."""
    SKIP = "skip"
    FAIL = "fail"


VALID_UNKNOWN_LANGUAGE_MODES = {e.value for e in UnknownLanguageMode}

# A runner entry is either a command string or {command, extension}.
RunnerSpec = Union[str, dict[str, str]]


@dataclass
class HookConfig:
    """Setup and teardown commands run around the block sequence."""
    setup: Optional[str] = None
    teardown: Optional[str] = None


@dataclass
class Config:
    """Resolved configuration consumed by discovery and the executor."""
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    timeout: float = 20.0
    unknown_language: UnknownLanguageMode = UnknownLanguageMode.SKIP
    runners: dict[str, RunnerSpec] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)
    hooks: HookConfig = field(default_factory=HookConfig)

    @property
    def fails_on_unknown(self) -> bool:
        return self.unknown_language == UnknownLanguageMode.FAIL


@dataclass
class LoadedConfig:
    """A Config together with where it was loaded from."""
    config: Config
    root_dir: Path
    config_path: Optional[Path] = None
