"""Code block data model.

Defines the record produced for every fenced code block found in a document.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


SKIP_FLAG = "no-doctest"
WORKDIR_ATTRIBUTE = "workdir"


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block extracted from a document."""
    file_path: str
    start_line: int
    lang: str
    code: str
    meta: str = ""
    flags: frozenset[str] = field(default_factory=frozenset)
    # read-only views, not part of the hash
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    env: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "flags", frozenset(self.flags))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    @property
    def is_skipped(self) -> bool:
        """Whether the block opted out of execution."""
        return SKIP_FLAG in self.flags

    @property
    def workdir(self) -> Optional[str]:
        return self.attributes.get(WORKDIR_ATTRIBUTE)

    @property
    def location(self) -> str:
        return f"{self.file_path}:{self.start_line}"
