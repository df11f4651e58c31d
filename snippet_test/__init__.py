"""Run the fenced code examples in documentation and report what breaks."""

from .blocks import CodeBlock, extract_blocks, extract_file
from .config import Config, HookConfig, UnknownLanguageMode, load_config, merge_config
from .discovery import discover_files
from .runner import (
    BlockExecutor,
    BlockStatus,
    ExecutionResult,
    HookResult,
    RunOptions,
    is_success,
    run_blocks,
)

__version__ = "0.1.0"

__all__ = [
    "CodeBlock",
    "extract_blocks",
    "extract_file",
    "Config",
    "HookConfig",
    "UnknownLanguageMode",
    "load_config",
    "merge_config",
    "discover_files",
    "BlockExecutor",
    "BlockStatus",
    "ExecutionResult",
    "HookResult",
    "RunOptions",
    "is_success",
    "run_blocks",
]
