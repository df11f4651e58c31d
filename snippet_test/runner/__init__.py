"""Runner module - block execution."""

from .executor import (
    ENV_FILE,
    ENV_ROOT,
    ENV_TMP,
    ENV_WORKDIR,
    BlockExecutor,
    BlockStatus,
    ExecutionResult,
    HookResult,
    RunOptions,
    hook_block,
    is_success,
    run_blocks,
    run_hook,
)
from .process import ProcessOutcome, run_process, split_command
from .result_collector import RunSummary, summarize
from .runners import (
    LANGUAGE_EXTENSIONS,
    WRAP_STRATEGIES,
    NvimLuaWrap,
    Runner,
    WrapStrategy,
    extension_for_lang,
    resolve_runner,
)
from .workspace import BlockWorkspace, block_workspace, create_temp_root

__all__ = [
    "ENV_FILE",
    "ENV_ROOT",
    "ENV_TMP",
    "ENV_WORKDIR",
    "BlockExecutor",
    "BlockStatus",
    "ExecutionResult",
    "HookResult",
    "RunOptions",
    "hook_block",
    "is_success",
    "run_blocks",
    "run_hook",
    "ProcessOutcome",
    "run_process",
    "split_command",
    "RunSummary",
    "summarize",
    "LANGUAGE_EXTENSIONS",
    "WRAP_STRATEGIES",
    "NvimLuaWrap",
    "Runner",
    "WrapStrategy",
    "extension_for_lang",
    "resolve_runner",
    "BlockWorkspace",
    "block_workspace",
    "create_temp_root",
]
