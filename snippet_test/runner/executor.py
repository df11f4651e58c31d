"""Block executor - runs extracted code blocks.

Coordinates a full run:
1. Run the setup hook
2. Classify each block (skip flag, missing language, unknown language)
3. Execute runnable blocks one at a time in a private workspace
4. Run the teardown hook
5. Return hook results followed by block results
"""

import logging
import os
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from ..blocks.schema import SKIP_FLAG, CodeBlock
from ..config.schema import Config
from .process import run_process, split_command
from .runners import Runner, resolve_runner
from .workspace import block_workspace

logger = logging.getLogger(__name__)

ENV_ROOT = "DOCTEST_ROOT"
ENV_FILE = "DOCTEST_FILE"
ENV_TMP = "DOCTEST_TMP"
ENV_WORKDIR = "DOCTEST_WORKDIR"

HOOK_LANG = "hook"


class BlockStatus(str, Enum):
    """Terminal outcome of a block or hook."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    TIMEOUT = "timeout"


FAILURE_STATUSES = {BlockStatus.FAILED, BlockStatus.TIMEOUT}


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one block (or one hook invocation)."""
    block: CodeBlock
    status: BlockStatus
    stdout: str = ""
    stderr: str = ""
    exit_code: Optional[int] = None
    reason: Optional[str] = None
    duration_ms: int = 0

    @property
    def is_hook(self) -> bool:
        return self.block.lang == HOOK_LANG

    @property
    def is_failure(self) -> bool:
        return self.status in FAILURE_STATUSES


# Hook results share the block result shape, keyed to a synthetic block.
HookResult = ExecutionResult


@dataclass
class RunOptions:
    """Everything the executor needs besides the blocks."""
    root_dir: Path
    config: Config
    temp_dir: Path
    base_env: dict[str, str] = field(default_factory=lambda: dict(os.environ))

    def __post_init__(self):
        self.root_dir = Path(self.root_dir)
        self.temp_dir = Path(self.temp_dir)


def is_success(results: Iterable[ExecutionResult]) -> bool:
    """True when no result failed or timed out."""
    return not any(r.is_failure for r in results)


class BlockExecutor:
    """Runs a sequence of code blocks with their hooks.

    Blocks run strictly one after another. A failure in one block or hook
    never stops the others; teardown always runs.
    """

    def __init__(self, options: RunOptions):
        """Initialize block executor.

        Args:
            options: Project root, resolved config and shared temp root.
        """
        self.options = options
        self.config = options.config

    def run(self, blocks: Iterable[CodeBlock]) -> list[ExecutionResult]:
        """Execute every block between the setup and teardown hooks.

        Returns:
            Hook results (setup, then teardown) followed by one result per
            block in input order.
        """
        hook_results: list[ExecutionResult] = []
        results: list[ExecutionResult] = []

        setup = run_hook("setup", self.options)
        if setup:
            hook_results.append(setup)

        for block in blocks:
            result = self.run_block(block)
            logger.debug("%s [%s] %s", block.location, block.lang, result.status.value)
            results.append(result)

        teardown = run_hook("teardown", self.options)
        if teardown:
            hook_results.append(teardown)

        return hook_results + results

    def run_block(self, block: CodeBlock) -> ExecutionResult:
        """Classify a block and execute it if it is runnable."""
        if block.is_skipped:
            return ExecutionResult(block=block, status=BlockStatus.SKIPPED, reason=SKIP_FLAG)

        if not block.lang:
            return ExecutionResult(block=block, status=BlockStatus.SKIPPED, reason="missing language")

        runner = resolve_runner(block.lang, self.config.runners)
        if runner is None:
            status = BlockStatus.FAILED if self.config.fails_on_unknown else BlockStatus.SKIPPED
            return ExecutionResult(block=block, status=status, reason="unknown language")

        return self._execute(block, runner)

    def _execute(self, block: CodeBlock, runner: Runner) -> ExecutionResult:
        start_time = time.time()
        workdir = self._resolve_workdir(block)

        try:
            with block_workspace(self.options.temp_dir, block.lang, runner.extension) as workspace:
                with open(workspace.script_path, "w", encoding="utf-8") as f:
                    f.write(runner.build_script(block.code))

                env = {
                    **self.options.base_env,
                    **self.config.env,
                    **block.env,
                    ENV_ROOT: str(self.options.root_dir),
                    ENV_FILE: str(block.file_path),
                    ENV_TMP: str(workspace.temp_dir),
                    ENV_WORKDIR: str(workdir),
                }
                argv = runner.build_command(str(workspace.script_path))
                outcome = run_process(argv, cwd=workdir, env=env, timeout=self.config.timeout)

        except OSError as e:
            logger.debug("Spawn failed for %s: %s", block.location, e)
            return ExecutionResult(
                block=block,
                status=BlockStatus.FAILED,
                stderr=str(e),
                reason="spawn failed",
                duration_ms=_elapsed_ms(start_time),
            )

        duration_ms = _elapsed_ms(start_time)

        if outcome.timed_out:
            status = BlockStatus.TIMEOUT
        elif outcome.exit_code != 0:
            status = BlockStatus.FAILED
        else:
            status = BlockStatus.PASSED

        return ExecutionResult(
            block=block,
            status=status,
            stdout=outcome.stdout,
            stderr=outcome.stderr,
            exit_code=None if outcome.timed_out else outcome.exit_code,
            duration_ms=duration_ms,
        )

    def _resolve_workdir(self, block: CodeBlock) -> Path:
        if block.workdir:
            return (self.options.root_dir / block.workdir).resolve()
        return self.options.root_dir


def run_blocks(blocks: Iterable[CodeBlock], options: RunOptions) -> list[ExecutionResult]:
    """Run blocks with hooks; see BlockExecutor.run."""
    return BlockExecutor(options).run(blocks)


def hook_block(kind: str, command: str) -> CodeBlock:
    """Synthetic block standing in for a setup/teardown command."""
    return CodeBlock(
        file_path=f"{kind}-hook",
        start_line=1,
        lang=HOOK_LANG,
        code=command,
    )


def run_hook(kind: str, options: RunOptions) -> Optional[HookResult]:
    """Run the configured setup or teardown command.

    Runs in the project root with no timeout and no private temp dir.

    Args:
        kind: "setup" or "teardown".
        options: Run options.

    Returns:
        HookResult (passed or failed), or None if no command is configured.
    """
    command = getattr(options.config.hooks, kind)
    if not command or not command.strip():
        return None

    start_time = time.time()
    block = hook_block(kind, command)
    env = {
        **options.base_env,
        **options.config.env,
        ENV_ROOT: str(options.root_dir),
    }

    try:
        outcome = run_process(split_command(command), cwd=options.root_dir, env=env)
    except OSError as e:
        logger.warning("%s hook could not start: %s", kind, e)
        return HookResult(
            block=block,
            status=BlockStatus.FAILED,
            stderr=str(e),
            reason=f"{kind} hook spawn failed",
            duration_ms=_elapsed_ms(start_time),
        )

    if outcome.exit_code != 0:
        logger.warning("%s hook exited with %s", kind, outcome.exit_code)
        status, reason = BlockStatus.FAILED, f"{kind} hook failed"
    else:
        status, reason = BlockStatus.PASSED, f"{kind} hook"

    return HookResult(
        block=block,
        status=status,
        stdout=outcome.stdout,
        stderr=outcome.stderr,
        exit_code=outcome.exit_code,
        reason=reason,
        duration_ms=_elapsed_ms(start_time),
    )


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)
