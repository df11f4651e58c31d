"""Human-readable console report."""

import os
from pathlib import Path
from typing import Sequence, Union

from ..runner.executor import ExecutionResult
from ..runner.result_collector import summarize


def format_report(results: Sequence[ExecutionResult], root_dir: Union[str, Path]) -> str:
    """Render a summary line plus details for every failed or timed-out result."""
    summary = summarize(results)
    lines = [
        f"Doctest: {summary.total} blocks, {summary.passed} passed, "
        f"{summary.failed} failed, {summary.skipped} skipped, "
        f"{summary.timed_out} timed out"
    ]

    for result in summary.failures:
        block = result.block
        if result.is_hook:
            location = block.file_path
        else:
            location = f"{os.path.relpath(block.file_path, root_dir)}:{block.start_line}"
        lines.append("")
        lines.append(f"{location} [{block.lang or 'unknown'}] {result.status.value}")

        if result.reason:
            lines.append(f"Reason: {result.reason}")

        if result.stdout.strip():
            lines.append("stdout:")
            lines.append(_indent(result.stdout.strip()))

        if result.stderr.strip():
            lines.append("stderr:")
            lines.append(_indent(result.stderr.strip()))

    return "\n".join(lines)


def print_report(results: Sequence[ExecutionResult], root_dir: Union[str, Path]) -> None:
    print(format_report(results, root_dir))


def _indent(value: str) -> str:
    return "\n".join(f"  {line}" for line in value.splitlines())
