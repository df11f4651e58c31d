"""Result collector for doc snippet runs.

Aggregates execution results into per-status counts.
"""

from dataclasses import dataclass, field
from typing import Iterable

from .executor import BlockStatus, ExecutionResult


@dataclass
class RunSummary:
    """Aggregated counts over a run's results."""
    results: list[ExecutionResult] = field(default_factory=list)

    def count(self, status: BlockStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return self.count(BlockStatus.PASSED)

    @property
    def failed(self) -> int:
        return self.count(BlockStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(BlockStatus.SKIPPED)

    @property
    def timed_out(self) -> int:
        return self.count(BlockStatus.TIMEOUT)

    @property
    def success(self) -> bool:
        """No result failed or timed out."""
        return not any(r.is_failure for r in self.results)

    @property
    def failures(self) -> list[ExecutionResult]:
        return [r for r in self.results if r.is_failure]

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "timed_out": self.timed_out,
        }


def summarize(results: Iterable[ExecutionResult]) -> RunSummary:
    """Collect results into a RunSummary."""
    return RunSummary(results=list(results))
