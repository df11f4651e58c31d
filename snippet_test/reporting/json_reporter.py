"""JSON report generator for doc snippet runs.

Generates structured JSON reports from execution results.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from ..runner.executor import ExecutionResult
from ..runner.result_collector import summarize


class JsonReporter:
    """Generates JSON reports from execution results."""

    def generate(
        self,
        results: Sequence[ExecutionResult],
        root_dir: Optional[Union[str, Path]] = None,
        duration_ms: int = 0,
    ) -> dict[str, Any]:
        """Generate a JSON report from execution results.

        Args:
            results: Ordered results (hook results first).
            root_dir: Project root; document paths are reported relative to it.
            duration_ms: Wall time of the whole run.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        summary = summarize(results)

        report = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "status": "passed" if summary.success else "failed",
            "summary": {
                **summary.to_dict(),
                "duration_ms": duration_ms,
            },
            "results": [self._result_entry(r, root_dir) for r in results],
        }

        return report

    def _result_entry(
        self,
        result: ExecutionResult,
        root_dir: Optional[Union[str, Path]],
    ) -> dict[str, Any]:
        block = result.block
        return {
            "file": block.file_path if result.is_hook else _relative(block.file_path, root_dir),
            "line": block.start_line,
            "lang": block.lang,
            "status": result.status.value,
            "exit_code": result.exit_code,
            "reason": result.reason,
            "duration_ms": result.duration_ms,
            "stdout": result.stdout,
            "stderr": result.stderr,
        }

    def save(self, report: dict[str, Any], path: Union[str, Path]) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        """Convert report to JSON string."""
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_flow_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate a compact machine-readable summary.

        Shape:
        {
            "success": bool,
            "command": "doctest",
            "data": { ... },
            "message": str
        }
        """
        summary = report["summary"]
        all_passed = report["status"] == "passed"

        data: dict[str, Any] = {
            "total_blocks": summary["total"],
            "passed": summary["passed"],
            "failed": summary["failed"],
            "skipped": summary["skipped"],
            "timed_out": summary["timed_out"],
            "duration_ms": summary["duration_ms"],
        }

        if report_path:
            data["report_path"] = report_path

        if all_passed:
            message = "All blocks passed"
        else:
            broken = summary["failed"] + summary["timed_out"]
            message = f"{broken} of {summary['total']} blocks failed"

        return {
            "success": all_passed,
            "command": "doctest",
            "data": data,
            "message": message,
        }


def _relative(file_path: str, root_dir: Optional[Union[str, Path]]) -> str:
    if not root_dir:
        return file_path
    try:
        return os.path.relpath(file_path, root_dir)
    except ValueError:
        return file_path
