"""CLI entry point for snippet-test.

Invoked as:
    snippet-test [FILES]... [options]
    python -m snippet_test.cli [FILES]... [options]
"""

import logging
import shutil
import sys
import time
from pathlib import Path
from typing import Optional

import click

from .blocks.parser import extract_file
from .config.loader import load_config
from .config.schema import UnknownLanguageMode
from .discovery.file_finder import discover_files
from .reporting.console_reporter import print_report
from .reporting.json_reporter import JsonReporter
from .runner.executor import RunOptions, run_blocks
from .runner.result_collector import summarize
from .runner.workspace import create_temp_root

EXIT_FAILURES = 1
EXIT_CONFIG_ERROR = 2


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1)
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Path to doctest.config.toml or doctest.config.yaml.")
@click.option("--files", "file_globs", multiple=True,
              help="Override include globs (repeatable).")
@click.option("--timeout", type=float, default=None,
              help="Per-block timeout in seconds.")
@click.option("--fail-on-unknown", is_flag=True,
              help="Treat unknown languages as failures.")
@click.option("--json", "as_json", is_flag=True,
              help="Print a JSON summary instead of the text report.")
@click.option("--save-report", type=click.Path(dir_okay=False),
              help="Write the full JSON report to this path.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(
    files: tuple[str, ...],
    config_path: Optional[str],
    file_globs: tuple[str, ...],
    timeout: Optional[float],
    fail_on_unknown: bool,
    as_json: bool,
    save_report: Optional[str],
    verbose: bool,
):
    """Run the fenced code blocks found in documentation files.

    FILES are glob patterns; when given they replace the configured include
    patterns and disable the exclude patterns.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        loaded = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    config = loaded.config
    root_dir = loaded.root_dir

    if timeout is not None:
        config.timeout = timeout
    if fail_on_unknown:
        config.unknown_language = UnknownLanguageMode.FAIL

    patterns = [*files, *file_globs]
    include = patterns or config.include
    exclude = [] if patterns else config.exclude
    documents = discover_files(include, exclude, root_dir)

    if not documents:
        click.echo("Doctest: no files matched")
        return

    blocks = []
    for document in documents:
        blocks.extend(extract_file(document))

    start_time = time.time()
    temp_root = create_temp_root()
    try:
        results = run_blocks(blocks, RunOptions(root_dir=root_dir, config=config, temp_dir=temp_root))
    finally:
        shutil.rmtree(temp_root, ignore_errors=True)
    duration_ms = int((time.time() - start_time) * 1000)

    reporter = JsonReporter()
    report_path = None
    if save_report or as_json:
        report = reporter.generate(results, root_dir=root_dir, duration_ms=duration_ms)
        if save_report:
            report_path = str(reporter.save(report, Path(save_report)))

    if as_json:
        click.echo(reporter.to_json_string(reporter.generate_flow_output(report, report_path)))
    else:
        print_report(results, root_dir)
        if report_path:
            click.echo(f"Report saved: {report_path}")

    if not summarize(results).success:
        sys.exit(EXIT_FAILURES)


if __name__ == "__main__":
    main()
