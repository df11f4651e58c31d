"""Reporting module - console and JSON reports."""

from .console_reporter import format_report, print_report
from .json_reporter import JsonReporter

__all__ = ["format_report", "print_report", "JsonReporter"]
