"""Discovery module - document file discovery."""

from .file_finder import discover_files

__all__ = ["discover_files"]
