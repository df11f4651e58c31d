"""Blocks module - fenced code block extraction."""

from .schema import SKIP_FLAG, WORKDIR_ATTRIBUTE, CodeBlock
from .parser import extract_blocks, extract_file, parse_fence_info, parse_meta

__all__ = [
    "SKIP_FLAG",
    "WORKDIR_ATTRIBUTE",
    "CodeBlock",
    "extract_blocks",
    "extract_file",
    "parse_fence_info",
    "parse_meta",
]
