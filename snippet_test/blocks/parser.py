"""Fenced code block parser.

Scans markdown-like documents for backtick or tilde fences and turns each
into a CodeBlock carrying its language, flags, attributes and env overrides.
"""

import re
from pathlib import Path
from typing import Union

from .schema import CodeBlock

OPEN_FENCE_RE = re.compile(r"^(?P<fence>`{3,}|~{3,})\s*(?P<info>.*)$")
LINE_SPLIT_RE = re.compile(r"\r?\n")


def extract_blocks(file_path: Union[str, Path], text: str) -> list[CodeBlock]:
    """Extract every fenced code block from document text.

    A fence left open runs to the end of the document; no error is raised.

    Args:
        file_path: Path of the originating document, recorded on each block.
        text: Raw document text.

    Returns:
        Blocks in document order.
    """
    lines = LINE_SPLIT_RE.split(text)
    blocks: list[CodeBlock] = []
    index = 0

    while index < len(lines):
        match = OPEN_FENCE_RE.match(lines[index])
        if not match:
            index += 1
            continue

        fence = match.group("fence")
        lang, meta = parse_fence_info(match.group("info").strip())
        start_line = index + 1
        close_re = re.compile(rf"^{re.escape(fence[0])}{{{len(fence)},}}\s*$")
        index += 1

        code_lines: list[str] = []
        while index < len(lines):
            line = lines[index]
            index += 1
            if close_re.match(line):
                break
            code_lines.append(line)

        flags, attributes, env = parse_meta(meta)
        blocks.append(CodeBlock(
            file_path=str(file_path),
            start_line=start_line,
            lang=lang,
            code="\n".join(code_lines),
            meta=meta,
            flags=frozenset(flags),
            attributes=attributes,
            env=env,
        ))

    return blocks


def extract_file(file_path: Union[str, Path]) -> list[CodeBlock]:
    """Read a UTF-8 document from disk and extract its blocks."""
    file_path = Path(file_path)
    with open(file_path, "r", encoding="utf-8") as f:
        text = f.read()
    return extract_blocks(file_path, text)


def parse_fence_info(info: str) -> tuple[str, str]:
    """Split a fence info string into (language, meta)."""
    tokens = info.split()
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])


def parse_meta(meta: str) -> tuple[set[str], dict[str, str], dict[str, str]]:
    """Classify meta tokens into flags, attributes and env overrides.

    ``flag`` is a flag, ``key=value`` an attribute and ``env=KEY=VALUE`` an
    environment override. Only the first ``=`` of the token and the first
    ``=`` of an env value act as separators. Later keys overwrite earlier ones.
    """
    flags: set[str] = set()
    attributes: dict[str, str] = {}
    env: dict[str, str] = {}

    for token in meta.split():
        if "=" not in token:
            flags.add(token)
            continue

        key, value = token.split("=", 1)
        key = key.strip()

        if key == "env":
            env_key, _, env_value = value.partition("=")
            if env_key:
                env[env_key] = env_value
            continue

        if key:
            attributes[key] = value

    return flags, attributes, env
