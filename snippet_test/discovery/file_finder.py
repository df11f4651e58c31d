"""Document discovery by glob patterns."""

from pathlib import Path
from typing import Iterable, Iterator, Union


def discover_files(
    include: Iterable[str],
    exclude: Iterable[str],
    root_dir: Union[str, Path],
) -> list[Path]:
    """Find documents under a root directory.

    Args:
        include: Glob patterns (``**`` recursive) relative to root_dir, or
            absolute patterns.
        exclude: Glob patterns; a matched file is dropped, and a matched
            directory drops everything beneath it.
        root_dir: Directory relative patterns are resolved against.

    Returns:
        Sorted, de-duplicated absolute file paths.
    """
    root = Path(root_dir).resolve()

    included: set[Path] = set()
    for pattern in include:
        for match in _glob(root, pattern):
            if match.is_file():
                included.add(match.resolve())

    excluded_files: set[Path] = set()
    excluded_dirs: set[Path] = set()
    for pattern in exclude:
        for match in _glob(root, pattern):
            if match.is_dir():
                excluded_dirs.add(match.resolve())
            else:
                excluded_files.add(match.resolve())

    return sorted(
        path for path in included
        if path not in excluded_files and not _is_under(path, excluded_dirs)
    )


def _glob(root: Path, pattern: str) -> Iterator[Path]:
    """Glob a pattern against root; absolute patterns glob from their anchor."""
    path = Path(pattern)
    if not path.is_absolute():
        return root.glob(pattern)
    anchor = Path(path.anchor)
    relative = path.relative_to(anchor)
    if not relative.parts:
        return iter([anchor])
    return anchor.glob(str(relative))


def _is_under(path: Path, directories: set[Path]) -> bool:
    return any(parent in directories for parent in path.parents)
