"""Per-block temporary workspace.

Each runnable block gets a script file in the shared temp root and an
exclusive ``block-<id>`` directory. Both are removed when the block finishes,
whatever the outcome.
"""

import contextlib
import logging
import shutil
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)

TEMP_ROOT_PREFIX = "doctest-"


@dataclass
class BlockWorkspace:
    """Paths reserved for one block execution."""
    block_id: str
    script_path: Path
    temp_dir: Path


def create_temp_root() -> Path:
    """Create the shared temp root for a run."""
    return Path(tempfile.mkdtemp(prefix=TEMP_ROOT_PREFIX))


@contextlib.contextmanager
def block_workspace(
    temp_root: Union[str, Path],
    lang: str,
    extension: str,
) -> Iterator[BlockWorkspace]:
    """Reserve a script path and create a private temp dir for a block.

    The script file itself is written by the caller. On exit both are
    removed; cleanup errors are swallowed.
    """
    temp_root = Path(temp_root)
    block_id = uuid.uuid4().hex
    workspace = BlockWorkspace(
        block_id=block_id,
        script_path=temp_root / f"{lang}-{block_id}{extension}",
        temp_dir=temp_root / f"block-{block_id}",
    )
    try:
        workspace.temp_dir.mkdir(parents=True, exist_ok=False)
        yield workspace
    finally:
        cleanup(workspace.script_path, workspace.temp_dir)


def cleanup(script_path: Path, temp_dir: Path) -> None:
    """Best-effort removal of a block's script file and temp dir."""
    with contextlib.suppress(OSError):
        script_path.unlink(missing_ok=True)
    with contextlib.suppress(OSError):
        shutil.rmtree(temp_dir)
    logger.debug("Cleaned up %s and %s", script_path, temp_dir)
