import os
import sys
from pathlib import Path

import pytest

from snippet_test.config.loader import default_config
from snippet_test.runner.executor import RunOptions

PYTHON_RUNNER = f'"{sys.executable}"'

posix_only = pytest.mark.skipif(os.name == "nt", reason="needs POSIX shell and signals")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    root = tmp_path / "tmp-root"
    root.mkdir()
    return root


@pytest.fixture
def make_options(project: Path, temp_root: Path):
    """Build RunOptions with a python runner and optional config overrides."""

    def _make(**overrides) -> RunOptions:
        config = default_config()
        config.runners = {"python": PYTHON_RUNNER, "sh": "sh -e"}
        config.timeout = 10.0
        for key, value in overrides.items():
            setattr(config, key, value)
        return RunOptions(root_dir=project, config=config, temp_dir=temp_root)

    return _make
