# tests/conftest.py
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def launch_dir(tmp_path: Path, monkeypatch) -> Path:
    # Every test starts (and is restored) outside the repo, with no pinned root
    monkeypatch.delenv("ASSAY_ROOT_DIRECTORY", raising=False)
    launch = tmp_path / "launch"
    launch.mkdir()
    monkeypatch.chdir(launch)
    return launch
