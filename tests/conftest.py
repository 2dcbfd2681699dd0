"""
Shared pytest fixtures for boardstore tests
"""
import json

import pytest

from boardstore.core.boards import open_store


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Isolated per-install data directory"""
    path = tmp_path / "data"
    monkeypatch.setenv("BOARDSTORE_DATA_DIR", str(path))
    return path


@pytest.fixture
def boards_dir(data_dir):
    """The boards/ directory holding the database and legacy files"""
    path = data_dir / "boards"
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def store(data_dir):
    """An open board store on a fresh database"""
    with open_store(data_dir) as opened:
        yield opened


@pytest.fixture
def write_json():
    """Write a JSON payload to a path and return the path"""

    def _write(path, payload):
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
