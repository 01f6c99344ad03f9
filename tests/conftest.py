import pytest


@pytest.fixture
def data_home(tmp_path, monkeypatch):
    """Point the per-user data directory at a temporary home."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path / ".local" / "share" / "portmap"
