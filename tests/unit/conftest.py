import pytest
from pytest import MonkeyPatch

from tinylinks.dao.memory import ShortURLMemoryDAO


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch, tmp_path) -> None:
    """Run every test as a local process with no configuration file around."""
    monkeypatch.setenv('APP_ENV', 'local')
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    monkeypatch.delenv('CONFIG_FILE', raising=False)
    monkeypatch.delenv('LOG_LEVEL', raising=False)


@pytest.fixture
def dao() -> ShortURLMemoryDAO:
    """Fresh, empty registry per test."""
    return ShortURLMemoryDAO()
