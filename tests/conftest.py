import pytest

from core.models import Session
from database.storage import FileStorage, MemoryStorage
from database.store import DataStore
from database.backup import BackupManager
from services.tracker import HealthTracker


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def store(memory_storage):
    return DataStore(memory_storage, key_prefix="healthtracker")


@pytest.fixture
def file_store(tmp_path):
    return DataStore(FileStorage(tmp_path / "data"), key_prefix="healthtracker")


@pytest.fixture
def session():
    return Session(username="alice")


@pytest.fixture
def backup_manager(store, tmp_path):
    return BackupManager(store, tmp_path / "backups", max_backups=3)


@pytest.fixture
def tracker(store, backup_manager):
    return HealthTracker(store, backup_manager, seed_default_habits=False)


@pytest.fixture
def clock():
    return FakeClock()
