from core.models import Document, Habit
from database.backup import BackupManager


def test_backup_missing_user_returns_none(backup_manager):
    assert backup_manager.create_backup("ghost") is None
    assert backup_manager.list_backups("ghost") == []


def test_create_and_restore(store, backup_manager):
    original = Document(habits={"h": Habit(id="h", name="Run")})
    store.save("alice", original)
    path = backup_manager.create_backup("alice")

    store.save("alice", Document())
    assert backup_manager.restore_backup("alice", path.name) is True
    assert store.load("alice") == original


def test_restore_rejects_other_users_backup(store, backup_manager):
    store.save("al", Document())
    store.save("al_x", Document())
    path = backup_manager.create_backup("al_x")

    assert backup_manager.list_backups("al") == []
    assert backup_manager.restore_backup("al", path.name) is False
    assert backup_manager.restore_backup("al_x", "missing.json.gz") is False


def test_old_backups_are_pruned(store, tmp_path):
    manager = BackupManager(store, tmp_path / "pruned", max_backups=2)
    store.save("alice", Document())

    paths = [manager.create_backup("alice") for _ in range(4)]

    names = [b["name"] for b in manager.list_backups("alice")]
    assert names == [paths[3].name, paths[2].name]


def test_backup_all(store, backup_manager):
    store.save("alice", Document())
    store.save("bob", Document())

    assert len(backup_manager.backup_all()) == 2
