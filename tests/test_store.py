import json

import pytest

from core.models import Document, Entry, Goal, Habit
from database.storage import FileStorage, MemoryStorage, StorageWriteError
from database.store import DataStore


class FullStorage(MemoryStorage):
    """Хранилище, в которое нельзя писать (как при исчерпанной квоте)"""

    def set_item(self, key, value):
        raise StorageWriteError("quota exceeded")


def sample_document() -> Document:
    return Document(
        habits={"h1": Habit(id="h1", name="Run", color="#06b6d4")},
        entries={
            "2025-06-01": Entry(notes="Привет", completed={"h1": True}),
            "2025-06-02": Entry(notes="", completed={"orphan": True}),
        },
        goals={"2025-06": [Goal(id="g1", title="Active days", target=20)]}
    )


def test_storage_key(store):
    assert store.storage_key("alice") == "healthtracker:alice"


def test_load_missing_user_returns_empty_document(store):
    assert store.load("nobody") == Document()
    assert store.get_stats()["error_count"] == 0


@pytest.mark.parametrize("store_fixture", ["store", "file_store"])
def test_save_then_load_returns_equal_document(request, store_fixture):
    data_store = request.getfixturevalue(store_fixture)
    document = sample_document()

    data_store.save("alice", document)

    assert data_store.load("alice") == document


def test_save_replaces_previous_snapshot(store):
    store.save("alice", sample_document())
    store.save("alice", Document())

    assert store.load("alice") == Document()


def test_save_writes_json_document_under_key(store, memory_storage):
    store.save("alice", sample_document())

    raw = memory_storage.get_item("healthtracker:alice")
    assert json.loads(raw) == sample_document().to_dict()


@pytest.mark.parametrize("blob", ["{not json", "[1, 2, 3]", '{"habits": {"h": 1}}', "null"])
def test_corrupted_blob_yields_empty_document_and_reports(memory_storage, blob):
    memory_storage.set_item("healthtracker:alice", blob)
    store = DataStore(memory_storage, key_prefix="healthtracker")
    failures = []
    store.add_load_failure_callback(lambda username, error: failures.append(username))

    document = store.load("alice")

    assert document == Document()
    assert failures == ["alice"]
    assert store.get_stats()["error_count"] == 1
    # Повреждённый снимок не перезаписывается при чтении
    assert memory_storage.get_item("healthtracker:alice") == blob


def test_failing_load_callback_does_not_break_load(memory_storage):
    memory_storage.set_item("healthtracker:alice", "{")
    store = DataStore(memory_storage, key_prefix="healthtracker")

    def broken(username, error):
        raise RuntimeError("boom")

    store.add_load_failure_callback(broken)
    assert store.load("alice") == Document()


def test_write_failure_is_raised_to_caller():
    store = DataStore(FullStorage(), key_prefix="healthtracker")

    with pytest.raises(StorageWriteError):
        store.save("alice", sample_document())

    assert store.get_stats()["error_count"] == 1
    assert store.get_stats()["save_count"] == 0


def test_exists_delete_and_list_usernames(store, memory_storage):
    memory_storage.set_item("other-app:zed", "{}")
    store.save("bob", Document())
    store.save("alice", Document())

    assert store.exists("alice")
    assert store.list_usernames() == ["alice", "bob"]

    assert store.delete("alice") is True
    assert store.delete("alice") is False
    assert not store.exists("alice")
    assert store.list_usernames() == ["bob"]


def test_file_storage_escapes_keys_and_leaves_no_temp_files(tmp_path):
    storage = FileStorage(tmp_path / "data")
    storage.set_item("healthtracker:a/b c", "{}")

    files = [p.name for p in (tmp_path / "data").iterdir()]
    assert files == ["healthtracker%3Aa%2Fb%20c.json"]
    assert storage.keys() == ["healthtracker:a/b c"]
    assert storage.get_item("healthtracker:a/b c") == "{}"
    assert storage.get_item("healthtracker:missing") is None


def test_file_storage_keys_without_directory(tmp_path):
    assert FileStorage(tmp_path / "absent").keys() == []


def test_unreadable_file_counts_as_existing_and_loads_empty(file_store):
    failures = []
    file_store.add_load_failure_callback(lambda username, error: failures.append(username))
    path = file_store.storage.path_for(file_store.storage_key("bob"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\xff\xfe\x00garbage")

    assert file_store.exists("bob") is True
    assert file_store.load("bob") == Document()
    assert failures == ["bob"]
