import io
import json

import pandas as pd
import pytest

from core.models import Document, Entry, Goal, Habit
from services import transfer
from services.transfer import ImportValidationError


def local_document() -> Document:
    return Document(
        habits={
            "h1": Habit(id="h1", name="Run", color="#06b6d4"),
            "h2": Habit(id="h2", name="Read", color="#4ade80"),
        },
        entries={
            "2025-06-01": Entry(notes="A", completed={"h1": True}),
            "2025-06-02": Entry(notes="local only", completed={"h2": True}),
        },
        goals={"2025-06": [Goal(id="g1", title="Local", target=10)]}
    )


def test_export_payload_shape():
    payload = transfer.export_payload("alice", local_document())

    assert payload == {"username": "alice", "data": local_document().to_dict()}
    assert json.loads(transfer.dumps_payload(payload)) == payload
    assert transfer.export_filename("alice") == "alice-healthtracker.json"


def test_replace_round_trip_through_json():
    document = local_document()
    text = transfer.dumps_payload(transfer.export_payload("alice", document))

    result = transfer.import_payload(Document(), transfer.parse_payload(text), transfer.MODE_REPLACE)

    assert result == document


def test_replace_discards_current_document():
    incoming = Document(habits={"h9": Habit(id="h9", name="Swim", color="#000000")})
    payload = transfer.export_payload("bob", incoming)

    assert transfer.import_payload(local_document(), payload, "replace") == incoming


def test_merge_replaces_conflicting_records_wholesale():
    incoming = Document(entries={"2025-06-01": Entry(notes="B", completed={})})
    current = local_document()

    result = transfer.import_payload(current, transfer.export_payload("bob", incoming), "merge")

    assert result.entries["2025-06-01"] == Entry(notes="B", completed={})
    assert result.entries["2025-06-02"] == current.entries["2025-06-02"]
    assert result.habits == current.habits
    assert result.goals == current.goals


def test_merge_replaces_month_goal_list_and_habits_by_key():
    incoming = Document(
        habits={"h1": Habit(id="h1", name="Run far", color="#ff0000"), "h3": Habit(id="h3", name="Yoga")},
        goals={"2025-06": [Goal(id="g2", title="Imported", target=3)], "2025-07": []}
    )

    result = transfer.import_payload(local_document(), transfer.export_payload("bob", incoming), "merge")

    assert result.habits["h1"].name == "Run far"
    assert result.habits["h2"].name == "Read"
    assert "h3" in result.habits
    assert result.goals == {"2025-06": [Goal(id="g2", title="Imported", target=3)], "2025-07": []}


def test_merge_does_not_mutate_inputs():
    current = local_document()
    incoming = Document(entries={"2025-06-01": Entry(notes="B")})
    payload = transfer.export_payload("bob", incoming)

    result = transfer.import_payload(current, payload, "merge")
    result.entries["2025-06-02"].notes = "changed"

    assert current == local_document()


def test_empty_data_object_is_accepted():
    assert transfer.import_payload(local_document(), {"username": "x", "data": {}}, "replace") == Document()


@pytest.mark.parametrize("payload", [
    None,
    [],
    "text",
    {},
    {"data": {}},
    {"username": "", "data": {}},
    {"username": "bob"},
    {"username": "bob", "data": None},
    {"username": "bob", "data": []},
    {"username": "bob", "data": {"entries": {"yesterday": {}}}},
    {"username": "bob", "data": {"habits": {"a": {"id": "b", "name": "Run"}}}},
    {"username": "bob", "data": {"habits": []}},
])
def test_invalid_payload_rejected_and_current_untouched(payload):
    current = local_document()

    for mode in transfer.IMPORT_MODES:
        with pytest.raises(ImportValidationError):
            transfer.import_payload(current, payload, mode)

    assert current == local_document()


def test_unknown_mode_rejected():
    with pytest.raises(ImportValidationError):
        transfer.import_payload(Document(), transfer.export_payload("a", Document()), "append")


@pytest.mark.parametrize("raw", ["{broken", b"\xff\xfe", ""])
def test_parse_payload_rejects_non_json(raw):
    with pytest.raises(ImportValidationError):
        transfer.parse_payload(raw)


def test_export_entries_csv():
    document = local_document()
    document.entries["2025-06-03"] = Entry(notes="rest")
    document.entries["2025-06-04"] = Entry(completed={"deleted": True})

    df = pd.read_csv(io.BytesIO(transfer.export_entries_csv(document)), keep_default_na=False)

    assert list(df.columns) == transfer.CSV_COLUMNS
    assert list(df["date"]) == ["2025-06-01", "2025-06-02", "2025-06-03", "2025-06-04"]
    assert list(df["habit_name"]) == ["Run", "Read", "", ""]
    assert list(df["notes"]) == ["A", "local only", "rest", ""]


def test_export_entries_csv_empty_document():
    content = transfer.export_entries_csv(Document()).decode("utf-8")
    assert content.strip() == ",".join(transfer.CSV_COLUMNS)
