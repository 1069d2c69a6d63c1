# services/transfer.py

"""
Экспорт и импорт документа пользователя.

Формат файла: {"username": "...", "data": <документ>}.
Импорт в режиме "replace" заменяет документ целиком, в режиме "merge"
объединяет разделы habits/entries/goals по ключам: запись из файла целиком
заменяет локальную запись с тем же ключом, локальные ключи сохраняются.
"""

import json
import logging
from typing import Any, Dict, Union

import pandas as pd

from core.models import Document, ValidationError

logger = logging.getLogger(__name__)

MODE_MERGE = "merge"
MODE_REPLACE = "replace"
IMPORT_MODES = (MODE_MERGE, MODE_REPLACE)

CSV_COLUMNS = ["date", "habit_id", "habit_name", "completed", "notes"]


class ImportValidationError(ValidationError):
    """Файл импорта не соответствует формату"""
    pass


def export_payload(username: str, document: Document) -> Dict[str, Any]:
    return {"username": username, "data": document.to_dict()}


def dumps_payload(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def export_filename(username: str) -> str:
    return f"{username}-healthtracker.json"


def parse_payload(raw: Union[str, bytes]) -> Dict[str, Any]:
    """Разобрать содержимое файла импорта"""
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ImportValidationError(f"Файл не является JSON: {e}") from e


def validate_payload(payload: Any) -> Document:
    """Проверить файл импорта и вернуть документ из него"""
    if not isinstance(payload, dict):
        raise ImportValidationError("Неверный формат файла")

    username = payload.get("username")
    data = payload.get("data")
    if not username or not isinstance(username, str):
        raise ImportValidationError("В файле нет поля username")
    if data is None:
        raise ImportValidationError("В файле нет поля data")

    try:
        return Document.from_dict(data)
    except ValidationError as e:
        raise ImportValidationError(f"Неверный формат данных: {e}") from e


def merge_documents(current: Document, incoming: Document) -> Document:
    """Поверхностное объединение по ключам, входящие записи заменяют локальные целиком"""
    merged = current.copy()
    incoming = incoming.copy()
    merged.habits.update(incoming.habits)
    merged.entries.update(incoming.entries)
    merged.goals.update(incoming.goals)
    return merged


def import_payload(current: Document, payload: Any, mode: str = MODE_MERGE) -> Document:
    """Новый документ после импорта; current не изменяется"""
    if mode not in IMPORT_MODES:
        raise ImportValidationError(f"Неизвестный режим импорта: {mode}")

    incoming = validate_payload(payload)

    if mode == MODE_REPLACE:
        result = incoming
    else:
        result = merge_documents(current, incoming)

    logger.info(
        f"Imported data of '{payload['username']}' in {mode} mode: "
        f"{len(incoming.habits)} habits, {len(incoming.entries)} entries, {len(incoming.goals)} months of goals"
    )
    return result


def export_entries_csv(document: Document) -> bytes:
    """Экспорт отметок в CSV: строка на каждую отметку, пустой день - одна строка"""
    rows = []
    for iso_date in sorted(document.entries):
        entry = document.entries[iso_date]
        if not entry.completed:
            rows.append({"date": iso_date, "habit_id": "", "habit_name": "", "completed": False, "notes": entry.notes})
            continue

        for habit_id, done in entry.completed.items():
            habit = document.habits.get(habit_id)
            rows.append({
                "date": iso_date,
                "habit_id": habit_id,
                "habit_name": habit.name if habit else "",
                "completed": done,
                "notes": entry.notes
            })

    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    return df.to_csv(index=False).encode("utf-8")


__all__ = [
    'MODE_MERGE', 'MODE_REPLACE', 'IMPORT_MODES',
    'ImportValidationError',
    'export_payload', 'dumps_payload', 'export_filename',
    'parse_payload', 'validate_payload', 'merge_documents', 'import_payload',
    'export_entries_csv'
]
