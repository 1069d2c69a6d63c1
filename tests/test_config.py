import pytest

from config import TrackerConfig


def test_default_habit_color_from_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_HABIT_COLOR", "#4ade80")

    assert TrackerConfig().tracker.default_habit_color == "#4ade80"


def test_invalid_default_habit_color_rejected(monkeypatch):
    monkeypatch.setenv("DEFAULT_HABIT_COLOR", "teal")

    with pytest.raises(ValueError, match="DEFAULT_HABIT_COLOR"):
        TrackerConfig()
