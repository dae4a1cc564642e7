import pytest

from spirit11.config import (
    ALL_CATEGORIES,
    INITIAL_BUDGET,
    MAX_TEAM_SIZE,
    Settings,
    get_rules,
    iter_rules,
    normalize_category,
)
from spirit11.config.settings import DEFAULT_DB_PATH, DEFAULT_ROSTER_ATTEMPTS


def test_get_rules_default_league():
    rules = get_rules()
    assert rules.initial_budget == INITIAL_BUDGET == 9_000_000
    assert rules.max_team_size == MAX_TEAM_SIZE == 11
    assert rules.value_step == 50_000
    assert "All-Rounder" in rules.categories


def test_get_rules_lowercase_key():
    assert get_rules("spirit11").key == "SPIRIT11"
    assert [rules.key for rules in iter_rules()] == ["SPIRIT11"]


def test_get_rules_missing_raises():
    with pytest.raises(KeyError):
        get_rules("IPL")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("batsman", "Batsman"),
        ("BOWLER", "Bowler"),
        ("all-rounder", "All-Rounder"),
        ("All Rounder", "All-Rounder"),
        ("allrounder", "All-Rounder"),
        ("ALL", ALL_CATEGORIES),
    ],
)
def test_normalize_category(raw, expected):
    assert normalize_category(raw) == expected


def test_normalize_category_unknown():
    with pytest.raises(ValueError):
        normalize_category("keeper")


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SPIRIT11_DB_PATH", str(tmp_path / "league.sqlite"))
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("SPIRIT11_MAX_ROSTER_ATTEMPTS", "5")
    monkeypatch.delenv("SPIRIT11_ADMIN_TOKEN", raising=False)

    settings = Settings.from_env()
    assert settings.db_path == tmp_path / "league.sqlite"
    assert settings.gemini_api_key == "secret"
    assert settings.max_roster_attempts == 5
    assert settings.admin_token is None


def test_settings_invalid_int_falls_back(monkeypatch, caplog):
    monkeypatch.delenv("SPIRIT11_DB_PATH", raising=False)
    monkeypatch.setenv("SPIRIT11_MAX_ROSTER_ATTEMPTS", "lots")

    with caplog.at_level("WARNING"):
        settings = Settings.from_env()

    assert settings.max_roster_attempts == DEFAULT_ROSTER_ATTEMPTS
    assert settings.db_path == DEFAULT_DB_PATH
    assert "SPIRIT11_MAX_ROSTER_ATTEMPTS" in caplog.text
