"""Tests for settings loading."""

import json

from typefall.config import CONFIG_ENV, Settings, config_path, load_settings


def _write(tmp_path, data):
    path = tmp_path / "typefall.config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "nope.json") == Settings()


def test_valid_values_are_used(tmp_path):
    path = _write(tmp_path, {
        "game": "falling",
        "content": "quotes",
        "duration_sec": 60,
        "day_night": False,
        "sound": False,
        "log_level": "debug",
    })
    settings = load_settings(path)
    assert settings == Settings(
        game="falling",
        content="quotes",
        duration_sec=60,
        day_night=False,
        sound=False,
        log_level="DEBUG",
    )


def test_invalid_values_fall_back(tmp_path):
    path = _write(tmp_path, {
        "game": "pinball",
        "content": 3,
        "duration_sec": "soon",
        "day_night": "yes",
        "log_level": "LOUD",
    })
    assert load_settings(path) == Settings()


def test_unsupported_duration_falls_back(tmp_path):
    assert load_settings(_write(tmp_path, {"duration_sec": 45})).duration_sec == 30


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == Settings()


def test_non_object_gives_defaults(tmp_path):
    assert load_settings(_write(tmp_path, ["falling"])) == Settings()


def test_env_override(tmp_path, monkeypatch):
    path = _write(tmp_path, {"game": "falling"})
    monkeypatch.setenv(CONFIG_ENV, str(path))
    assert config_path() == path
    assert load_settings().game == "falling"
