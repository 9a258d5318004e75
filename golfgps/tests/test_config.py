from __future__ import annotations

import pytest
from pydantic import ValidationError

from golfgps.config import _int_env, env_bool, get_settings, reset_settings_cache


def test_defaults(monkeypatch):
    for name in ("GOLFGPS_EDITS_DIR", "LABEL_MAX_PASSES", "STRICT_CATALOG"):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    settings = get_settings()
    assert settings.edits_dir is None
    assert settings.corridor_half_width_deg == 0.00012
    assert settings.label_max_passes == 8
    assert settings.strict_catalog is False


def test_settings_read_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("GOLFGPS_EDITS_DIR", str(tmp_path))
    monkeypatch.setenv("LABEL_MAX_PASSES", "3")
    monkeypatch.setenv("STRICT_CATALOG", "1")
    reset_settings_cache()
    settings = get_settings()
    assert settings.edits_dir == str(tmp_path)
    assert settings.label_max_passes == 3
    assert settings.strict_catalog is True


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("LABEL_MAX_PASSES", "5")
    assert get_settings() is first


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("FLAG_ON", "yes")
    monkeypatch.setenv("FLAG_OFF", "0")
    monkeypatch.setenv("PORT_BAD", "eighty")
    monkeypatch.setenv("PORT_DOUBLE_SIGN", "--5")
    monkeypatch.setenv("PORT_NEGATIVE", "-5")
    assert env_bool("FLAG_ON")
    assert not env_bool("FLAG_OFF", default=True)
    assert env_bool("FLAG_MISSING", default=True)
    assert _int_env("PORT_BAD", 8000) == 8000
    assert _int_env("PORT_MISSING", 81) == 81
    assert _int_env("PORT_DOUBLE_SIGN", 8000) == 8000
    assert _int_env("PORT_NEGATIVE", 8000) == -5


def test_log_level_and_cors_parsing(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://maps.example, ,http://localhost:5173")
    monkeypatch.setenv("GOLFGPS_EDITS_DIR", str(tmp_path))
    reset_settings_cache()
    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["https://maps.example", "http://localhost:5173"]
    assert settings.edits_path == tmp_path


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    reset_settings_cache()
    with pytest.raises(ValidationError):
        get_settings()
