from __future__ import annotations

from src.domain.entities.time_series import Granularity
from src.main.config import AppSettings, get_settings
from src.shared.consts import DEFAULT_ENDPOINTS, EnumEnvironment


def test_get_settings_loads_defaults(monkeypatch) -> None:
    monkeypatch.delenv("SEMETRIC_GRANULARITY", raising=False)
    monkeypatch.delenv("SEMETRIC_BASE_URL", raising=False)
    settings = get_settings()
    assert settings.semetric.base_url == "http://api.semetric.com"
    assert settings.semetric.granularity is Granularity.WEEK
    assert settings.semetric.endpoints == list(DEFAULT_ENDPOINTS)
    assert settings.chart.width == 960
    assert settings.chart.height == 500
    assert settings.environment == EnumEnvironment.DEVELOPMENT


def test_settings_respect_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("SEMETRIC_ARTIST_ID", "mbz:abc")
    monkeypatch.setenv("SEMETRIC_GRANULARITY", "day")
    monkeypatch.setenv("SEMETRIC_ENDPOINTS", '["/fans/total"]')
    monkeypatch.setenv("CHART_SHARED_AXES", "false")
    monkeypatch.setenv("GE_TITLE", "Testing")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = AppSettings()

    assert settings.semetric.artist_id == "mbz:abc"
    assert settings.semetric.granularity is Granularity.DAY
    assert settings.semetric.endpoints == ["/fans/total"]
    assert settings.chart.shared_axes is False
    assert settings.ge.title == "Testing"
    assert settings.logging.level.value == "DEBUG"


def test_token_is_read_from_secret_file(tmp_path, monkeypatch) -> None:
    from src.shared.env import load_secret_file_variables

    secret = tmp_path / "token"
    secret.write_text("abc123\n", encoding="utf-8")
    monkeypatch.setenv("SEMETRIC_TOKEN", "")
    monkeypatch.delenv("SEMETRIC_TOKEN")
    monkeypatch.setenv("SEMETRIC_TOKEN_FILE", str(secret))

    load_secret_file_variables()
    settings = AppSettings()

    assert settings.semetric.token == "abc123"
    assert "abc123" not in repr(settings.semetric)
