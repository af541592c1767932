from devkit.config import ServiceSettings, load_settings
from devkit.timezone import dashboard_zone


def test_load_settings_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("REDIS_URL", "redis://example:6379/0")
    monkeypatch.setenv("USE_MOCK_DATA", "true")
    monkeypatch.setenv("TOMTOM_API_KEY", "tt-key")
    monkeypatch.setenv("CONDITIONS_REFRESH_SECONDS", "120")
    settings = load_settings("dashboard-api")

    assert settings.SERVICE_NAME == "dashboard-api"
    assert settings.REDIS_URL == "redis://example:6379/0"
    assert settings.USE_MOCK_DATA is True
    assert settings.TOMTOM_API_KEY == "tt-key"
    assert settings.CONDITIONS_REFRESH_SECONDS == 120


def test_settings_defaults_point_at_seattle(monkeypatch) -> None:
    for name in ("DASHBOARD_LAT", "DASHBOARD_LNG", "DASHBOARD_TIMEZONE", "OPENAI_MODEL"):
        monkeypatch.delenv(name, raising=False)
    settings = ServiceSettings()

    assert settings.DASHBOARD_LAT == 47.6062
    assert settings.DASHBOARD_LNG == -122.3321
    assert settings.DASHBOARD_TIMEZONE == "America/Los_Angeles"
    assert settings.OPENAI_MODEL == "gpt-3.5-turbo"


def test_load_settings_configures_dashboard_zone(monkeypatch) -> None:
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "Europe/Berlin")
    try:
        load_settings("dashboard-api")
        assert dashboard_zone().key == "Europe/Berlin"
    finally:
        monkeypatch.setenv("DASHBOARD_TIMEZONE", "America/Los_Angeles")
        load_settings("dashboard-api")
