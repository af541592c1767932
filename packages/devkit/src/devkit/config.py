from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from devkit.timezone import configure_dashboard_timezone


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    REDIS_URL: str | None = None
    USE_MOCK_DATA: bool = False
    WEATHER_API_BASE_URL: str = "https://api.open-meteo.com"
    TRAFFIC_API_BASE_URL: str = "https://api.tomtom.com"
    TOMTOM_API_KEY: str | None = None
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    DASHBOARD_LAT: float = 47.6062
    DASHBOARD_LNG: float = -122.3321
    DASHBOARD_TIMEZONE: str = "America/Los_Angeles"
    CONDITIONS_REFRESH_SECONDS: int = 300
    HTTP_TIMEOUT_SECONDS: float = 5.0
    API_CACHE_TTL_SECONDS: int = 60


def load_settings(service_name: str) -> ServiceSettings:
    settings = ServiceSettings(SERVICE_NAME=service_name)
    configure_dashboard_timezone(settings.DASHBOARD_TIMEZONE)
    return settings
