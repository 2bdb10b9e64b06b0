from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Foreign Rate API"
    log_level: str = "INFO"

    # Provider base URLs; the uppercased base currency code is appended.
    exchange_api: str = "https://open.er-api.com/v6/latest/"
    exchange_api2: str = ""
    request_timeout_seconds: float = 10.0

    rate_cache_ttl_seconds: int = 86400
    rate_cache_max_entries: int = 512
    rate_refresh_margin_ms: int = 100

    usage_window_seconds: int = 60
    usage_capacity: int = 30
    usage_max_clients: int = 100_000

    geo_lookup_url: str = "http://ip-api.com/json/{ip}?fields=status,countryCode"
    geo_cache_ttl_seconds: int = 3600
    default_country: str = "US"
    # Honour X-Forwarded-For / X-Real-IP only when a trusted proxy sets them.
    trust_proxy_headers: bool = False

    database_url: str = "sqlite+aiosqlite:///./foreign_rate.db"
    record_rates: bool = True

    @field_validator("default_country")
    @classmethod
    def _upper_country(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
