"""Application configuration pulled from environment variables via pydantic."""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="app/config")

GOOGLE_WEATHER_DAYS_LOOKUP_URL = "https://weather.googleapis.com/v1/forecast/days:lookup"


class Settings(BaseSettings):
    """Environment-driven configuration for the voice weather service."""
    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    google_maps_api_key: str | None = Field(default=None, alias="GOOGLE_MAPS_API_KEY", repr=False)
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV", "app_env"),
    )
    weather_api_url: str = Field(default=GOOGLE_WEATHER_DAYS_LOOKUP_URL, alias="WEATHER_API_URL")
    weather_timeout_seconds: float = Field(default=10.0, alias="WEATHER_TIMEOUT_SECONDS")
    local_timezone: str | None = Field(default=None, alias="WEATHER_LOCAL_TIMEZONE")  # None: process local zone
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("app_env", mode="after")
    @classmethod
    def normalize_env(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("local_timezone", mode="after")
    @classmethod
    def check_timezone(cls, v: str | None) -> str | None:
        """Reject unknown IANA zone names at startup instead of per request."""
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {v}") from exc
        return v

    @property
    def is_development(self) -> bool:
        """True when raw provider payloads may be echoed back for debugging."""
        return self.app_env == "development"

    @property
    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.local_timezone) if self.local_timezone else None


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
