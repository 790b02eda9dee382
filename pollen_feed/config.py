"""Application configuration pulled from environment variables via pydantic."""
import json
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from utils.logging_utils import get_tagged_logger, mask_secret, mask_url
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the pollen feed service."""
    model_config = SettingsConfigDict(env_prefix="POLLEN_", extra="ignore")

    api_url: str = "https://sensors.pollensense.com/api/sites/379ec159-ac99-43bf-9d2d-a2371638b942/metrics"
    api_key: str | None = None
    default_interval: str = "hour"  # options: hour, day
    timezone: str = "America/New_York"  # decides "today" when no date is requested
    default_category_codes: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["POL"])
    data_source: str = "pollensense"  # options: pollensense, json_file
    data_file: str | None = None
    request_timeout_seconds: float = 10.0
    cache_max_age_ms: int = 60 * 60 * 1000
    cache_redis_url: str | None = None
    cache_key_prefix: str = "pollen_feed:"
    # Treat a cached entry fetched for a different date/interval/category set as a miss.
    cache_match_request: bool = False
    log_level: str = "INFO"

    @field_validator("api_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the metrics URL so query strings attach cleanly."""
        return str(v).rstrip("/")

    @field_validator("default_category_codes", mode="before")
    @classmethod
    def split_category_codes(cls, v):
        """Accept `POL,GRA` as well as a JSON list from the environment."""
        if isinstance(v, str):
            text = v.strip()
            if text.startswith("["):
                return json.loads(text)
            return [c.strip() for c in text.split(",") if c.strip()]
        return v

    @field_validator("default_interval", mode="after")
    @classmethod
    def lower_interval(cls, v: str) -> str:
        """Store the interval in the casing the API expects."""
        return str(v).strip().lower()


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    dumped = settings.model_dump()
    dumped["api_key"] = mask_secret(settings.api_key)
    if settings.cache_redis_url:
        dumped["cache_redis_url"] = mask_url(settings.cache_redis_url)
    logger.debug(f"Loaded settings: {dumped}")
