import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Values already present in the environment win over .env
load_dotenv()

DEFAULT_BASE_URL = "https://api.proxybase.xyz"


def _env(name: str) -> Optional[str]:
    return os.getenv(name, "").strip() or None


class Settings(BaseModel):
    # env-derived defaults go through the same coercion and checks as explicit values
    model_config = ConfigDict(validate_default=True)

    api_url: str = Field(default_factory=lambda: os.getenv("PROXYBASE_API_URL", DEFAULT_BASE_URL))
    log_level: str = Field(default_factory=lambda: os.getenv("PROXYBASE_LOG_LEVEL", "INFO"))
    http_timeout: Optional[float] = Field(default_factory=lambda: _env("PROXYBASE_HTTP_TIMEOUT"))
    metrics_port: Optional[int] = Field(default_factory=lambda: _env("PROXYBASE_METRICS_PORT"))

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("PROXYBASE_API_URL must not be empty")
        return v

    @field_validator("http_timeout")
    @classmethod
    def _positive_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("PROXYBASE_HTTP_TIMEOUT must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
