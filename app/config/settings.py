import os
from functools import lru_cache

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    UPBIT_BASE_URL: str = "https://api.upbit.com"
    UPBIT_TIMEOUT_SEC: float = 5.0
    PORTFOLIO_BASE_CURRENCY: str = "KRW"
    PORTFOLIO_HOST: str = "0.0.0.0"
    PORTFOLIO_PORT: int = 8000

    @field_validator("UPBIT_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("UPBIT_TIMEOUT_SEC")
    @classmethod
    def positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("UPBIT_TIMEOUT_SEC must be positive")
        return value

    @field_validator("PORTFOLIO_BASE_CURRENCY")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("PORTFOLIO_BASE_CURRENCY must not be empty")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        keys = (
            "UPBIT_BASE_URL",
            "UPBIT_TIMEOUT_SEC",
            "PORTFOLIO_BASE_CURRENCY",
            "PORTFOLIO_HOST",
            "PORTFOLIO_PORT",
        )
        # unset keys fall back to the model defaults
        raw = {key: os.getenv(key) for key in keys}
        return cls.model_validate({k: v for k, v in raw.items() if v is not None})


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
