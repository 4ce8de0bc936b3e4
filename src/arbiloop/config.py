"""Configuration management for arbiloop."""
import os
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else None


class SearchConfig(BaseModel):
    """Cycle search parameters."""
    max_hops: int = Field(
        default_factory=lambda: int(os.getenv("MAX_HOPS", "5"))
    )
    result_limit: int = Field(
        default_factory=lambda: int(os.getenv("RESULT_LIMIT", "10"))
    )
    max_workers: Optional[int] = Field(
        default_factory=lambda: _optional_int("MAX_WORKERS")
    )

    @field_validator("max_hops")
    @classmethod
    def _check_max_hops(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_hops must be at least 1")
        return value

    @field_validator("result_limit")
    @classmethod
    def _check_result_limit(cls, value: int) -> int:
        if value < 0:
            raise ValueError("result_limit must not be negative")
        return value


class FeedConfig(BaseModel):
    """Where rates come from and how often they are re-read."""
    rates_file: Optional[str] = Field(
        default_factory=lambda: os.getenv("RATES_FILE") or None
    )
    interval_seconds: float = Field(
        default_factory=lambda: float(os.getenv("SCAN_INTERVAL", "5.0"))
    )

    @field_validator("interval_seconds")
    @classmethod
    def _check_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("interval_seconds must be positive")
        return value


class Config(BaseModel):
    """Main application configuration."""
    search: SearchConfig = Field(default_factory=SearchConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = Field(default_factory=lambda: os.getenv("LOG_FILE") or None)


# single global config instance that everything uses
config = Config()
