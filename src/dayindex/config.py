from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dayindex.calendar.dates import MAX_YEAR


class Settings(BaseSettings):
    start_year: int = Field(default=2016)
    end_year: int | None = Field(
        default=None,
        le=MAX_YEAR,
        description="Last year to index; the current year when unset.",
    )
    override_file: Path = Field(default=Path("custom/festival.json"))
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=9091)
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DAYINDEX_",
        extra="ignore",
    )

    @field_validator("start_year")
    @classmethod
    def validate_start_year(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"DAYINDEX_START_YEAR must be >= 1; got {value}.")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def validate_year_span(self) -> "Settings":
        if self.end_year is not None and self.end_year < self.start_year:
            raise ValueError(
                f"DAYINDEX_END_YEAR ({self.end_year}) must not precede "
                f"DAYINDEX_START_YEAR ({self.start_year})."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
