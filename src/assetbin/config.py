"""
Configuration management using Pydantic Settings
"""
from __future__ import annotations

import codecs
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Decoder settings, overridable through ASSETBIN_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="ASSETBIN_",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING", description="Logging level for the CLI")
    text_encoding: str = Field(default="ascii", description="Codec for single-byte strings")
    wide_encoding: str = Field(default="utf-16-le", description="Codec for double-byte strings")
    decode_errors: str = Field(
        default="replace",
        description="Codec error policy: 'strict', 'replace' or 'ignore'",
    )
    max_grid_bytes: int = Field(
        default=256 * 1024 * 1024,
        ge=0,
        description="Largest byte count a single grid read may request",
    )

    @field_validator("text_encoding", "wide_encoding")
    @classmethod
    def check_codec(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown codec: {v}") from e
        return v

    @field_validator("decode_errors")
    @classmethod
    def check_errors(cls, v: str) -> str:
        if v not in ("strict", "replace", "ignore"):
            raise ValueError(f"unsupported decode_errors policy: {v}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
