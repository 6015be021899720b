"""Pydantic Settings models for StackScout configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stackscout.core.metadata import PROJECT_METADATA_FILE
from stackscout.detection.paths import DEFAULT_MAX_DEPTH


class ScanSettings(BaseModel):
    """Scan-related configuration."""

    max_depth: int = DEFAULT_MAX_DEPTH
    extra_ignore_dirs: list[str] = Field(default_factory=list)
    metadata_file: str = PROJECT_METADATA_FILE
    write_metadata: bool = True

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_depth must be >= 0, got {v}")
        return v

    @field_validator("metadata_file")
    @classmethod
    def validate_metadata_file(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("metadata_file cannot be empty")
        return v

    @field_validator("extra_ignore_dirs", mode="before")
    @classmethod
    def split_ignore_dirs(cls, v: object) -> object:
        # Env vars arrive as "a,b,c"
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v


class StackScoutSettings(BaseSettings):
    """Root settings with layered config: defaults -> file -> env -> CLI."""

    model_config = SettingsConfigDict(
        env_prefix="STACKSCOUT_",
        env_nested_delimiter="__",
    )

    scan: ScanSettings = Field(default_factory=ScanSettings)
