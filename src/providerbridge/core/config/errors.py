"""Error normalization configuration."""

import logging

from pydantic import BaseModel, ConfigDict, field_validator


class ErrorsConfig(BaseModel):
    """Settings for the RPC error normalizer."""

    model_config = ConfigDict(extra="ignore")

    # Record every raw error on the diagnostics sink before normalizing it
    log_raw_errors: bool = True
    raw_error_log_level: str = "DEBUG"

    @field_validator("raw_error_log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @property
    def raw_error_levelno(self) -> int:
        return logging.getLevelName(self.raw_error_log_level)
