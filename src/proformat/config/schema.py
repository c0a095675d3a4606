"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment and programmatic overrides into the correct types
with proper defaults.
"""

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from proformat.constants import DEFAULT_MODEL


class ProformatSettings(BaseSettings):
    """Pydantic settings schema for the formatting pipeline.

    Environment variables use the PROFORMAT_ prefix. The API key is also
    read from GEMINI_API_KEY, the variable the Gemini SDK documents.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROFORMAT_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars for forward compatibility
        populate_by_name=True,
    )

    # --- Generation Service ---

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
        validation_alias=AliasChoices("api_key", "PROFORMAT_API_KEY", "GEMINI_API_KEY"),
    )

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Gemini model identifier",
        min_length=1,
    )

    use_real_api: bool = Field(
        default=False,
        description="Call the real Gemini API instead of the deterministic mock",
    )

    request_timeout_s: float | None = Field(
        default=None,
        description="Give up on a generation call after this many seconds",
        gt=0,
    )

    # --- Input and Export ---

    max_input_chars: int | None = Field(
        default=None,
        description="Reject submissions longer than this many characters",
        ge=1,
    )

    export_dir: Path = Field(
        default=Path("."),
        description="Directory that receives downloaded exports",
    )

    # --- Validation Rules ---

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v: Any) -> Any:
        """Treat an empty or whitespace-only key as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_api_key_requirement(self) -> "ProformatSettings":
        """Ensure api_key is provided when use_real_api is True."""
        if self.use_real_api and not self.api_key:
            raise ValueError(
                "api_key is required when use_real_api=True. "
                "Set GEMINI_API_KEY (or PROFORMAT_API_KEY) or pass it programmatically."
            )
        return self
