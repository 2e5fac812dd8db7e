"""Pydantic Settings for response handling.

All environment variables use the TOON_ prefix.
Example: TOON_LOG_LEVEL=DEBUG, TOON_CHECK_STATUS_CODE=false
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class HandlerSettings(BaseSettings):
    """Response handling configuration validated from environment variables."""

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Transport status cross-check
    check_status_code: bool = True
    success_status_min: int = Field(default=200, ge=100, le=599)
    success_status_max: int = Field(default=299, ge=100, le=599)

    model_config = {"env_prefix": "TOON_"}

    @model_validator(mode="after")
    def _check_status_range(self) -> "HandlerSettings":
        if self.success_status_max < self.success_status_min:
            raise ValueError("success_status_max must be >= success_status_min")
        return self

    def is_success_status(self, status_code: int) -> bool:
        """Return ``True`` when ``status_code`` falls in the success range."""
        return self.success_status_min <= status_code <= self.success_status_max
