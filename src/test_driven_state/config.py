"""Settings for the trace engine and the ``tds`` CLI.

Configuration is loaded from:
- environment variables prefixed with ``TDS_``
- and a local `.env` file (if present)

Pydantic-settings supports overriding the env file in tests via
`TdsSettings(_env_file=path_to_env)`.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TdsSettings(BaseSettings):
    """Settings for report formatting, charts and logging.

    Environment variables:
    - TDS_LOG_LEVEL
    - TDS_LOG_JSON
    - TDS_PASS_GLYPH / TDS_FAIL_GLYPH / TDS_PENDING_GLYPH
    - TDS_CHART_DISTINCT
    """

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    log_json: bool = Field(
        default=True,
        description="Emit structured JSON log lines instead of plain text",
    )

    pass_glyph: str = Field(
        default="✓",
        description="Marker for a step whose expectations held",
    )
    fail_glyph: str = Field(
        default="✗",
        description="Marker for the step where a trace diverged",
    )
    pending_glyph: str = Field(
        default="○",
        description="Marker for steps never reached because replay stopped earlier",
    )

    chart_distinct: bool = Field(
        default=False,
        description="Collapse repeated chart lines by default",
    )

    model_config = SettingsConfigDict(
        env_prefix="TDS_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("pass_glyph", "fail_glyph", "pending_glyph")
    @classmethod
    def _require_glyph(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("report glyphs must not be empty")
        return value
