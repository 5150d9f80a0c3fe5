"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from test_driven_state.config import TdsSettings

_ENV_VARS = (
    "TDS_LOG_LEVEL",
    "TDS_LOG_JSON",
    "TDS_PASS_GLYPH",
    "TDS_FAIL_GLYPH",
    "TDS_PENDING_GLYPH",
    "TDS_CHART_DISTINCT",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_settings_defaults(clean_env: Path) -> None:
    settings = TdsSettings()

    assert settings.log_level == "INFO"
    assert settings.log_json is True
    assert settings.pass_glyph == "✓"
    assert settings.fail_glyph == "✗"
    assert settings.pending_glyph == "○"
    assert settings.chart_distinct is False


def test_settings_loads_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                "TDS_LOG_LEVEL=DEBUG",
                "TDS_CHART_DISTINCT=true",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = TdsSettings()

    assert settings.log_level == "DEBUG"
    assert settings.chart_distinct is True


def test_environment_overrides_defaults(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TDS_PASS_GLYPH", "ok")
    monkeypatch.setenv("TDS_LOG_JSON", "false")

    settings = TdsSettings()

    assert settings.pass_glyph == "ok"
    assert settings.log_json is False


def test_empty_glyphs_are_rejected(clean_env: Path) -> None:
    with pytest.raises(ValidationError):
        TdsSettings(fail_glyph="  ")
