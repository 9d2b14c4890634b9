"""Unit tests for configuration defaults and overrides."""

from __future__ import annotations

import json
from datetime import timedelta

import platformdirs
import pytest
import structlog
from pydantic import ValidationError

from tldrkit.config import (
    _DEFAULT_DATA_DIR,
    _DEFAULT_MIRROR_PATH,
    PAGE_SOURCE_URL,
    LoggingSettings,
    MirrorSettings,
    Settings,
)
from tldrkit.logging_config import configure_logging
from tldrkit.models.platform import Platform


class TestPlatformDefaults:
    """Mirror location defaults come from the per-user data directory."""

    def test_default_data_dir_matches_platformdirs(self) -> None:
        assert platformdirs.user_data_dir("tldrkit") == _DEFAULT_DATA_DIR

    def test_default_mirror_path_under_data_dir(self) -> None:
        assert _DEFAULT_MIRROR_PATH.startswith(_DEFAULT_DATA_DIR)
        assert MirrorSettings().path == _DEFAULT_MIRROR_PATH

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.mirror.source_url == PAGE_SOURCE_URL
        assert settings.mirror.max_age == timedelta(days=14)
        assert settings.lookup.platform is Platform.OSX
        assert settings.lookup.language is None
        assert settings.output.command_format == "original"


class TestOverrides:
    def test_env_var_overrides_nested_field(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TLDRKIT__LOOKUP__PLATFORM", "linux")
        monkeypatch.setenv("TLDRKIT__MIRROR__MAX_AGE_DAYS", "3")
        settings = Settings()
        assert settings.lookup.platform is Platform.LINUX
        assert settings.mirror.max_age == timedelta(days=3)

    def test_constructor_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TLDRKIT__LOOKUP__LANGUAGE", "de")
        settings = Settings(lookup={"language": "ja"})
        assert settings.lookup.language == "ja"


class TestConfigValidation:
    def test_wrong_type_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(mirror={"max_age_days": "not-a-number"})  # type: ignore[arg-type]

    def test_unknown_platform_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(lookup={"platform": "plan9"})  # type: ignore[arg-type]

    def test_unknown_top_level_field_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(completely_unknown_field="oops")  # type: ignore[call-arg]

    def test_unknown_nested_field_raises_validation_error(self) -> None:
        """A typo like 'pth' instead of 'path' is caught immediately."""
        with pytest.raises(ValidationError):
            MirrorSettings(pth="/intended/path")  # type: ignore[call-arg]

    def test_unknown_command_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(output={"command_format": "shouting"})  # type: ignore[arg-type]


class TestConfigureLogging:
    def test_json_lines_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(level="INFO", format="json"))
        structlog.get_logger().info("mirror_update_started", url="https://example.com")

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip())
        assert record["event"] == "mirror_update_started"
        assert record["level"] == "info"
        assert record["url"] == "https://example.com"
        assert "timestamp" in record

    def test_level_filters_lower_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(level="WARNING"))
        log = structlog.get_logger()
        log.info("quiet")
        log.warning("loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err
