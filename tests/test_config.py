"""
Tests for settings and time zone resolution.
"""

from datetime import datetime

import pytest

from lognorm.config import Settings, resolve_timezone
from lognorm.core.exceptions import ConfigurationError
from lognorm.core.security import MAX_LINE_LENGTH
from lognorm.parsers.pulse import PulseSecureParser


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("LOGNORM_PULSE_TIMEZONE", "LOGNORM_MAX_LINE_LENGTH", "LOGNORM_DEFAULT_OUTPUT"):
            monkeypatch.delenv(name, raising=False)

        config = Settings(_env_file=None)

        assert config.pulse_timezone == "UTC"
        assert config.max_line_length == MAX_LINE_LENGTH
        assert config.default_output == "table"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("LOGNORM_PULSE_TIMEZONE", "Europe/Paris")
        monkeypatch.setenv("LOGNORM_MAX_LINE_LENGTH", "4096")

        config = Settings(_env_file=None)

        assert config.pulse_timezone == "Europe/Paris"
        assert config.max_line_length == 4096

    def test_invalid_line_length(self, monkeypatch):
        monkeypatch.setenv("LOGNORM_MAX_LINE_LENGTH", "0")
        with pytest.raises(ValueError):
            Settings(_env_file=None)


class TestResolveTimezone:
    """Tests for resolve_timezone()."""

    def test_utc(self):
        zone = resolve_timezone("UTC")
        assert zone.utcoffset(datetime(2021, 4, 8)).total_seconds() == 0

    def test_named_zone(self):
        zone = resolve_timezone("America/Los_Angeles")
        assert zone.utcoffset(datetime(2021, 4, 8)).total_seconds() == -7 * 3600

    def test_unknown_zone(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_timezone("Mars/Olympus_Mons")
        assert exc_info.value.config_key == "pulse_timezone"

    def test_parser_rejects_unknown_zone(self):
        with pytest.raises(ConfigurationError):
            PulseSecureParser(timezone="Mars/Olympus_Mons")
