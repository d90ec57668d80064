"""
Tests for configuration and display formatting
"""

import pytest
from pydantic import ValidationError

from src.config.settings import AppSettings, StorageSettings
from src.utils import format_currency, format_percent


class TestSettings:
    """Tests for pydantic-settings models."""

    def test_storage_defaults(self, monkeypatch):
        monkeypatch.delenv("STORAGE_BACKEND", raising=False)
        assert StorageSettings().backend == "json_file"

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        assert AppSettings().log_level == "DEBUG"

    def test_replacement_years_bounds(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_REPLACEMENT_YEARS", "6")
        with pytest.raises(ValidationError):
            AppSettings()


class TestFormatting:
    """Tests for screen formatting helpers."""

    def test_format_currency(self):
        assert format_currency(12345.4) == "RM 12,345"
        assert format_currency(0) == "RM 0"
        assert format_currency(-1200) == "-RM 1,200"

    def test_custom_symbol(self):
        assert format_currency(1000, symbol="$") == "$ 1,000"

    def test_non_finite(self):
        assert format_currency(float("inf")) == "RM -"

    def test_format_percent(self):
        assert format_percent(57.14) == "57%"
