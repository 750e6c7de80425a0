# SPDX-License-Identifier: MIT
"""Unit tests for configuration management."""

import os

import pytest

from fileway.config import DEFAULT_HIDDEN_PREFIXES, _parse_hidden_prefixes, get_listing_config
from fileway.models import FileType


@pytest.fixture(autouse=True)
def clear_listing_cache():
    """Clear get_listing_config() cache before each test to ensure isolation."""
    get_listing_config.cache_clear()
    yield
    get_listing_config.cache_clear()


@pytest.mark.unit
class TestHiddenPrefixes:
    """Test FILEWAY_HIDDEN_PREFIXES parsing."""

    @pytest.mark.parametrize("raw", [None, "", "   ", ", ,"])
    def test_default(self, raw):
        assert _parse_hidden_prefixes(raw) == DEFAULT_HIDDEN_PREFIXES

    def test_custom_list(self):
        assert _parse_hidden_prefixes(" ., _ ,~") == (".", "_", "~")

    def test_env_var_applied(self, mocker):
        mocker.patch.dict(os.environ, {"FILEWAY_HIDDEN_PREFIXES": "_,."})
        assert get_listing_config().hidden_prefixes == ("_", ".")


@pytest.mark.unit
class TestListingConfig:
    """Test the process-wide listing configuration."""

    def test_type_table(self):
        config = get_listing_config()

        assert config.type_table["pdf"] == FileType.OFFICE
        assert config.type_table["mkv"] == FileType.VIDEO
        assert config.type_table["flac"] == FileType.AUDIO
        assert config.type_table["md"] == FileType.TEXT
        assert config.type_table["webp"] == FileType.IMAGE
        assert "exe" not in config.type_table

    def test_type_table_is_read_only(self):
        with pytest.raises(TypeError):
            get_listing_config().type_table["exe"] = FileType.OFFICE  # type: ignore[index]

    def test_caching_returns_same_instance(self, mocker):
        mocker.patch.dict(os.environ, {"FILEWAY_HIDDEN_PREFIXES": "."})
        first = get_listing_config()

        mocker.patch.dict(os.environ, {"FILEWAY_HIDDEN_PREFIXES": "_"})
        second = get_listing_config()

        assert first is second
        assert second.hidden_prefixes == (".",)
