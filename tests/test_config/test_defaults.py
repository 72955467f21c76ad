"""Tests for package defaults."""

from paintgen.config.defaults import (
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_MAX_SIZE,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_OUTPUT_KB,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MODEL,
    get_defaults,
)


class TestDefaults:
    def test_default_model(self):
        assert DEFAULT_MODEL == "openai/gpt-4o"

    def test_default_base_url(self):
        assert DEFAULT_BASE_URL == "https://openrouter.ai/api/v1"

    def test_cache_defaults(self):
        assert DEFAULT_CACHE_MAX_SIZE == 50
        assert DEFAULT_CACHE_TTL_SECONDS == 3600

    def test_image_budget(self):
        assert DEFAULT_MAX_OUTPUT_KB == 500

    def test_default_retries(self):
        assert DEFAULT_MAX_RETRIES == 3

    def test_default_log_level(self):
        assert DEFAULT_LOG_LEVEL == "WARNING"

    def test_get_defaults_has_no_api_key(self):
        defaults = get_defaults()
        assert "api_key" not in defaults
        assert defaults["model"] == DEFAULT_MODEL
