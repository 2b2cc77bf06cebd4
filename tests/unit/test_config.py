"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from app.core.config import (
    ConfigValidator,
    EnvironmentEnum,
    LogFormatEnum,
    Settings,
    get_config_summary,
)


class TestSettings:
    def test_defaults(self):
        config = Settings(_env_file=None, database_url="sqlite+aiosqlite://")

        assert config.app_name == "Mini Trello API"
        assert config.default_page_size == 20
        assert config.max_page_size == 100
        assert config.algorithm == "HS256"
        assert config.log_format == LogFormatEnum.simple

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("dev", EnvironmentEnum.development),
            ("PROD", EnvironmentEnum.production),
            ("Testing", EnvironmentEnum.testing),
        ],
    )
    def test_environment_aliases(self, raw, expected):
        assert Settings(_env_file=None, environment=raw).environment == expected

    def test_environment_flags(self):
        config = Settings(_env_file=None, environment="production")

        assert config.is_production
        assert not config.is_development
        assert not config.is_testing

    def test_max_page_size_limit(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_page_size=500)

    def test_allowed_origins_list(self):
        config = Settings(_env_file=None, allowed_origins="http://a.test, http://b.test,")

        assert config.allowed_origins_list == ["http://a.test", "http://b.test"]


class TestConfigHelpers:
    def test_validate_required_settings_passes_in_tests(self):
        ConfigValidator.validate_required_settings()

    def test_config_summary(self):
        summary = get_config_summary()

        assert summary["app_name"] == "Mini Trello API"
        assert summary["database_configured"] is True
        assert "secret_key" not in summary
