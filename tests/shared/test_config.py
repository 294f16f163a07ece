"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from shared.config import Settings, get_settings
from shared.exceptions import ConfigurationError


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Todo List API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.app_version == "0.1.0"
        assert settings.jwt_algorithm == "HS256"
        assert settings.bcrypt_rounds == 10

    def test_token_lifetimes(self):
        """Access 1h, refresh 7d, recovery 15min."""
        settings = Settings(_env_file=None)
        assert settings.access_token_ttl_seconds == 3600
        assert settings.refresh_token_ttl_seconds == 604800
        assert settings.recovery_token_ttl_seconds == 900

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_smtp_config_from_env(self):
        with patch.dict(os.environ, {
            "SMTP_HOST": "smtp.test.local",
            "SMTP_PORT": "2525",
            "SMTP_USERNAME": "mailer",
        }):
            settings = Settings()
            assert settings.smtp_host == "smtp.test.local"
            assert settings.smtp_port == 2525
            assert settings.smtp_username == "mailer"


class TestRequireJwtSecret:
    def test_returns_secret(self):
        assert Settings(jwt_secret="s3cret").require_jwt_secret() == "s3cret"

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_blank_secret_refused(self, secret):
        """The server must not sign or verify tokens without a secret."""
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(jwt_secret=secret).require_jwt_secret()
        assert exc_info.value.details == {"setting": "JWT_SECRET"}


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
