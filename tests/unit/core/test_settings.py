"""Tests for the composed application settings."""

import pytest
from pydantic import ValidationError

from src.core.config.settings import Settings


class TestSettings:
    def test_test_environment_forces_sms_test_mode(self):
        settings = Settings(APP_ENV="test", SMS_TEST_MODE=False)

        assert settings.SMS_TEST_MODE is True

    def test_comma_separated_lists(self):
        settings = Settings(ALLOWED_ORIGINS="http://a.test, http://b.test", SUPPORTED_LANGUAGES="en,pt")

        assert settings.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]
        assert settings.SUPPORTED_LANGUAGES == ["en", "pt"]

    def test_database_url_is_assembled(self):
        settings = Settings(
            POSTGRES_USER="app",
            POSTGRES_PASSWORD="pw",
            POSTGRES_HOST="db",
            POSTGRES_PORT=5433,
            POSTGRES_DB="phonegate",
        )

        assert settings.DATABASE_URL == "postgresql+asyncpg://app:pw@db:5433/phonegate"

    def test_redis_url_is_assembled(self):
        settings = Settings(REDIS_HOST="cache", REDIS_PORT=6380, REDIS_SSL=True)

        assert settings.REDIS_URL == "rediss://cache:6380/0"

    @pytest.mark.parametrize("rate", ["5", "x/minute", "5/fortnight", "0/minute"])
    def test_invalid_rate_limit_templates(self, rate):
        with pytest.raises(ValidationError):
            Settings(RATE_LIMIT_LOGIN=rate)

    def test_short_hs256_secret_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(JWT_ALGORITHM="HS256", JWT_SECRET_KEY="too-short")

    def test_unknown_storage_backend_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(STORAGE_BACKEND="sqlite")

    def test_production_requires_sms_gateway(self):
        settings = Settings(APP_ENV="production", SMS_TEST_MODE=False, SMS_GATEWAY_URL="")

        with pytest.raises(ValueError):
            settings.validate_sms_config()
