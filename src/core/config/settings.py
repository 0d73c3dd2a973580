"""Main application settings and configuration management.

This module composes all the application settings from the different modules
(app, database, redis, auth, sms) into a single `Settings` class.

It loads settings from environment variables and .env files and validates them.
The module-level `settings` object is only used while the process boots
(logging, i18n, building the service container); services receive their
configuration explicitly from the container.

Environment Support:
- Development: Uses .env, SMS test mode enabled
- Test: Uses .env.test, SMS test mode enabled
- Staging: Uses .env.staging, SMS gateway required
- Production: Uses .env.production, SMS gateway required
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings
from .database import DatabaseSettings
from .redis import RedisSettings
from .sms import SmsSettings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logging.getLogger("passlib").setLevel(logging.ERROR)

ENV_FILES = {
    "development": ".env",
    "test": ".env.test",
    "staging": ".env.staging",
    "production": ".env.production",
}


class Settings(AppSettings, DatabaseSettings, RedisSettings, AuthSettings, SmsSettings):
    """The main settings class that aggregates all application configurations.

    Environment Support:
        - Automatically loads the correct .env file based on APP_ENV
        - Development/Test: SMS test mode enabled
        - Staging/Production: SMS gateway credentials required
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._set_environment_defaults(self.APP_ENV)

    def _set_environment_defaults(self, env: str) -> None:
        """Set environment-specific default values.

        Args:
            env: Environment name
        """
        if env in ("development", "test"):
            self.SMS_TEST_MODE = True
        if env == "development":
            self.DEBUG = True
        logger.info(f"Application running in {env} environment")

    def validate_required_fields(self) -> None:
        """Validates the settings that must be present for the selected backend.

        Raises:
            ValueError: If required fields are missing.
        """
        required_fields = ["PROJECT_NAME"]
        if self.STORAGE_BACKEND == "redis-sql":
            required_fields += ["DATABASE_URL", "REDIS_URL"]

        missing_fields = [field for field in required_fields if not getattr(self, field, None)]
        if missing_fields:
            error_msg = f"Missing required environment variables: {', '.join(missing_fields)}"
            logger.error(error_msg)
            raise ValueError(error_msg)

        self.validate_sms_config()


def create_settings(**overrides) -> Settings:
    """Create settings instance with environment-specific configuration.

    Args:
        **overrides: Explicit values that win over the environment (used by tests).

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")
    env_file = ENV_FILES.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info(f"Loading environment configuration from {env_file}")
        settings_instance = Settings(_env_file=env_file, **overrides)
    elif Path(".env").exists():
        logger.info(f"Loading environment configuration from .env (environment: {env})")
        settings_instance = Settings(**overrides)
    else:
        logger.warning(f"No .env file found, using environment variables only (environment: {env})")
        settings_instance = Settings(**overrides)

    return settings_instance


settings = create_settings()
settings.validate_required_fields()
