"""
Redis key-value store and rate limiting settings.
"""
import logging

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

RATE_LIMIT_PERIODS = ("second", "minute", "hour", "day")


class RedisSettings(BaseSettings):
    """
    Defines settings for the Redis connection that backs one-time codes, OTP
    sessions, password reset tokens and pending phone changes, together with the
    rate limit templates applied to the authentication endpoints.

    Security Note:
        - REDIS_PASSWORD must be set in production to prevent unauthorized access.
    Performance Note:
        - Each template is a token bucket; capacity equals the count and tokens are
          refilled evenly over the period, so "5/minute" refills one token every 12s.
    """
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = Field(ge=1, le=65535, default=6379)
    REDIS_PASSWORD: SecretStr = SecretStr("")
    REDIS_SSL: bool = False
    REDIS_URL: str = Field(default="", validate_default=True)

    # Rate limiting templates
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_LOGIN: str = "5/minute"
    RATE_LIMIT_SENSITIVE: str = "5/minute"
    RATE_LIMIT_GLOBAL: str = "60/minute"
    RATE_LIMIT_IDLE_TTL_SECONDS: int = Field(default=600, ge=1)

    @field_validator("REDIS_URL", mode="before")
    @classmethod
    def assemble_redis_url(cls, v: str | None, info: ValidationInfo) -> str:
        """
        Assembles the Redis connection URL if not provided explicitly.

        Args:
            v: Explicitly provided URL or None.
            info: Validation context with other field values.

        Returns:
            Assembled or provided Redis URL.
        """
        if v:
            return v

        values = info.data
        protocol = "rediss" if values.get("REDIS_SSL") else "redis"
        redis_password = values.get("REDIS_PASSWORD")
        secret = redis_password.get_secret_value() if redis_password else ""
        password = f":{secret}@" if secret else ""

        url = f"{protocol}://{password}{values.get('REDIS_HOST')}:{values.get('REDIS_PORT')}/0"
        logger.debug("Assembled REDIS_URL (password masked for security).")
        return url

    @field_validator("RATE_LIMIT_LOGIN", "RATE_LIMIT_SENSITIVE", "RATE_LIMIT_GLOBAL")
    @classmethod
    def validate_rate_limit_format(cls, value: str) -> str:
        """
        Validates the format of rate limit strings (e.g., '5/minute').

        Raises:
            ValueError: If format is invalid.
        """
        try:
            count, period = value.split("/")
        except ValueError:
            raise ValueError(f"Invalid rate limit format: {value}. Must be 'count/period'.")
        if not count.isdigit() or int(count) <= 0:
            raise ValueError("Rate limit count must be a positive integer.")
        if period not in RATE_LIMIT_PERIODS:
            raise ValueError("Rate limit period must be second, minute, hour, or day.")
        return value
