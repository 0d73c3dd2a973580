"""SMS gateway configuration settings.

This module defines the parameters used to deliver one-time verification codes
by SMS. Provides secure defaults and validation for production environments.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings


class SmsSettings(BaseSettings):
    """SMS delivery settings with secure defaults and validation.

    Security considerations:
    - The gateway token is handled as SecretStr to prevent logging
    - Message bodies contain one-time codes and are never logged

    Attributes:
        SMS_GATEWAY_URL: HTTP endpoint accepting ``{"to", "from", "message"}`` JSON
        SMS_GATEWAY_TOKEN: Bearer token for the gateway (SecretStr)
        SMS_SENDER_ID: Sender identifier shown on the handset
        SMS_TIMEOUT_SECONDS: Per-request timeout for the gateway call
        SMS_MAX_ATTEMPTS: Delivery attempts before giving up
        SMS_TEST_MODE: Log messages instead of sending them
    """

    SMS_GATEWAY_URL: str = Field(default="", description="SMS gateway endpoint")
    SMS_GATEWAY_TOKEN: Optional[SecretStr] = Field(default=None, description="SMS gateway bearer token")
    SMS_SENDER_ID: str = Field(default="Phonegate", max_length=11)
    SMS_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)
    SMS_MAX_ATTEMPTS: int = Field(default=3, ge=1, le=10)
    SMS_TEST_MODE: bool = Field(default=False, description="Log SMS instead of sending")

    def validate_sms_config(self) -> None:
        """Validate SMS gateway configuration for production use.

        Raises:
            ValueError: If the gateway configuration is incomplete
        """
        if self.SMS_TEST_MODE or getattr(self, "APP_ENV", "development") not in {"production", "staging"}:
            return

        if not self.SMS_GATEWAY_URL or not self.SMS_GATEWAY_TOKEN:
            raise ValueError("SMS_GATEWAY_URL and SMS_GATEWAY_TOKEN are required in production")
