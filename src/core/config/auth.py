"""Authentication, one-time code and session lifetime settings.
"""

import logging
from pathlib import Path

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class AuthSettings(BaseSettings):
    """Defines settings for credential signing, password hashing and the lifetimes of
    every short-lived artefact (OTP codes, OTP sessions, reset tokens, pending phone
    changes, refresh tokens). It handles loading JWT keys from PEM files or
    environment variables.

    Security Note:
        - JWT keys must be securely stored and rotated regularly to prevent token forgery.
        - Ensure PEM files are readable only by the application user (chmod 600).
        - HS256 is accepted for single-service deployments; the shared secret must be
          at least 32 characters.
    """

    # JWT settings
    JWT_ALGORITHM: str = Field(default="RS256", pattern="^(RS256|HS256)$")
    JWT_PRIVATE_KEY: SecretStr = SecretStr("")
    JWT_PUBLIC_KEY: str = ""
    JWT_SECRET_KEY: SecretStr = SecretStr("")
    JWT_ISSUER: str = "phonegate"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=15, ge=1)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7, ge=1)

    # Password hashing
    BCRYPT_WORK_FACTOR: int = Field(default=12, ge=4, le=31)

    # Lifetimes of keyed-store entries
    OTP_TTL_MINUTES: int = Field(default=5, ge=1)
    OTP_SESSION_TTL_MINUTES: int = Field(default=10, ge=1)
    PASSWORD_RESET_TOKEN_TTL_MINUTES: int = Field(default=5, ge=1)
    PENDING_PHONE_CHANGE_TTL_MINUTES: int = Field(default=5, ge=1)

    # Account cleanup cut-offs
    PENDING_ACCOUNT_MAX_AGE_HOURS: int = Field(default=24, ge=1)
    DISABLED_ACCOUNT_MAX_AGE_DAYS: int = Field(default=7, ge=1)

    # Region used to parse phone numbers given without a "+" prefix
    DEFAULT_PHONE_REGION: str = "BR"

    @model_validator(mode="after")
    def _load_and_validate_jwt_keys(self) -> "AuthSettings":
        """Loads JWT keys, prioritizing .pem files over environment variables.
        Raises ValueError if the keys required by JWT_ALGORITHM are not found.

        Returns:
            Self instance with loaded keys.

        """
        if self.JWT_ALGORITHM == "HS256":
            if len(self.JWT_SECRET_KEY.get_secret_value()) < 32:
                error_msg = "JWT_SECRET_KEY must be at least 32 characters when JWT_ALGORITHM=HS256."
                logger.error(error_msg)
                raise ValueError(error_msg)
            return self

        self._load_keys_from_pem_files()

        if not self.JWT_PRIVATE_KEY.get_secret_value() or not self.JWT_PUBLIC_KEY:
            error_msg = (
                "JWT keys not found. Please provide JWT_PRIVATE_KEY and JWT_PUBLIC_KEY "
                "either via .env variables or through private.pem/public.pem files."
            )
            logger.error(error_msg)
            raise ValueError(error_msg)

        logger.info("JWT keys validated successfully.")
        return self

    def _load_keys_from_pem_files(self) -> None:
        """Loads JWT keys from private.pem and public.pem if they exist.
        These files override any existing environment variables.
        """
        private_key_path = Path("private.pem").resolve()
        public_key_path = Path("public.pem").resolve()

        if private_key_path.is_file():
            private_key = private_key_path.read_text().strip()
            if private_key:
                self.JWT_PRIVATE_KEY = SecretStr(private_key)
                logger.info("Loaded JWT private key from private.pem, overriding env var if set.")

        if public_key_path.is_file():
            public_key = public_key_path.read_text().strip()
            if public_key:
                self.JWT_PUBLIC_KEY = public_key
                logger.info("Loaded JWT public key from public.pem, overriding env var if set.")

    @property
    def signing_key(self) -> str:
        """Key used to sign access credentials for the configured algorithm."""
        if self.JWT_ALGORITHM == "HS256":
            return self.JWT_SECRET_KEY.get_secret_value()
        return self.JWT_PRIVATE_KEY.get_secret_value()

    @property
    def verification_key(self) -> str:
        """Key used to verify access credentials for the configured algorithm."""
        if self.JWT_ALGORITHM == "HS256":
            return self.JWT_SECRET_KEY.get_secret_value()
        return self.JWT_PUBLIC_KEY
