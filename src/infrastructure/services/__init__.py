"""Infrastructure service adapters."""

from .authentication import BcryptPasswordHasher, JwtCredentialSigner
from .sms_sender import HttpSmsSender, LoggingSmsSender
from .verification_notifier import SmsVerificationNotifier

__all__ = [
    "BcryptPasswordHasher",
    "HttpSmsSender",
    "JwtCredentialSigner",
    "LoggingSmsSender",
    "SmsVerificationNotifier",
]
