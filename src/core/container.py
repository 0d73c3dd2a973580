"""Service container.

Everything a request handler needs (stores, repositories, engines, the rate
limiter and the flow services) is built once at process start by
``ServiceContainer.build`` and stored on ``app.state.container``. Nothing in
the domain or the infrastructure layer looks services up globally.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Awaitable, Callable, List, Optional

import structlog

from src.core.config.settings import Settings
from src.domain.interfaces.repositories import IRefreshTokenRepository, IUserRepository
from src.domain.interfaces.services import (
    ICredentialSigner,
    IPasswordHasher,
    ISmsSender,
    ITransactionManager,
)
from src.domain.interfaces.stores import IKeyValueStore
from src.domain.rate_limiting import GLOBAL, LOGIN, SENSITIVE_OPERATION, RateLimiter, RateLimiterRegistry
from src.domain.services.account import AccountCleanupService, PhoneChangeService, ProfileService
from src.domain.services.authentication import (
    AccountVerificationService,
    PasswordChangeService,
    PasswordResetService,
    SessionService,
    SignupService,
)
from src.domain.services.notification import VerificationDispatcher
from src.domain.services.otp import OtpService, OtpSessionService, PasswordResetTokenService
from src.domain.services.tokens import AuthTokenService, RefreshTokenService
from src.infrastructure.database.async_db import (
    Database,
    InMemoryTransactionManager,
    SqlTransactionManager,
    create_engine,
)
from src.infrastructure.redis import close_redis_client, create_redis_client
from src.infrastructure.repositories import (
    InMemoryRefreshTokenRepository,
    InMemoryUserRepository,
    RefreshTokenRepository,
    UserRepository,
)
from src.infrastructure.services import (
    BcryptPasswordHasher,
    HttpSmsSender,
    JwtCredentialSigner,
    LoggingSmsSender,
    SmsVerificationNotifier,
)
from src.infrastructure.stores import (
    InMemoryKeyValueStore,
    KeyValueOtpSessionStore,
    KeyValueOtpStore,
    KeyValuePasswordResetTokenStore,
    PHONE_CHANGE_OTP_PREFIX,
    KeyValuePendingPhoneChangeStore,
    RedisKeyValueStore,
)

logger = structlog.get_logger(__name__)

MEMORY_BACKEND = "memory"
REDIS_SQL_BACKEND = "redis-sql"


@dataclass
class ServiceContainer:
    """Explicitly wired application services.

    Attributes:
        settings: Configuration the container was built from.
        user_repository / refresh_token_repository: Durable state.
        key_value_store: TTL state (OTPs, sessions, reset tokens, pending phones).
        credential_signer: Access JWT issuing and verification.
        rate_limiter: Token bucket limiter invoked by the routes.
        database: SQL database when ``STORAGE_BACKEND=redis-sql``.
    """

    settings: Settings
    user_repository: IUserRepository
    refresh_token_repository: IRefreshTokenRepository
    key_value_store: IKeyValueStore
    transaction_manager: ITransactionManager
    password_hasher: IPasswordHasher
    credential_signer: ICredentialSigner
    sms_sender: ISmsSender
    rate_limiter: RateLimiter
    otp_service: OtpService
    phone_change_otp_service: OtpService
    otp_session_service: OtpSessionService
    reset_token_service: PasswordResetTokenService
    refresh_token_service: RefreshTokenService
    auth_token_service: AuthTokenService
    signup_service: SignupService
    account_verification_service: AccountVerificationService
    session_service: SessionService
    password_reset_service: PasswordResetService
    password_change_service: PasswordChangeService
    phone_change_service: PhoneChangeService
    profile_service: ProfileService
    account_cleanup_service: AccountCleanupService
    database: Optional[Database] = None
    _closers: List[Callable[[], Awaitable[Any]]] = field(default_factory=list, repr=False)

    @classmethod
    def build(
        cls,
        settings: Settings,
        sms_sender: Optional[ISmsSender] = None,
        key_value_store: Optional[IKeyValueStore] = None,
        password_hasher: Optional[IPasswordHasher] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> "ServiceContainer":
        """Assemble every service from ``settings``.

        The keyword arguments replace single collaborators (tests pass a
        capturing SMS sender, a fast hasher or a custom limiter).
        """
        closers: List[Callable[[], Awaitable[Any]]] = []
        database: Optional[Database] = None

        if settings.STORAGE_BACKEND == REDIS_SQL_BACKEND:
            database = Database(
                create_engine(
                    settings.DATABASE_URL,
                    echo=settings.DATABASE_ECHO,
                    pool_size=settings.POSTGRES_POOL_SIZE,
                    max_overflow=settings.POSTGRES_MAX_OVERFLOW,
                )
            )
            closers.append(database.dispose)
            user_repository: IUserRepository = UserRepository(database)
            refresh_token_repository: IRefreshTokenRepository = RefreshTokenRepository(database)
            transaction_manager: ITransactionManager = SqlTransactionManager(database)
            if key_value_store is None:
                redis_client = create_redis_client(settings.REDIS_URL)
                closers.append(lambda: close_redis_client(redis_client))
                key_value_store = RedisKeyValueStore(redis_client)
        else:
            user_repository = InMemoryUserRepository()
            refresh_token_repository = InMemoryRefreshTokenRepository()
            transaction_manager = InMemoryTransactionManager()
            key_value_store = key_value_store or InMemoryKeyValueStore()

        if sms_sender is None:
            if settings.SMS_TEST_MODE:
                sms_sender = LoggingSmsSender()
            else:
                http_sender = HttpSmsSender(
                    gateway_url=settings.SMS_GATEWAY_URL or "",
                    api_token=settings.SMS_GATEWAY_TOKEN.get_secret_value() if settings.SMS_GATEWAY_TOKEN else "",
                    sender_id=settings.SMS_SENDER_ID,
                    timeout_seconds=settings.SMS_TIMEOUT_SECONDS,
                    max_attempts=settings.SMS_MAX_ATTEMPTS,
                )
                closers.append(http_sender.aclose)
                sms_sender = http_sender

        password_hasher = password_hasher or BcryptPasswordHasher(rounds=settings.BCRYPT_WORK_FACTOR)
        credential_signer = JwtCredentialSigner(
            signing_key=settings.signing_key,
            verification_key=settings.verification_key,
            algorithm=settings.JWT_ALGORITHM,
            issuer=settings.JWT_ISSUER,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )
        rate_limiter = rate_limiter or RateLimiter(
            RateLimiterRegistry.from_rate_strings(
                {
                    LOGIN: settings.RATE_LIMIT_LOGIN,
                    SENSITIVE_OPERATION: settings.RATE_LIMIT_SENSITIVE,
                    GLOBAL: settings.RATE_LIMIT_GLOBAL,
                }
            ),
            enabled=settings.RATE_LIMIT_ENABLED,
            idle_ttl_seconds=settings.RATE_LIMIT_IDLE_TTL_SECONDS,
        )

        region = settings.DEFAULT_PHONE_REGION
        otp_service = OtpService(
            KeyValueOtpStore(key_value_store), ttl=timedelta(minutes=settings.OTP_TTL_MINUTES)
        )
        # Phone change codes are keyed apart from signup and password reset codes.
        phone_change_otp_service = OtpService(
            KeyValueOtpStore(key_value_store, prefix=PHONE_CHANGE_OTP_PREFIX),
            ttl=timedelta(minutes=settings.OTP_TTL_MINUTES),
        )
        otp_session_service = OtpSessionService(
            KeyValueOtpSessionStore(key_value_store), ttl=timedelta(minutes=settings.OTP_SESSION_TTL_MINUTES)
        )
        reset_token_service = PasswordResetTokenService(
            KeyValuePasswordResetTokenStore(key_value_store),
            ttl=timedelta(minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES),
        )
        refresh_token_service = RefreshTokenService(
            refresh_token_repository, expiration_days=settings.REFRESH_TOKEN_EXPIRE_DAYS
        )
        auth_token_service = AuthTokenService(refresh_token_service, credential_signer)
        dispatcher = VerificationDispatcher(
            SmsVerificationNotifier(otp_service, sms_sender, language=settings.DEFAULT_LANGUAGE)
        )
        phone_change_dispatcher = VerificationDispatcher(
            SmsVerificationNotifier(phone_change_otp_service, sms_sender, language=settings.DEFAULT_LANGUAGE)
        )

        container = cls(
            settings=settings,
            user_repository=user_repository,
            refresh_token_repository=refresh_token_repository,
            key_value_store=key_value_store,
            transaction_manager=transaction_manager,
            password_hasher=password_hasher,
            credential_signer=credential_signer,
            sms_sender=sms_sender,
            rate_limiter=rate_limiter,
            otp_service=otp_service,
            phone_change_otp_service=phone_change_otp_service,
            otp_session_service=otp_session_service,
            reset_token_service=reset_token_service,
            refresh_token_service=refresh_token_service,
            auth_token_service=auth_token_service,
            signup_service=SignupService(
                user_repository, password_hasher, otp_session_service, dispatcher, transaction_manager, region
            ),
            account_verification_service=AccountVerificationService(
                user_repository,
                otp_service,
                otp_session_service,
                auth_token_service,
                dispatcher,
                transaction_manager,
                region,
            ),
            session_service=SessionService(
                user_repository,
                refresh_token_repository,
                password_hasher,
                refresh_token_service,
                auth_token_service,
                transaction_manager,
            ),
            password_reset_service=PasswordResetService(
                user_repository,
                password_hasher,
                otp_service,
                otp_session_service,
                reset_token_service,
                dispatcher,
                transaction_manager,
                region,
            ),
            password_change_service=PasswordChangeService(user_repository, password_hasher, transaction_manager),
            phone_change_service=PhoneChangeService(
                user_repository,
                KeyValuePendingPhoneChangeStore(key_value_store),
                phone_change_otp_service,
                phone_change_dispatcher,
                transaction_manager,
                ttl=timedelta(minutes=settings.PENDING_PHONE_CHANGE_TTL_MINUTES),
                default_region=region,
            ),
            profile_service=ProfileService(user_repository, refresh_token_service, transaction_manager),
            account_cleanup_service=AccountCleanupService(
                user_repository,
                refresh_token_repository,
                transaction_manager,
                pending_max_age=timedelta(hours=settings.PENDING_ACCOUNT_MAX_AGE_HOURS),
                disabled_max_age=timedelta(days=settings.DISABLED_ACCOUNT_MAX_AGE_DAYS),
            ),
            database=database,
            _closers=closers,
        )
        logger.info(
            "Service container built",
            storage_backend=settings.STORAGE_BACKEND,
            sms_test_mode=settings.SMS_TEST_MODE,
            rate_limit_enabled=settings.RATE_LIMIT_ENABLED,
        )
        return container

    async def aclose(self) -> None:
        """Release connections opened by ``build``."""
        for close in reversed(self._closers):
            try:
                await close()
            except Exception as e:
                logger.error("Error releasing resource", error=str(e))
        self._closers.clear()
