"""SMS delivery adapters.

``LoggingSmsSender`` is used in development and tests (``SMS_TEST_MODE``): it
only logs. ``HttpSmsSender`` posts to an HTTP SMS gateway with retries.
"""

from typing import List, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.core.exceptions import DeliveryError
from src.domain.interfaces.services import ISmsSender
from src.domain.value_objects.phone import Phone

logger = structlog.get_logger(__name__)


class LoggingSmsSender(ISmsSender):
    """Records messages instead of sending them.

    The message body is never logged since it carries the code; tests can read
    ``sent_messages``.
    """

    def __init__(self) -> None:
        self.sent_messages: List[tuple[str, str]] = []

    async def send(self, phone: str, message: str) -> None:
        self.sent_messages.append((phone, message))
        logger.info("SMS captured (test mode)", phone=Phone(phone).mask_for_logging(), length=len(message))

    def last_message_to(self, phone: str) -> Optional[str]:
        for recipient, message in reversed(self.sent_messages):
            if recipient == phone:
                return message
        return None


class HttpSmsSender(ISmsSender):
    """Delivers messages through a JSON HTTP gateway.

    Request body: ``{"to": <E.164>, "from": <sender id>, "message": <text>}``
    with a bearer token. Transport errors and 5xx responses are retried with
    exponential backoff; 4xx responses fail immediately.
    """

    def __init__(
        self,
        gateway_url: str,
        api_token: str,
        sender_id: str = "",
        timeout_seconds: float = 5.0,
        max_attempts: int = 3,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._gateway_url = gateway_url
        self._api_token = api_token
        self._sender_id = sender_id
        self._max_attempts = max_attempts
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def send(self, phone: str, message: str) -> None:
        masked = Phone(phone).mask_for_logging()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._max_attempts),
                wait=wait_exponential(multiplier=0.2, max=2),
                retry=retry_if_exception_type((httpx.TransportError, _GatewayUnavailable)),
                reraise=False,
            ):
                with attempt:
                    await self._post(phone, message)
        except RetryError as e:
            logger.error("SMS delivery failed after retries", phone=masked, attempts=self._max_attempts)
            raise DeliveryError() from e
        except httpx.HTTPStatusError as e:
            logger.error("SMS gateway rejected message", phone=masked, status_code=e.response.status_code)
            raise DeliveryError() from e

        logger.info("SMS delivered", phone=masked)

    async def _post(self, phone: str, message: str) -> None:
        response = await self._client.post(
            self._gateway_url,
            json={"to": phone, "from": self._sender_id, "message": message},
            headers={"Authorization": f"Bearer {self._api_token}"},
        )
        if response.status_code >= 500:
            raise _GatewayUnavailable(response.status_code)
        response.raise_for_status()

    async def aclose(self) -> None:
        await self._client.aclose()


class _GatewayUnavailable(Exception):
    def __init__(self, status_code: int):
        super().__init__(f"SMS gateway returned {status_code}")
        self.status_code = status_code
