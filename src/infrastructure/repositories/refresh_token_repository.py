"""Refresh Token Repository implementation using SQLModel / SQLAlchemy async."""

import uuid
from typing import Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from structlog import get_logger

from src.core.exceptions import PersistenceError
from src.domain.entities.refresh_token import RefreshToken
from src.domain.interfaces.repositories import IRefreshTokenRepository
from src.infrastructure.database.async_db import Database
from src.infrastructure.database.models import RefreshTokenRecord

logger = get_logger(__name__)


class RefreshTokenRepository(IRefreshTokenRepository):
    """Deletes are issued as immediate ``DELETE`` statements so that a
    delete-then-insert for the same user never trips the unique ``user_id``
    constraint inside one flush.
    """

    def __init__(self, database: Database):
        self._database = database

    async def save(self, token: RefreshToken) -> RefreshToken:
        try:
            async with self._database.session() as session:
                await session.merge(RefreshTokenRecord.from_domain(token))
                await session.flush()
        except SQLAlchemyError as e:
            logger.error("Error saving refresh token", user_id=str(token.user_id), error=str(e))
            raise PersistenceError() from e
        return token

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        async with self._database.session() as session:
            result = await session.execute(select(RefreshTokenRecord).where(RefreshTokenRecord.token == token))
            record = result.scalars().first()
            return record.to_domain() if record is not None else None

    async def get_by_user_id(self, user_id: uuid.UUID) -> Optional[RefreshToken]:
        async with self._database.session() as session:
            result = await session.execute(select(RefreshTokenRecord).where(RefreshTokenRecord.user_id == user_id))
            record = result.scalars().first()
            return record.to_domain() if record is not None else None

    async def delete(self, token: RefreshToken) -> None:
        async with self._database.session() as session:
            await session.execute(delete(RefreshTokenRecord).where(RefreshTokenRecord.id == token.id))

    async def delete_by_user_id(self, user_id: uuid.UUID) -> None:
        async with self._database.session() as session:
            await session.execute(delete(RefreshTokenRecord).where(RefreshTokenRecord.user_id == user_id))

    async def delete_all_by_user_ids(self, user_ids: Sequence[uuid.UUID]) -> int:
        if not user_ids:
            return 0
        async with self._database.session() as session:
            result = await session.execute(
                delete(RefreshTokenRecord).where(RefreshTokenRecord.user_id.in_(list(user_ids)))
            )
            return result.rowcount or 0
