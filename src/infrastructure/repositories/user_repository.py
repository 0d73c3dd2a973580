"""User Repository implementation using SQLModel / SQLAlchemy async.

Rows are mapped to ``User`` aggregates explicitly (``UserRecord.to_domain`` /
``UserRecord.from_domain``); the domain never sees a SQLModel instance.
"""

import uuid
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from structlog import get_logger

from src.core.exceptions import PersistenceError, UserAlreadyExistsError
from src.domain.entities.user import AccountStatus, User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.value_objects.phone import Phone
from src.domain.value_objects.username import Username
from src.infrastructure.database.async_db import Database
from src.infrastructure.database.models import UserRecord

logger = get_logger(__name__)

_AGE_COLUMNS = {
    "created_at": UserRecord.created_at,
    "updated_at": UserRecord.updated_at,
}


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of ``IUserRepository``.

    Uniqueness of ``username`` and ``phone`` is enforced by the table's unique
    constraints; a violation on flush surfaces as ``UserAlreadyExistsError``.
    """

    def __init__(self, database: Database):
        self._database = database

    async def save(self, user: User) -> User:
        try:
            async with self._database.session() as session:
                record = await session.get(UserRecord, user.id)
                if record is None:
                    record = UserRecord.from_domain(user)
                    session.add(record)
                else:
                    record.apply(user)
                await session.flush()
        except IntegrityError as e:
            field = _violated_field(e)
            logger.warning(
                "User save rejected - uniqueness violation",
                user_id=str(user.id),
                field=field,
                username=Username(user.username).mask_for_logging(),
                phone=Phone(user.phone).mask_for_logging(),
            )
            raise UserAlreadyExistsError(field) from e
        except SQLAlchemyError as e:
            logger.error("Error saving user", user_id=str(user.id), error=str(e))
            raise PersistenceError() from e

        logger.debug("User saved", user_id=str(user.id), status=user.status.value)
        return user

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        async with self._database.session() as session:
            record = await session.get(UserRecord, user_id)
            return record.to_domain() if record is not None else None

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self._get_one(UserRecord.username == username)

    async def get_by_phone(self, phone: str) -> Optional[User]:
        return await self._get_one(UserRecord.phone == phone)

    async def exists_by_username(self, username: str) -> bool:
        return await self._exists(UserRecord.username == username)

    async def exists_by_phone(self, phone: str) -> bool:
        return await self._exists(UserRecord.phone == phone)

    async def find_by_status_older_than(
        self,
        status: AccountStatus,
        cutoff: datetime,
        age_field: str = "created_at",
        limit: Optional[int] = None,
    ) -> List[User]:
        try:
            column = _AGE_COLUMNS[age_field]
        except KeyError:
            raise ValueError(f"Unsupported age field: {age_field}") from None

        statement = (
            select(UserRecord)
            .where(UserRecord.status == status.value, column < cutoff)
            .order_by(column)
        )
        if limit is not None:
            statement = statement.limit(limit)

        async with self._database.session() as session:
            result = await session.execute(statement)
            return [record.to_domain() for record in result.scalars().all()]

    async def delete_all(self, users: Sequence[User]) -> int:
        ids = [user.id for user in users]
        if not ids:
            return 0
        async with self._database.session() as session:
            result = await session.execute(delete(UserRecord).where(UserRecord.id.in_(ids)))
            deleted = result.rowcount or 0
        logger.info("Users deleted", count=deleted)
        return deleted

    async def _get_one(self, condition) -> Optional[User]:
        async with self._database.session() as session:
            result = await session.execute(select(UserRecord).where(condition))
            record = result.scalars().first()
            return record.to_domain() if record is not None else None

    async def _exists(self, condition) -> bool:
        async with self._database.session() as session:
            result = await session.execute(select(func.count()).select_from(UserRecord).where(condition))
            return result.scalar_one() > 0


def _violated_field(error: IntegrityError) -> str:
    detail = str(error.orig).lower()
    if "username" in detail:
        return UserAlreadyExistsError.USERNAME
    return UserAlreadyExistsError.PHONE
