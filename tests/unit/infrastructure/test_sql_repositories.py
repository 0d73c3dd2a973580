"""Tests for the SQL repositories and transaction manager on an SQLite database.

PostgreSQL runs in production; SQLite through ``aiosqlite`` exercises the same
SQLAlchemy statements, unique constraints and session handling.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from src.core.exceptions import RefreshTokenExpiredError, UserAlreadyExistsError
from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.user import AccountStatus
from src.domain.services.account import AccountCleanupService
from src.domain.services.tokens import RefreshTokenService
from src.infrastructure.database import Database, SqlTransactionManager
from src.infrastructure.repositories import RefreshTokenRepository, UserRepository
from tests.factories.user import create_fake_user


@pytest_asyncio.fixture
async def database(tmp_path):
    database = Database(create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'phonegate.db'}"))
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
def user_repository(database):
    return UserRepository(database)


@pytest.fixture
def refresh_token_repository(database):
    return RefreshTokenRepository(database)


@pytest.fixture
def transaction_manager(database):
    return SqlTransactionManager(database)


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_save_and_load_round_trip(self, user_repository):
        user = await user_repository.save(create_fake_user(username="alice_01", phone="+15551234567"))

        loaded = await user_repository.get_by_username("alice_01")

        assert loaded.id == user.id
        assert (await user_repository.get_by_phone("+15551234567")).id == user.id
        assert await user_repository.exists_by_username("alice_01")
        assert not await user_repository.exists_by_phone("+15557654321")

    @pytest.mark.asyncio
    async def test_save_updates_existing_row(self, user_repository):
        user = await user_repository.save(create_fake_user())

        user.update_profile("Renamed Person")
        await user_repository.save(user)

        assert (await user_repository.get_by_id(user.id)).full_name == "Renamed Person"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "override, field",
        [("username", UserAlreadyExistsError.USERNAME), ("phone", UserAlreadyExistsError.PHONE)],
    )
    async def test_unique_violation_on_insert(self, user_repository, override, field):
        # Arrange
        existing = await user_repository.save(create_fake_user())
        duplicate = create_fake_user(**{override: getattr(existing, override)})

        # Act
        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await user_repository.save(duplicate)

        # Assert
        assert exc_info.value.field == field
        assert await user_repository.get_by_id(duplicate.id) is None

    @pytest.mark.asyncio
    async def test_find_by_status_older_than(self, user_repository):
        now = datetime.now(timezone.utc)
        old = await user_repository.save(
            create_fake_user(status=AccountStatus.PENDING_VERIFICATION, created_at=now - timedelta(days=3))
        )
        await user_repository.save(create_fake_user(status=AccountStatus.PENDING_VERIFICATION, created_at=now))
        await user_repository.save(create_fake_user(status=AccountStatus.ACTIVE, created_at=now - timedelta(days=3)))

        found = await user_repository.find_by_status_older_than(
            AccountStatus.PENDING_VERIFICATION, now - timedelta(days=1)
        )

        assert [user.id for user in found] == [old.id]


class TestSqlTransactionManager:
    @pytest.mark.asyncio
    async def test_commits_on_success(self, user_repository, transaction_manager):
        user = create_fake_user()

        await transaction_manager.run(lambda: user_repository.save(user))

        assert await user_repository.get_by_id(user.id) is not None

    @pytest.mark.asyncio
    async def test_rolls_back_every_write_on_error(self, user_repository, transaction_manager):
        # Arrange
        first = create_fake_user()
        second = create_fake_user()

        async def _save_both_then_fail():
            await user_repository.save(first)
            await user_repository.save(second)
            raise RuntimeError("boom")

        # Act
        with pytest.raises(RuntimeError):
            await transaction_manager.run(_save_both_then_fail)

        # Assert
        assert await user_repository.get_by_id(first.id) is None
        assert await user_repository.get_by_id(second.id) is None

    @pytest.mark.asyncio
    async def test_nested_runs_join_the_outer_transaction(self, user_repository, transaction_manager):
        user = create_fake_user()

        async def _outer():
            await transaction_manager.run(lambda: user_repository.save(user))
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await transaction_manager.run(_outer)

        assert await user_repository.get_by_id(user.id) is None


class TestRefreshTokenRepository:
    @pytest.mark.asyncio
    async def test_rotation_inside_transactions_keeps_one_row_per_user(
        self, user_repository, refresh_token_repository, transaction_manager
    ):
        # Arrange
        user = await user_repository.save(create_fake_user())
        service = RefreshTokenService(refresh_token_repository)

        # Act
        first = await transaction_manager.run(lambda: service.issue(user))
        second = await transaction_manager.run(lambda: service.issue(user))
        third = await transaction_manager.run(lambda: service.issue(user))

        # Assert
        assert await refresh_token_repository.get_by_token(first.token) is None
        assert await refresh_token_repository.get_by_token(second.token) is None
        assert (await refresh_token_repository.get_by_user_id(user.id)).token == third.token

    @pytest.mark.asyncio
    async def test_expired_token_is_deleted_outside_a_transaction(self, user_repository, refresh_token_repository):
        # Arrange
        user = await user_repository.save(create_fake_user())
        issued = datetime.now(timezone.utc) - timedelta(days=8)
        token = await refresh_token_repository.save(RefreshToken.create(user.id, 7, now=issued))
        service = RefreshTokenService(refresh_token_repository)

        # Act
        stored = await service.validate(token.token)
        with pytest.raises(RefreshTokenExpiredError):
            await service.verify_not_expired(stored)

        # Assert
        assert await refresh_token_repository.get_by_token(token.token) is None

    @pytest.mark.asyncio
    async def test_delete_all_by_user_ids(self, user_repository, refresh_token_repository):
        users = [await user_repository.save(create_fake_user()) for _ in range(3)]
        for user in users:
            await refresh_token_repository.save(RefreshToken.create(user.id, 7))

        deleted = await refresh_token_repository.delete_all_by_user_ids([users[0].id, users[1].id])

        assert deleted == 2
        assert await refresh_token_repository.get_by_user_id(users[2].id) is not None


class TestAccountCleanupOnSql:
    @pytest.mark.asyncio
    async def test_sweep_deletes_users_and_tokens_and_is_idempotent(
        self, user_repository, refresh_token_repository, transaction_manager
    ):
        # Arrange
        now = datetime.now(timezone.utc)
        stale = await user_repository.save(
            create_fake_user(
                status=AccountStatus.DISABLED,
                created_at=now - timedelta(days=20),
                updated_at=now - timedelta(days=10),
            )
        )
        await refresh_token_repository.save(RefreshToken.create(stale.id, 7))
        recent = await user_repository.save(create_fake_user(status=AccountStatus.DISABLED, updated_at=now))
        service = AccountCleanupService(user_repository, refresh_token_repository, transaction_manager, batch_size=1)

        # Act
        first_run = await service.cleanup_disabled_accounts()
        second_run = await service.cleanup_disabled_accounts()

        # Assert
        assert (first_run, second_run) == (1, 0)
        assert await user_repository.get_by_id(stale.id) is None
        assert await refresh_token_repository.get_by_user_id(stale.id) is None
        assert await user_repository.get_by_id(recent.id) is not None
