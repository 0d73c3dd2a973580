"""Tests for the User aggregate and its account status state machine."""

from datetime import datetime, timedelta, timezone

import pytest

from src.core.exceptions import (
    AccountStateConflictError,
    DomainValidationError,
    InvalidPhoneFormatError,
    InvalidUsernameFormatError,
)
from src.domain.entities.user import AccountStatus, Role, User
from tests.factories.user import create_fake_user


class TestUserCreation:
    def test_create_starts_pending_with_user_role(self):
        # Act
        user = User.create("alice_01", "Alice Liddell", "+15551234567", "hash")

        # Assert
        assert user.status is AccountStatus.PENDING_VERIFICATION
        assert user.role is Role.USER
        assert user.created_at == user.updated_at
        assert user.created_at.tzinfo is not None

    def test_create_assigns_distinct_ids(self):
        first = User.create("alice_01", "Alice Liddell", "+15551234567", "hash")
        second = User.create("alice_02", "Alice Liddell", "+15551234568", "hash")

        assert first.id != second.id

    def test_invalid_fields_are_rejected(self):
        with pytest.raises(InvalidUsernameFormatError):
            User.create("a!", "Alice Liddell", "+15551234567", "hash")
        with pytest.raises(InvalidPhoneFormatError):
            User.create("alice_01", "Alice Liddell", "5551234567", "hash")

    def test_blank_password_hash_is_rejected(self):
        with pytest.raises(DomainValidationError):
            User.create("alice_01", "Alice Liddell", "+15551234567", "")

    def test_reconstitute_normalizes_naive_timestamps(self):
        naive = datetime(2024, 1, 1, 12, 0)

        user = create_fake_user(created_at=naive, updated_at=naive)

        assert user.created_at.tzinfo is timezone.utc

    def test_password_hash_not_in_repr(self):
        user = create_fake_user(password_hash="super-secret-hash")

        assert "super-secret-hash" not in repr(user)


class TestAccountStateMachine:
    def test_confirm_verification_activates_pending_account(self):
        # Arrange
        user = create_fake_user(status=AccountStatus.PENDING_VERIFICATION)
        before = user.updated_at - timedelta(seconds=1)
        user.updated_at = before

        # Act
        user.confirm_verification()

        # Assert
        assert user.status is AccountStatus.ACTIVE
        assert user.updated_at > before

    def test_confirm_verification_of_active_account_is_invalid_input(self):
        user = create_fake_user(status=AccountStatus.ACTIVE)

        with pytest.raises(DomainValidationError) as exc_info:
            user.confirm_verification()
        assert exc_info.value.code == "account_already_verified"

    @pytest.mark.parametrize("status", [AccountStatus.LOCKED, AccountStatus.DISABLED])
    def test_confirm_verification_conflicts_for_locked_or_disabled(self, status):
        user = create_fake_user(status=status)

        with pytest.raises(AccountStateConflictError) as exc_info:
            user.confirm_verification()
        assert exc_info.value.status is status

    @pytest.mark.parametrize(
        "status", [AccountStatus.PENDING_VERIFICATION, AccountStatus.LOCKED, AccountStatus.DISABLED]
    )
    def test_ensure_account_enabled_rejects_non_active(self, status):
        user = create_fake_user(status=status)

        with pytest.raises(AccountStateConflictError) as exc_info:
            user.ensure_account_enabled()
        assert exc_info.value.code == f"account_{status.value.lower()}"

    def test_ensure_account_enabled_passes_for_active(self):
        create_fake_user(status=AccountStatus.ACTIVE).ensure_account_enabled()

    @pytest.mark.parametrize("status", [AccountStatus.PENDING_VERIFICATION, AccountStatus.ACTIVE])
    def test_pending_and_active_may_request_codes(self, status):
        create_fake_user(status=status).ensure_can_request_otp()

    @pytest.mark.parametrize("status", [AccountStatus.LOCKED, AccountStatus.DISABLED])
    def test_locked_and_disabled_may_not_request_codes(self, status):
        with pytest.raises(AccountStateConflictError):
            create_fake_user(status=status).ensure_can_request_otp()

    def test_lock_and_unlock_round_trip(self):
        user = create_fake_user(status=AccountStatus.ACTIVE)

        user.lock()
        assert user.is_locked
        user.unlock()
        assert user.is_enabled

    def test_unlock_requires_locked_account(self):
        with pytest.raises(DomainValidationError):
            create_fake_user(status=AccountStatus.ACTIVE).unlock()

    def test_activate_refuses_disabled_account(self):
        with pytest.raises(AccountStateConflictError):
            create_fake_user(status=AccountStatus.DISABLED).activate()

    @pytest.mark.parametrize(
        "status",
        [AccountStatus.PENDING_VERIFICATION, AccountStatus.ACTIVE, AccountStatus.LOCKED, AccountStatus.DISABLED],
    )
    def test_disable_account_from_any_status(self, status):
        user = create_fake_user(status=status)

        user.disable_account()

        assert user.is_disabled

    def test_disable_is_idempotent_and_keeps_timestamp(self):
        user = create_fake_user(status=AccountStatus.DISABLED)
        stamp = user.updated_at

        user.disable_account()

        assert user.updated_at == stamp


class TestAttributeUpdates:
    def test_updates_touch_updated_at(self):
        # Arrange
        old = datetime.now(timezone.utc) - timedelta(days=1)
        user = create_fake_user(created_at=old, updated_at=old)

        # Act
        user.update_phone("+15557654321")
        user.update_profile("Alice P. Liddell")
        user.change_username("alice_02")
        user.update_password_hash("new-hash")

        # Assert
        assert user.phone == "+15557654321"
        assert user.full_name == "Alice P. Liddell"
        assert user.username == "alice_02"
        assert user.password_hash == "new-hash"
        assert user.updated_at > old

    def test_update_phone_validates(self):
        with pytest.raises(InvalidPhoneFormatError):
            create_fake_user().update_phone("12345")
