"""Tests for the bcrypt password hasher and the JWT credential signer."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jwt import decode as jwt_decode
from jwt import encode as jwt_encode

from src.core.exceptions import InvalidAccessTokenError
from src.domain.entities.user import Role
from src.infrastructure.services import BcryptPasswordHasher, JwtCredentialSigner
from tests.factories.user import create_fake_user

SECRET = "unit-test-secret-key-0123456789abcdef-xyz"


class TestBcryptPasswordHasher:
    @pytest.fixture
    def hasher(self):
        return BcryptPasswordHasher(rounds=4)

    def test_hash_and_match(self, hasher):
        password_hash = hasher.hash("Secr3t!1")

        assert password_hash.startswith("$2b$04$")
        assert hasher.matches("Secr3t!1", password_hash)
        assert not hasher.matches("Secr3t!2", password_hash)

    def test_hashes_are_salted(self, hasher):
        assert hasher.hash("Secr3t!1") != hasher.hash("Secr3t!1")

    @pytest.mark.parametrize("bad_hash", ["", "not-a-bcrypt-hash"])
    def test_malformed_hash_never_matches(self, hasher, bad_hash):
        assert hasher.matches("Secr3t!1", bad_hash) is False


class TestJwtCredentialSigner:
    @pytest.fixture
    def now(self):
        return datetime(2030, 1, 1, tzinfo=timezone.utc)

    @pytest.fixture
    def signer(self):
        return JwtCredentialSigner(SECRET, SECRET, algorithm="HS256", issuer="phonegate", expire_minutes=15)

    def test_claims_round_trip(self, signer):
        # Arrange
        user = create_fake_user(role=Role.MANAGER)

        # Act
        credential = signer.issue_access_credential(user)
        claims = signer.verify_access_credential(credential.token)

        # Assert
        assert claims.user_id == user.id
        assert claims.username == user.username
        assert claims.role is Role.MANAGER
        assert abs((credential.expires_at - claims.expires_at).total_seconds()) < 1

    def test_payload_carries_standard_claims(self, signer):
        user = create_fake_user()

        token = signer.issue_access_credential(user).token
        payload = jwt_decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False}, issuer="phonegate")

        assert set(payload) == {"sub", "username", "role", "iat", "exp", "iss"}
        assert payload["exp"] - payload["iat"] == 15 * 60

    def test_expired_credential_is_rejected(self, now):
        past = JwtCredentialSigner(SECRET, SECRET, algorithm="HS256", clock=lambda: now - timedelta(days=365 * 10))
        token = past.issue_access_credential(create_fake_user()).token

        with pytest.raises(InvalidAccessTokenError):
            JwtCredentialSigner(SECRET, SECRET, algorithm="HS256").verify_access_credential(token)

    def test_foreign_issuer_is_rejected(self, signer):
        other = JwtCredentialSigner(SECRET, SECRET, algorithm="HS256", issuer="someone-else")
        token = other.issue_access_credential(create_fake_user()).token

        with pytest.raises(InvalidAccessTokenError):
            signer.verify_access_credential(token)

    def test_wrong_signature_is_rejected(self, signer):
        forged = jwt_encode(
            {"sub": str(uuid.uuid4()), "iat": 0, "exp": 4102444800, "iss": "phonegate"},
            "another-secret-key-0123456789abcdef-xyz",
            algorithm="HS256",
        )

        with pytest.raises(InvalidAccessTokenError):
            signer.verify_access_credential(forged)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_tokens_are_rejected(self, signer, token):
        with pytest.raises(InvalidAccessTokenError):
            signer.verify_access_credential(token)

    def test_missing_subject_is_rejected(self, signer):
        token = jwt_encode({"iat": 0, "exp": 4102444800, "iss": "phonegate"}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidAccessTokenError):
            signer.verify_access_credential(token)
