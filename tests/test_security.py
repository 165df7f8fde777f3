"""Unit tests for core/security.py: bcrypt hashing and JWT issue/verify."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from blog_api.core.errors import UnauthorizedError
from blog_api.core.security import SecurityManager
from blog_api.utils.config import Settings


@pytest.fixture
def security():
    return SecurityManager(Settings(secret_key="unit-secret", bcrypt_rounds=4))


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self, security):
        hashed = security.hash_password("Secret_123")
        assert hashed != "Secret_123"
        assert hashed.startswith("$2")

    def test_verify(self, security):
        hashed = security.hash_password("Secret_123")
        assert security.verify_password("Secret_123", hashed) is True
        assert security.verify_password("wrong password", hashed) is False

    def test_salted(self, security):
        assert security.hash_password("Secret_123") != security.hash_password("Secret_123")


class TestAccessToken:
    def test_round_trip_resolves_user_id(self, security):
        token = security.create_access_token(7)
        assert security.decode_access_token(token) == 7

    def test_claims(self, security):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        token = security.create_access_token(3, now=now)
        claims = jwt.get_unverified_claims(token)

        assert claims["sub"] == "3"
        assert claims["exp"] - claims["iat"] == 60 * 60

    def test_no_expiry_when_disabled(self):
        security = SecurityManager(
            Settings(secret_key="unit-secret", bcrypt_rounds=4, access_token_expire_minutes=0)
        )
        claims = jwt.get_unverified_claims(security.create_access_token(1))
        assert "exp" not in claims

    def test_expired_token_rejected(self, security):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = security.create_access_token(1, now=past)

        with pytest.raises(UnauthorizedError):
            security.decode_access_token(token)

    def test_foreign_signature_rejected(self, security):
        other = SecurityManager(Settings(secret_key="another-secret", bcrypt_rounds=4))
        with pytest.raises(UnauthorizedError):
            security.decode_access_token(other.create_access_token(1))

    @pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
    def test_malformed_rejected(self, security, token):
        with pytest.raises(UnauthorizedError):
            security.decode_access_token(token)

    def test_non_numeric_subject_rejected(self, security):
        token = jwt.encode({"sub": "john"}, "unit-secret", algorithm="HS256")
        with pytest.raises(UnauthorizedError):
            security.decode_access_token(token)
