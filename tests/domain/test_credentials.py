from datetime import UTC, datetime, timedelta

import jwt
import pytest
from protean.exceptions import ValidationError

from storefront.auth.exceptions import InvalidToken
from storefront.auth.tokens import decode_token, issue_token
from storefront.shared.settings import get_jwt_secret
from storefront.user.passwords import hash_password, verify_password
from storefront.user.user import User


class TestPasswords:
    def test_hash_is_not_the_password(self):
        hashed = hash_password("secret-pass")
        assert hashed != "secret-pass"
        assert hashed.startswith("$2")

    def test_verify(self):
        hashed = hash_password("secret-pass")
        assert verify_password("secret-pass", hashed) is True
        assert verify_password("wrong-pass", hashed) is False

    def test_verify_against_non_bcrypt_value(self):
        assert verify_password("secret-pass", "plaintext") is False

    def test_empty_password_never_verifies(self):
        assert verify_password("", hash_password("secret-pass")) is False

    def test_password_over_bcrypt_limit_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            hash_password("é" * 40)
        assert "password" in exc.value.messages

    def test_password_at_bcrypt_limit_hashes(self):
        password = "x" * 72
        assert verify_password(password, hash_password(password)) is True

    def test_overlong_password_never_verifies(self):
        assert verify_password("x" * 100, hash_password("x" * 72)) is False


class TestTokens:
    def _user(self):
        return User.register(name="Ada", email="ada@example.com", password_hash="hashed", role="admin")

    def test_claims(self):
        user = self._user()
        claims = decode_token(issue_token(user))
        assert claims["sub"] == str(user.id)
        assert claims["email"] == "ada@example.com"
        assert claims["role"] == "admin"
        assert claims["exp"] > claims["iat"]

    def test_tampered_token(self):
        token = issue_token(self._user())
        with pytest.raises(InvalidToken):
            decode_token(token + "tampered")

    def test_token_signed_with_other_secret(self):
        token = jwt.encode({"sub": "user-001", "exp": datetime.now(UTC) + timedelta(hours=1)}, "other", "HS256")
        with pytest.raises(InvalidToken):
            decode_token(token)

    def test_expired_token(self):
        token = jwt.encode(
            {"sub": "user-001", "exp": datetime.now(UTC) - timedelta(seconds=1)},
            get_jwt_secret(),
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            decode_token(token)

    def test_token_without_subject(self):
        token = jwt.encode({"exp": datetime.now(UTC) + timedelta(hours=1)}, get_jwt_secret(), algorithm="HS256")
        with pytest.raises(InvalidToken):
            decode_token(token)

    def test_lifetime_follows_setting(self, monkeypatch):
        monkeypatch.setenv("JWT_EXPIRES_IN_HOURS", "2")
        claims = decode_token(issue_token(self._user()))
        assert claims["exp"] - claims["iat"] == 2 * 3600
