"""
Tests for access tokens

A token is valid when its signature checks out and it has not expired.
Every failure looks the same to the caller: verify() returns None.
"""

from datetime import UTC, datetime, timedelta

from jose import jwt

from bookreview.config import get_settings
from bookreview.services.security import ALGORITHM, TokenService

TEST_SECRET_KEY = get_settings().secret_key


class TestIssue:
    def test_issue_embeds_username(self, token_service: TokenService):
        credential = token_service.issue("alice")

        assert credential.username == "alice"
        assert credential.token.count(".") == 2
        payload = jwt.decode(credential.token, TEST_SECRET_KEY, algorithms=[ALGORITHM])
        assert payload["sub"] == "alice"
        assert payload["type"] == "access"

    def test_default_lifetime_is_one_hour(self, token_service: TokenService):
        before = datetime.now(UTC)
        credential = token_service.issue("alice")

        lifetime = credential.expires_at - before
        assert timedelta(minutes=59) < lifetime <= timedelta(hours=1, seconds=1)

    def test_custom_lifetime(self):
        tokens = TokenService(secret_key=TEST_SECRET_KEY, expires_seconds=60)
        credential = tokens.issue("alice")

        assert credential.expires_at - datetime.now(UTC) <= timedelta(seconds=60)


class TestVerify:
    def test_round_trip(self, token_service: TokenService):
        credential = token_service.issue("alice")

        assert token_service.verify(credential.token) == "alice"

    def test_expired_token(self):
        tokens = TokenService(secret_key=TEST_SECRET_KEY, expires_seconds=-10)
        credential = tokens.issue("alice")

        assert tokens.verify(credential.token) is None

    def test_tampered_token(self, token_service: TokenService):
        token = token_service.issue("alice").token
        header, payload, signature = token.split(".")
        forged = token_service.issue("mallory").token.split(".")[1]

        assert token_service.verify(f"{header}.{forged}.{signature}") is None
        assert token_service.verify(f"{header}.{payload}.{signature[:-4]}AAAA") is None

    def test_different_signing_key(self, token_service: TokenService):
        other = TokenService(secret_key="another-secret-key-that-is-also-32-chars-long")
        token = other.issue("alice").token

        assert token_service.verify(token) is None

    def test_garbage(self, token_service: TokenService):
        assert token_service.verify("not-a-token") is None
        assert token_service.verify("") is None

    def test_wrong_token_type(self, token_service: TokenService):
        token = jwt.encode(
            {
                "sub": "alice",
                "type": "refresh",
                "exp": datetime.now(UTC) + timedelta(minutes=5),
            },
            TEST_SECRET_KEY,
            algorithm=ALGORITHM,
        )

        assert token_service.verify(token) is None

    def test_missing_subject(self, token_service: TokenService):
        token = jwt.encode(
            {"type": "access", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            TEST_SECRET_KEY,
            algorithm=ALGORITHM,
        )

        assert token_service.verify(token) is None
