"""
Security Service

Issues and verifies the signed access tokens stored in a user's session.

A token is a JWT carrying the username ("sub"), an absolute expiry
("exp", issuance time + token lifetime) and its type. Validity depends on
the signature and the expiry only; the user directory is not consulted.

Usage:
    tokens = TokenService(secret_key="...")
    credential = tokens.issue("alice")
    tokens.verify(credential.token)  # -> "alice"
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from bookreview.config import Settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_SECONDS = 60 * 60
TOKEN_TYPE = "access"


@dataclass(frozen=True)
class Credential:
    """A signed token plus the username it was issued to."""

    token: str
    username: str
    expires_at: datetime


class TokenService:
    """Creates and checks access tokens with one signing key."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = ALGORITHM,
        expires_seconds: int = ACCESS_TOKEN_EXPIRE_SECONDS,
    ) -> None:
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_seconds = expires_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.token_algorithm,
            expires_seconds=settings.token_expire_seconds,
        )

    def issue(self, username: str) -> Credential:
        """
        Create a token for a user who just proved their credentials.

        Args:
            username: Verified username to embed in the token

        Returns:
            Credential with the encoded token and its expiry
        """
        expire = datetime.now(UTC) + timedelta(seconds=self.expires_seconds)
        to_encode = {"sub": username, "exp": expire, "type": TOKEN_TYPE}

        token = jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

        return Credential(token=token, username=username, expires_at=expire)

    def decode(self, token: str) -> dict | None:
        """
        Decode and validate a token.

        Returns:
            Decoded payload if valid, None if tampered, malformed or expired
        """
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT decode error: {e}")
            return None

    def verify(self, token: str) -> str | None:
        """
        Check a token and return the username it was issued to.

        The cause of a failure (bad signature, expiry, wrong type) is not
        reported; every failure is simply None.
        """
        payload = self.decode(token)
        if payload is None:
            return None

        if payload.get("type") != TOKEN_TYPE:
            logger.warning(f"Token type mismatch: expected {TOKEN_TYPE}")
            return None

        username = payload.get("sub")
        if not isinstance(username, str) or not username:
            return None
        return username
