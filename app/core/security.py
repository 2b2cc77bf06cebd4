"""Security related functions."""

import jwt
from jwt import InvalidTokenError
from passlib.context import CryptContext

from app.core.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plain-text password for storage."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain-text password against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


class TokenAuthenticator:
    """
    Verifies bearer tokens issued by the authentication provider.

    Tokens are HS256 JWTs signed with ``settings.secret_key``; the ``sub``
    claim carries the user id. Issuing tokens is not this class's job.

    :ivar secret_key: The secret key used to verify JWT tokens.
    :type secret_key: str
    :ivar algorithm: The accepted signing algorithm.
    :type algorithm: str
    """

    def __init__(self, secret_key: str | None = None, algorithm: str | None = None):
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm

    def verify_token(self, token: str) -> dict | None:
        """
        Decode and verify a JWT.

        :param token: The encoded JWT.
        :return: The decoded payload, or None when the token is invalid,
            expired or carries no subject.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub"]},
            )
        except InvalidTokenError:
            return None
        return payload
