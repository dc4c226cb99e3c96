"""Session tokens carried in the ``auth_token`` cookie.

Tokens are HMAC-signed JWTs whose claims mirror ``TokenPayload``.
"""

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel

from agora.config import AuthSettings

REQUIRED_CLAIMS = ["exp", "user_id", "username"]


class TokenPayload(BaseModel):
    """Claims of a session token."""

    user_id: str
    username: str
    exp: datetime


class JWTError(Exception):
    """Raised for tokens that are malformed, forged or expired."""

    pass


def create_token(user_id: str, username: str, settings: AuthSettings) -> str:
    """Sign a session token for a user.

    Sessions are issued by the identity service that shares ``jwt_secret``;
    this produces the same format for test setup and local tooling.

    Args:
        user_id: User ID
        username: Username shown by clients
        settings: Authentication settings (secret, algorithm, lifetime)

    Returns:
        Encoded JWT
    """
    payload = TokenPayload(
        user_id=user_id,
        username=username,
        exp=datetime.now() + timedelta(days=settings.jwt_expiry_days),
    )
    return jwt.encode(
        payload.model_dump(), settings.jwt_secret, algorithm=settings.jwt_algorithm
    )


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check a token's signature and expiry and return its claims.

    Args:
        token: Encoded JWT
        settings: Authentication settings

    Returns:
        Decoded claims

    Raises:
        JWTError: If the token is expired, forged or lacks a required claim
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    return TokenPayload(**claims)
