"""JWT access tokens signed with PyJWT."""

from datetime import UTC, datetime

import jwt

from storefront.auth.exceptions import InvalidToken
from storefront.shared.settings import get_jwt_algorithm, get_jwt_secret, get_token_lifetime


def issue_token(user) -> str:
    now = datetime.now(UTC)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": now + get_token_lifetime(),
    }
    return jwt.encode(claims, get_jwt_secret(), algorithm=get_jwt_algorithm())


def decode_token(token: str) -> dict:
    """Return the verified claims, raising InvalidToken on any failure."""
    try:
        claims = jwt.decode(
            token,
            get_jwt_secret(),
            algorithms=[get_jwt_algorithm()],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc
    return claims
