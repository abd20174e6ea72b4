"""FastAPI dependencies that authenticate the bearer token and check roles."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.auth.exceptions import InvalidToken
from storefront.auth.tokens import decode_token
from storefront.user.user import Role, User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail="Not authenticated"):
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User:
    """Load the user named by the bearer token."""
    if credentials is None:
        raise _unauthorized()

    try:
        claims = decode_token(credentials.credentials)
        return current_domain.repository_for(User).get(claims["sub"])
    except InvalidToken as exc:
        logger.info("token_rejected", reason=str(exc))
        raise _unauthorized("Invalid or expired token") from exc
    except ObjectNotFoundError as exc:
        logger.info("token_rejected", reason="user_not_found")
        raise _unauthorized("Invalid or expired token") from exc


def require_roles(*roles: Role):
    allowed = {role.value for role in roles}

    async def dependency(user: User = Depends(current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return dependency


admin_only = require_roles(Role.ADMIN, Role.SUPER_ADMIN)
super_admin_only = require_roles(Role.SUPER_ADMIN)
