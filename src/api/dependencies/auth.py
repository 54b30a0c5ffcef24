"""Authentication dependencies for FastAPI."""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_resolver import JWTIdentityResolver
from infrastructure.auth.resolver import TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

_resolver: JWTIdentityResolver | None = None


def get_identity_resolver() -> JWTIdentityResolver:
    """Get or create the identity resolver singleton."""
    global _resolver
    if _resolver is None:
        _resolver = JWTIdentityResolver()
    return _resolver


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    resolver: JWTIdentityResolver = Depends(get_identity_resolver),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="No token, authorization denied",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await resolver.resolve(credentials.credentials)
    if not user:
        raise AuthenticationError(
            message="Token is not valid",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    # Every later log line of this request names the caller
    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
