"""JWT identity resolver.

Tokens signed with the shared secret (HS256 by default) are verified
locally. Tokens signed with an asymmetric key (RS256/ES256) are verified
against the identity provider's JWKS endpoint when ``jwks_url`` is set.

Expected payload:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "name": "Jane Dev",
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
import structlog
from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.resolver import TokenUser

logger = structlog.get_logger()

_ASYMMETRIC_ALGORITHMS = {"RS256", "ES256"}


class JWTIdentityResolver:
    """JWT-based identity resolver."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks_url: str = settings.jwks_url,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks_url = jwks_url
        self._jwks: dict[str, dict[str, Any]] | None = None

    async def resolve(self, token: str) -> Optional[TokenUser]:
        """Verify a JWT and extract the caller's identity."""
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg in _ASYMMETRIC_ALGORITHMS:
                key = await self._signing_key(header.get("kid"))
                if key is None:
                    return None
                payload = jwt.decode(
                    token, key, algorithms=[alg], options={"verify_aud": False}
                )
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email:
            return None

        try:
            uid = UUID(user_id)
        except ValueError:
            return None

        return TokenUser(id=uid, email=email, name=payload.get("name"))

    async def _signing_key(self, kid: str | None) -> dict[str, Any] | None:
        """Look up a JWKS key by id, refetching once on a miss (key rotation)."""
        if not kid or not self._jwks_url:
            return None

        if self._jwks is None or kid not in self._jwks:
            self._jwks = await self._fetch_jwks()

        key = self._jwks.get(kid)
        if key is None:
            logger.warning("jwks_key_not_found", kid=kid)
        return key

    async def _fetch_jwks(self) -> dict[str, dict[str, Any]]:
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(self._jwks_url)
                response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("jwks_fetch_failed", url=self._jwks_url)
            return {}

        keys = {k["kid"]: k for k in response.json().get("keys", []) if k.get("kid")}
        logger.info("jwks_fetched", key_count=len(keys))
        return keys

    def issue_token(self, user: TokenUser) -> str:
        """Sign an HS256 token for a user."""
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
