"""Identity resolver protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Verified identity extracted from a bearer token."""

    id: UUID
    email: str
    name: Optional[str] = None


class IIdentityResolver(Protocol):
    """Turns a bearer token into a verified user identity."""

    async def resolve(self, token: str) -> Optional[TokenUser]:
        """
        Verify a token.

        Args:
            token: The bearer token to verify

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        ...

    def issue_token(self, user: TokenUser) -> str:
        """Sign a token for a user (HS256, used by tests and tooling)."""
        ...
