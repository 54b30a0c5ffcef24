"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """Account holder as provisioned by the identity provider.

    Only ``name`` and ``avatar_url`` matter to the social domain: they are
    copied onto posts and comments, and joined onto profiles at read time.
    """

    email: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
