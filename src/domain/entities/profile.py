"""Profile domain entities."""

from collections.abc import Iterable
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from uuid import UUID, uuid4

from domain.entities.user import User


def normalize_skills(skills: str | Iterable[str]) -> list[str]:
    """Turn ``"js, go"`` (or a list) into ``["js", "go"]``, dropping blanks."""
    items = skills.split(",") if isinstance(skills, str) else skills
    return [item.strip() for item in items if item and item.strip()]


@dataclass
class SocialLinks:
    """Named social links shown on a profile."""

    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None

    def merge(self, other: "SocialLinks") -> None:
        """Copy over every link that is set on ``other``."""
        for f in fields(self):
            value = getattr(other, f.name)
            if value is not None:
                setattr(self, f.name, value)

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}

    @classmethod
    def from_dict(cls, data: dict[str, str] | None) -> "SocialLinks":
        data = data or {}
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})


@dataclass
class Experience:
    """A job on a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Education:
    """A school entry on a profile."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Profile:
    """Domain entity for a developer profile. One per user."""

    user_id: UUID
    status: str
    skills: list[str]
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    # Newest first
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile joined with its owner's display data."""

    profile: Profile
    owner: User | None

    @property
    def owner_name(self) -> str | None:
        return self.owner.name if self.owner else None

    @property
    def owner_avatar(self) -> str | None:
        return self.owner.avatar_url if self.owner else None
