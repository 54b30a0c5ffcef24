"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Education, Experience, Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities and their sub-records."""

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update the scalar and social fields of a profile.

        Experience and education are left untouched.
        """
        ...

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user, with its sub-records."""
        ...

    async def add_experience(self, profile_id: UUID, experience: Experience) -> None:
        """Insert an experience entry."""
        ...

    async def remove_experience(self, profile_id: UUID, experience_id: UUID) -> bool:
        """Delete an experience entry by id. False if it was not there."""
        ...

    async def add_education(self, profile_id: UUID, education: Education) -> None:
        """Insert an education entry."""
        ...

    async def remove_education(self, profile_id: UUID, education_id: UUID) -> bool:
        """Delete an education entry by id. False if it was not there."""
        ...
