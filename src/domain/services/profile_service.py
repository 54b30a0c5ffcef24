"""Profile service layer with business logic."""

from collections.abc import Callable, Iterable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    ProfileWithOwner,
    SocialLinks,
    normalize_skills,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

# Optional scalar fields copied onto a profile when provided
_OPTIONAL_FIELDS = ("company", "website", "location", "bio", "github_username")


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_own(self, user_id: UUID) -> ProfileWithOwner:
        """Get the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id), "There is no profile for this user")
            return await self._with_owner(uow, profile)

    async def get_by_user(self, user_id: UUID) -> ProfileWithOwner:
        """Get a profile by its owner's id."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return await self._with_owner(uow, profile)

    async def get_all(self) -> list[ProfileWithOwner]:
        """Get every profile with its owner's display data."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            owners = await uow.users.get_many([p.user_id for p in profiles])
            return [
                ProfileWithOwner(profile=p, owner=owners.get(p.user_id)) for p in profiles
            ]

    async def upsert(
        self,
        user_id: UUID,
        status: str,
        skills: str | Iterable[str],
        company: str | None = None,
        website: str | None = None,
        location: str | None = None,
        bio: str | None = None,
        github_username: str | None = None,
        social: SocialLinks | None = None,
    ) -> ProfileWithOwner:
        """Create the caller's profile, or update it in place.

        Only optional fields that are provided are written. Social links
        are merged one by one. Experience and education are not touched.
        """
        status = (status or "").strip()
        if not status:
            raise ValidationError("status", "Status is required")
        skill_list = normalize_skills(skills or "")
        if not skill_list:
            raise ValidationError("skills", "Skills is required")

        provided = {
            name: value
            for name, value in zip(
                _OPTIONAL_FIELDS, (company, website, location, bio, github_username)
            )
            if value is not None
        }

        async with self._uow_factory() as uow:
            owner = await uow.users.get(user_id)
            if not owner:
                raise UserNotFoundError(str(user_id))
            profile = await uow.profiles.get_by_user(user_id)

            if profile:
                profile.status = status
                profile.skills = skill_list
                for name, value in provided.items():
                    setattr(profile, name, value)
                if social:
                    profile.social.merge(social)
                profile.updated_at = datetime.utcnow()
                saved = await uow.profiles.update(profile)
                event = "profile_updated"
            else:
                profile = Profile(
                    user_id=user_id,
                    status=status,
                    skills=skill_list,
                    social=social or SocialLinks(),
                    **provided,
                )
                saved = await uow.profiles.create(profile)
                event = "profile_created"

            result = ProfileWithOwner(profile=saved, owner=owner)
            await uow.commit()

        logger.info(event, user_id=str(user_id))
        return result

    async def delete_own(self, user_id: UUID) -> None:
        """Delete the caller's profile, posts, likes, comments and user record."""
        async with self._uow_factory() as uow:
            await uow.profiles.delete_by_user(user_id)
            posts_deleted = await uow.posts.delete_all_by_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("profile_deleted", user_id=str(user_id), posts_deleted=posts_deleted)

    async def add_experience(self, user_id: UUID, experience: Experience) -> ProfileWithOwner:
        """Add an experience entry to the top of the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._get_own_profile(uow, user_id)
            await uow.profiles.add_experience(profile.id, experience)
            result = await self._reload(uow, user_id)
            await uow.commit()
            return result

    async def remove_experience(self, user_id: UUID, experience_id: UUID) -> ProfileWithOwner:
        """Remove an experience entry from the caller's profile by id."""
        async with self._uow_factory() as uow:
            profile = await self._get_own_profile(uow, user_id)
            if not await uow.profiles.remove_experience(profile.id, experience_id):
                raise ExperienceNotFoundError(str(experience_id))
            result = await self._reload(uow, user_id)
            await uow.commit()
            return result

    async def add_education(self, user_id: UUID, education: Education) -> ProfileWithOwner:
        """Add an education entry to the top of the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._get_own_profile(uow, user_id)
            await uow.profiles.add_education(profile.id, education)
            result = await self._reload(uow, user_id)
            await uow.commit()
            return result

    async def remove_education(self, user_id: UUID, education_id: UUID) -> ProfileWithOwner:
        """Remove an education entry from the caller's profile by id."""
        async with self._uow_factory() as uow:
            profile = await self._get_own_profile(uow, user_id)
            if not await uow.profiles.remove_education(profile.id, education_id):
                raise EducationNotFoundError(str(education_id))
            result = await self._reload(uow, user_id)
            await uow.commit()
            return result

    async def _get_own_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id), "There is no profile for this user")
        return profile

    async def _reload(self, uow: IUnitOfWork, user_id: UUID) -> ProfileWithOwner:
        return await self._with_owner(uow, await self._get_own_profile(uow, user_id))

    async def _with_owner(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithOwner:
        owner = await uow.users.get(profile.user_id)
        return ProfileWithOwner(profile=profile, owner=owner)
