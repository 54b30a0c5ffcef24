"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.entities.profile import Education, Experience, Profile, SocialLinks
from infrastructure.database.models import EducationModel, ExperienceModel, ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select(self):  # type: ignore[no-untyped-def]
        return select(ProfileModel).options(
            selectinload(ProfileModel.experience),
            selectinload(ProfileModel.education),
        )

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = self._select().where(ProfileModel.user_id == user_id).execution_options(
            populate_existing=True
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        stmt = self._select().order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = ProfileModel(
            id=profile.id,
            user_id=profile.user_id,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
        self._apply(model, profile)
        self._session.add(model)
        await self._session.flush()
        return await self._require(profile.user_id)

    async def update(self, profile: Profile) -> Profile:
        """Update the scalar and social fields of a profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        self._apply(model, profile)
        model.updated_at = profile.updated_at

        await self._session.flush()
        return await self._require(profile.user_id)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user, with its sub-records."""
        stmt = self._select().where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def add_experience(self, profile_id: UUID, experience: Experience) -> None:
        """Insert an experience entry."""
        self._session.add(
            ExperienceModel(
                id=experience.id,
                profile_id=profile_id,
                title=experience.title,
                company=experience.company,
                location=experience.location,
                from_date=experience.from_date,
                to_date=experience.to_date,
                current=experience.current,
                description=experience.description,
                created_at=experience.created_at,
            )
        )
        await self._session.flush()

    async def remove_experience(self, profile_id: UUID, experience_id: UUID) -> bool:
        """Delete an experience entry by id, scoped to the profile."""
        stmt = delete(ExperienceModel).where(
            ExperienceModel.id == experience_id,
            ExperienceModel.profile_id == profile_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def add_education(self, profile_id: UUID, education: Education) -> None:
        """Insert an education entry."""
        self._session.add(
            EducationModel(
                id=education.id,
                profile_id=profile_id,
                school=education.school,
                degree=education.degree,
                field_of_study=education.field_of_study,
                from_date=education.from_date,
                to_date=education.to_date,
                current=education.current,
                description=education.description,
                created_at=education.created_at,
            )
        )
        await self._session.flush()

    async def remove_education(self, profile_id: UUID, education_id: UUID) -> bool:
        """Delete an education entry by id, scoped to the profile."""
        stmt = delete(EducationModel).where(
            EducationModel.id == education_id,
            EducationModel.profile_id == profile_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _require(self, user_id: UUID) -> Profile:
        profile = await self.get_by_user(user_id)
        if not profile:
            raise ValueError(f"Profile for user {user_id} not found")
        return profile

    @staticmethod
    def _apply(model: ProfileModel, profile: Profile) -> None:
        model.status = profile.status
        model.skills = list(profile.skills)
        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.bio = profile.bio
        model.github_username = profile.github_username
        model.social = profile.social.to_dict()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            skills=list(model.skills or []),
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            github_username=model.github_username,
            social=SocialLinks.from_dict(model.social),
            experience=[
                Experience(
                    id=e.id,
                    title=e.title,
                    company=e.company,
                    location=e.location,
                    from_date=e.from_date,
                    to_date=e.to_date,
                    current=e.current,
                    description=e.description,
                    created_at=e.created_at,
                )
                for e in model.experience
            ],
            education=[
                Education(
                    id=e.id,
                    school=e.school,
                    degree=e.degree,
                    field_of_study=e.field_of_study,
                    from_date=e.from_date,
                    to_date=e.to_date,
                    current=e.current,
                    description=e.description,
                    created_at=e.created_at,
                )
                for e in model.education
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
