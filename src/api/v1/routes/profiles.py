"""Profile API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_github_client, get_profile_service
from api.v1.schemas.common import AUTH_ERROR_RESPONSES, MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileOwner,
    ProfileResponse,
    ProfileUpsert,
    SocialLinksSchema,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import Education, Experience, ProfileWithOwner, SocialLinks
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _build_profile_response(item: ProfileWithOwner) -> ProfileResponse:
    profile = item.profile
    return ProfileResponse(
        id=profile.id,
        user=ProfileOwner(id=profile.user_id, name=item.owner_name, avatar=item.owner_avatar),
        status=profile.status,
        skills=profile.skills,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        github_username=profile.github_username,
        social=SocialLinksSchema(**profile.social.to_dict()),
        experience=[
            ExperienceResponse(
                id=e.id,
                title=e.title,
                company=e.company,
                location=e.location,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.experience
        ],
        education=[
            EducationResponse(
                id=e.id,
                school=e.school,
                degree=e.degree,
                field_of_study=e.field_of_study,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.education
        ],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
    responses={**AUTH_ERROR_RESPONSES, 404: {"description": "There is no profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_own_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile."""
    item = await service.get_own(user.id)
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update own profile",
    responses={**AUTH_ERROR_RESPONSES, 422: {"description": "Status and skills are required"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the caller's profile, or update the fields provided."""
    item = await service.upsert(
        user_id=user.id,
        status=body.status,
        skills=body.skills,
        company=body.company,
        website=body.website,
        location=body.location,
        bio=body.bio,
        github_username=body.github_username,
        social=SocialLinks(**body.social.model_dump()) if body.social else None,
    )
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get every profile. Public."""
    items = await service.get_all()
    return ProfileListResponse(data=[_build_profile_response(i) for i in items])


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a profile by user id",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get a user's profile. Public."""
    item = await service.get_by_user(user_id)
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete own profile and account",
    responses=AUTH_ERROR_RESPONSES,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's profile, posts, likes, comments and user record."""
    await service.delete_own(user.id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add profile experience",
    responses={**AUTH_ERROR_RESPONSES, 404: {"description": "There is no profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an experience entry at the top of the caller's profile."""
    item = await service.add_experience(user.id, Experience(**body.model_dump()))
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.delete(
    "/experience/{experience_id}",
    response_model=ProfileDetailResponse,
    summary="Delete profile experience",
    responses={**AUTH_ERROR_RESPONSES, 404: {"description": "Profile or experience not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_experience(
    request: Request,
    experience_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an experience entry from the caller's profile."""
    item = await service.remove_experience(user.id, experience_id)
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.put(
    "/education",
    response_model=ProfileDetailResponse,
    summary="Add profile education",
    responses={**AUTH_ERROR_RESPONSES, 404: {"description": "There is no profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an education entry at the top of the caller's profile."""
    item = await service.add_education(user.id, Education(**body.model_dump()))
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.delete(
    "/education/{education_id}",
    response_model=ProfileDetailResponse,
    summary="Delete profile education",
    responses={**AUTH_ERROR_RESPONSES, 404: {"description": "Profile or education not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_education(
    request: Request,
    education_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an education entry from the caller's profile."""
    item = await service.remove_education(user.id, education_id)
    return ProfileDetailResponse(data=_build_profile_response(item))


@router.get(
    "/github/{username}",
    summary="List a user's GitHub repositories",
    responses={404: {"description": "No GitHub repositories found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str = Path(..., pattern=r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$"),
    client: GitHubClient = Depends(get_github_client),
) -> list[dict[str, Any]]:
    """Pass through the user's latest public repositories from GitHub."""
    return await client.list_repositories(username)
