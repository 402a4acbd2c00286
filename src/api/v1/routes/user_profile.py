"""User profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_user_profile_service
from api.v1.schemas.user_profile import (
    UserProfileDetailResponse,
    UserProfileResponse,
    UserProfileUpdate,
)
from core.rate_limit import limiter
from domain.services.user_profile_service import UserProfileService

router = APIRouter(prefix="/user-profile", tags=["user-profile"])


@router.get(
    "",
    response_model=UserProfileDetailResponse,
    summary="Get the owner's profile",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_user_profile(
    request: Request,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileDetailResponse:
    """Get the owner's profile; a blank profile if none was saved yet."""
    profile = await service.get_user_profile()
    return UserProfileDetailResponse(data=UserProfileResponse.model_validate(profile))


@router.patch(
    "",
    response_model=UserProfileDetailResponse,
    summary="Update the owner's profile",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_user_profile(
    request: Request,
    body: UserProfileUpdate,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileDetailResponse:
    """Update the fields sent in the body. Nested objects are replaced whole."""
    profile = await service.update_user_profile(body.to_updates())
    return UserProfileDetailResponse(data=UserProfileResponse.model_validate(profile))
