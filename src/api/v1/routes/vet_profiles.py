"""Vet and clinic profile API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from api.v1.dependencies import get_profile_registry
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.vet_profile import (
    DuplicateCheckResponse,
    DuplicateCheckResult,
    DuplicateCleanupResponse,
    DuplicateGroupsResponse,
    SimilarProfileResponse,
    VetProfileCreate,
    VetProfileDetailResponse,
    VetProfileListResponse,
    VetProfileResponse,
    VetProfileUpdate,
)
from core.exceptions import ClinicNotFoundError, ProfileNotFoundError
from core.rate_limit import limiter
from domain.services.profile_registry import ProfileRegistry

router = APIRouter(prefix="/vet-profiles", tags=["vet-profiles"])


@router.get(
    "",
    response_model=VetProfileListResponse,
    summary="List all vet and clinic profiles",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> VetProfileListResponse:
    """Get every stored profile in insertion order."""
    profiles = await registry.list_profiles()
    return VetProfileListResponse(
        data=[VetProfileResponse.model_validate(p) for p in profiles]
    )


@router.post(
    "",
    response_model=VetProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a vet or clinic profile",
    responses={
        201: {"description": "Profile created successfully"},
        400: {"model": ErrorResponse, "description": "clinic_id does not reference a clinic"},
        409: {"model": ErrorResponse, "description": "An identical profile already exists"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: VetProfileCreate,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> VetProfileDetailResponse:
    """Create a profile. Exact duplicates of a stored profile are rejected."""
    profile = await registry.add_profile(body.to_draft())
    return VetProfileDetailResponse(data=VetProfileResponse.model_validate(profile))


@router.post(
    "/duplicate-check",
    response_model=DuplicateCheckResponse,
    summary="Check a candidate profile for duplicates",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def check_duplicates(
    request: Request,
    body: VetProfileCreate,
    exclude_id: Optional[str] = Query(
        None, description="Profile being edited; never reported against itself"
    ),
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> DuplicateCheckResponse:
    """Report whether the candidate would be rejected, and which stored
    profiles look like it."""
    draft = body.to_draft()
    is_duplicate = await registry.is_duplicate(draft, exclude_id=exclude_id)
    similar = await registry.find_similar_profiles(draft, exclude_id=exclude_id)
    return DuplicateCheckResponse(
        data=DuplicateCheckResult(
            is_duplicate=is_duplicate,
            similar=[SimilarProfileResponse.model_validate(s) for s in similar],
        )
    )


@router.get(
    "/duplicates",
    response_model=DuplicateGroupsResponse,
    summary="List groups of duplicate profiles",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_duplicate_groups(
    request: Request,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> DuplicateGroupsResponse:
    """Get every group of two or more profiles sharing one identity."""
    groups = await registry.get_duplicate_groups()
    return DuplicateGroupsResponse(
        data=[[VetProfileResponse.model_validate(p) for p in group] for group in groups]
    )


@router.post(
    "/duplicates/cleanup",
    response_model=DuplicateCleanupResponse,
    summary="Remove duplicate profiles",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def cleanup_duplicates(
    request: Request,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> DuplicateCleanupResponse:
    """Keep the first-seen profile of each duplicate group and delete the rest."""
    removed = await registry.delete_duplicates()
    return DuplicateCleanupResponse(removed_count=removed)


@router.get(
    "/clinics",
    response_model=VetProfileListResponse,
    summary="List clinics",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_clinics(
    request: Request,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> VetProfileListResponse:
    """Get all clinic profiles."""
    clinics = await registry.get_clinics()
    return VetProfileListResponse(
        data=[VetProfileResponse.model_validate(c) for c in clinics]
    )


@router.get(
    "/clinics/{clinic_id}",
    response_model=VetProfileDetailResponse,
    summary="Get a clinic",
    responses={404: {"model": ErrorResponse, "description": "Clinic not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_clinic(
    request: Request,
    clinic_id: str,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> VetProfileDetailResponse:
    """Get a clinic by ID."""
    clinic = await registry.get_clinic(clinic_id)
    if clinic is None:
        raise ClinicNotFoundError(clinic_id)
    return VetProfileDetailResponse(data=VetProfileResponse.model_validate(clinic))


@router.get(
    "/clinics/{clinic_id}/vets",
    response_model=VetProfileListResponse,
    summary="List a clinic's veterinarians",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_clinic_vets(
    request: Request,
    clinic_id: str,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> VetProfileListResponse:
    """Get every practitioner linked to the clinic."""
    vets = await registry.get_clinic_vets(clinic_id)
    return VetProfileListResponse(
        data=[VetProfileResponse.model_validate(v) for v in vets]
    )


@router.get(
    "/{profile_id}",
    response_model=VetProfileDetailResponse,
    summary="Get a profile",
    responses={404: {"model": ErrorResponse, "description": "Profile not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    profile_id: str,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> VetProfileDetailResponse:
    """Get a vet or clinic profile by ID."""
    profile = await registry.get_profile(profile_id)
    if profile is None:
        raise ProfileNotFoundError(profile_id)
    return VetProfileDetailResponse(data=VetProfileResponse.model_validate(profile))


@router.patch(
    "/{profile_id}",
    response_model=VetProfileDetailResponse,
    summary="Update a profile",
    responses={
        200: {"description": "Profile updated successfully"},
        400: {"model": ErrorResponse, "description": "clinic_id does not reference a clinic"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
        409: {"model": ErrorResponse, "description": "The update would duplicate another profile"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: str,
    body: VetProfileUpdate,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> VetProfileDetailResponse:
    """Update the fields sent in the body; the rest are left as they are."""
    profile = await registry.update_profile(profile_id, body.to_updates())
    if profile is None:
        raise ProfileNotFoundError(profile_id)
    return VetProfileDetailResponse(data=VetProfileResponse.model_validate(profile))


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a profile",
    responses={
        204: {"description": "Profile deleted successfully"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: str,
    registry: ProfileRegistry = Depends(get_profile_registry),
) -> None:
    """Delete a profile. Deleting a clinic unlinks, but keeps, its vets."""
    if not await registry.delete_profile(profile_id):
        raise ProfileNotFoundError(profile_id)
    return None
