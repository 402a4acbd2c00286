"""Pydantic schemas for Vet Profile API."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.vet_profile import ProfileDraft


class VetProfileFields(BaseModel):
    """Free-text fields shared by clinic and practitioner profiles."""

    # Clinic
    clinic_name: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    website: Optional[str] = Field(None, max_length=500)
    hours: Optional[str] = Field(None, max_length=1000)

    # Practitioner
    name: Optional[str] = Field(None, max_length=255)
    specialty: Optional[str] = Field(None, max_length=255)
    position: Optional[str] = Field(None, max_length=255)
    clinic_id: Optional[str] = Field(None, max_length=100)

    avatar: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=5000)


class VetProfileCreate(VetProfileFields):
    """Schema for creating (or duplicate-checking) a vet or clinic profile."""

    is_clinic: bool = False

    def to_draft(self) -> ProfileDraft:
        return ProfileDraft(**self.model_dump())


class VetProfileUpdate(VetProfileFields):
    """Schema for updating a profile (only the fields sent are changed)."""

    is_clinic: Optional[bool] = None

    def to_updates(self) -> dict[str, Any]:
        updates = self.model_dump(exclude_unset=True)
        if updates.get("is_clinic") is None:
            updates.pop("is_clinic", None)
        return updates


class VetProfileResponse(VetProfileFields):
    """Schema for a stored vet or clinic profile."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "9b2f3c1e-4d5a-4f6b-8c7d-0e1f2a3b4c5d",
                "is_clinic": True,
                "clinic_name": "Valley Vet",
                "address": "123 Main St",
                "city": "Springfield",
                "phone": "555-111-2222",
                "created_at": "2026-02-01T10:00:00Z",
            }
        },
    )

    id: str
    is_clinic: bool
    created_at: datetime


class VetProfileListResponse(BaseModel):
    """Schema for list of profiles."""

    data: list[VetProfileResponse]


class VetProfileDetailResponse(BaseModel):
    """Schema for single profile."""

    data: VetProfileResponse


class SimilarProfileResponse(BaseModel):
    """A stored profile that resembles the candidate."""

    model_config = ConfigDict(from_attributes=True)

    profile: VetProfileResponse
    reasons: list[str]


class DuplicateCheckResult(BaseModel):
    """Exact-duplicate verdict plus advisory look-alikes."""

    is_duplicate: bool
    similar: list[SimilarProfileResponse]


class DuplicateCheckResponse(BaseModel):
    """Schema for duplicate check."""

    data: DuplicateCheckResult


class DuplicateGroupsResponse(BaseModel):
    """Schema for groups of profiles sharing one identity."""

    data: list[list[VetProfileResponse]]


class DuplicateCleanupResponse(BaseModel):
    """Schema for bulk duplicate removal."""

    removed_count: int
