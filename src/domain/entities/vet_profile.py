"""Vet and clinic profile domain entities."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Optional


@dataclass
class ProfileDraft:
    """A clinic or practitioner record that has not been saved yet.

    ``is_clinic`` selects which fields carry the record's identity: the
    clinic fields (name, address, phone, ...) for clinics, the practitioner
    fields (name, specialty, clinic) otherwise.
    """

    is_clinic: bool = False

    # Clinic
    clinic_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[str] = None

    # Practitioner
    name: Optional[str] = None
    specialty: Optional[str] = None
    position: Optional[str] = None
    clinic_id: Optional[str] = None

    avatar: Optional[str] = None
    notes: Optional[str] = None


@dataclass(kw_only=True)
class Profile(ProfileDraft):
    """A stored clinic or practitioner profile."""

    id: str
    created_at: datetime

    @classmethod
    def from_draft(cls, draft: ProfileDraft, id: str, created_at: datetime) -> "Profile":
        """Promote a draft to a stored profile with its assigned identity."""
        values = {f.name: getattr(draft, f.name) for f in fields(ProfileDraft)}
        return cls(id=id, created_at=created_at, **values)


IMMUTABLE_FIELDS = frozenset({"id", "created_at"})
DRAFT_FIELDS = frozenset(f.name for f in fields(ProfileDraft))
