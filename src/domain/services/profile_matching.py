"""Duplicate and similarity matching for vet/clinic profiles.

Two tiers of matching are used:

* The canonical identity key is strict. Two profiles of the same variant
  with equal keys are the same real-world entity and may not coexist.
* Similarity is loose and advisory. It flags likely duplicates for a human
  to review and never blocks a write. The clinic-name substring test in
  particular over-flags ("Vet" matches "Valley Vet Clinic", and an empty
  name matches any name).
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from domain.entities.vet_profile import Profile, ProfileDraft

SIMILAR_CLINIC_NAME = "Similar clinic name"
SAME_PHONE_NUMBER = "Same phone number"
SAME_EMAIL_ADDRESS = "Same email address"
SAME_VET_NAME = "Same veterinarian name"
SAME_CLINIC_AND_SPECIALTY = "Same clinic and specialty"

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True, slots=True)
class SimilarProfile:
    """A stored profile that looks like a candidate, and why."""

    profile: Profile
    reasons: list[str] = field(default_factory=list)


def normalize(value: str | None) -> str:
    """Lowercase and trim; missing values become the empty string."""
    return (value or "").strip().lower()


def digits_only(value: str | None) -> str:
    """Strip every non-digit character; missing values become the empty string."""
    return _NON_DIGITS.sub("", value or "")


def canonical_key(profile: ProfileDraft) -> str:
    """Derive the identity key used for exact-duplicate detection."""
    if profile.is_clinic:
        return "_".join(
            (
                "clinic",
                normalize(profile.clinic_name),
                normalize(profile.address),
                digits_only(profile.phone),
            )
        )
    return "_".join(
        (
            "vet",
            normalize(profile.name),
            normalize(profile.clinic_name),
            normalize(profile.specialty),
        )
    )


def similarity_reasons(candidate: ProfileDraft, existing: ProfileDraft) -> list[str]:
    """List why two profiles look alike; empty when they do not.

    Profiles of different variants are never similar.
    """
    if candidate.is_clinic != existing.is_clinic:
        return []
    if candidate.is_clinic:
        return _clinic_reasons(candidate, existing)
    return _vet_reasons(candidate, existing)


def _clinic_reasons(candidate: ProfileDraft, existing: ProfileDraft) -> list[str]:
    reasons = []

    name_a = normalize(candidate.clinic_name)
    name_b = normalize(existing.clinic_name)
    if name_a in name_b or name_b in name_a:
        reasons.append(SIMILAR_CLINIC_NAME)

    phone_a = digits_only(candidate.phone)
    if phone_a and phone_a == digits_only(existing.phone):
        reasons.append(SAME_PHONE_NUMBER)

    email_a = normalize(candidate.email)
    if email_a and email_a == normalize(existing.email):
        reasons.append(SAME_EMAIL_ADDRESS)

    return reasons


def _vet_reasons(candidate: ProfileDraft, existing: ProfileDraft) -> list[str]:
    reasons = []

    if normalize(candidate.name) == normalize(existing.name):
        reasons.append(SAME_VET_NAME)

    clinic_a = normalize(candidate.clinic_name)
    if (
        clinic_a
        and clinic_a == normalize(existing.clinic_name)
        and normalize(candidate.specialty) == normalize(existing.specialty)
    ):
        reasons.append(SAME_CLINIC_AND_SPECIALTY)

    return reasons


def group_by_key(profiles: Iterable[Profile]) -> list[list[Profile]]:
    """Bucket profiles by canonical key, in first-seen order.

    Clinic and vet keys carry different prefixes, so a bucket never mixes
    the two variants.
    """
    groups: dict[str, list[Profile]] = {}
    for profile in profiles:
        groups.setdefault(canonical_key(profile), []).append(profile)
    return list(groups.values())
