"""Vet/clinic profile registry with duplicate protection."""

import asyncio
import copy
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

import structlog

from core.exceptions import DuplicateProfileError, InvalidClinicReferenceError
from domain.entities.vet_profile import (
    DRAFT_FIELDS,
    IMMUTABLE_FIELDS,
    Profile,
    ProfileDraft,
)
from domain.repositories.profile_repository import IProfileCollectionRepository
from domain.services.profile_matching import (
    SimilarProfile,
    canonical_key,
    group_by_key,
    similarity_reasons,
)

logger = structlog.get_logger()

UPDATE_DUPLICATE_MESSAGE = (
    "This update would create a duplicate profile. "
    "Please check for existing similar profiles."
)


class ProfileRegistry:
    """Owns the profile collection and keeps it free of exact duplicates.

    The collection is loaded lazily on first use and written back in full
    after every successful mutation. All operations run under one lock, so
    the duplicate check and the write that follows it cannot interleave with
    another writer.
    """

    def __init__(
        self,
        repository: IProfileCollectionRepository,
        cleanup_on_load: bool = True,
    ) -> None:
        self._repository = repository
        self._cleanup_on_load = cleanup_on_load
        self._profiles: list[Profile] = []
        self._loaded = False
        self._lock = asyncio.Lock()

    # --- Loading ---

    async def load(self) -> int:
        """Load the collection from storage, dropping legacy duplicates.

        Returns the number of duplicates removed during the load. Calling
        this again re-reads storage.
        """
        async with self._lock:
            return await self._load()

    async def _load(self) -> int:
        self._profiles = await self._repository.load()
        self._loaded = True

        if not self._cleanup_on_load:
            return 0

        removed = self._collapse_duplicates()
        if removed:
            await self._persist()
            logger.info("duplicate_profiles_removed", removed_count=removed, on_load=True)
        return removed

    async def _ensure_loaded(self) -> None:
        if not self._loaded:
            await self._load()

    # --- Duplicate detection ---

    async def is_duplicate(
        self, candidate: ProfileDraft, exclude_id: Optional[str] = None
    ) -> bool:
        """Check whether saving the candidate would create an exact duplicate."""
        async with self._lock:
            await self._ensure_loaded()
            return self._is_duplicate(candidate, exclude_id)

    def _is_duplicate(self, candidate: ProfileDraft, exclude_id: Optional[str]) -> bool:
        key = canonical_key(candidate)
        return any(
            existing.id != exclude_id
            and existing.is_clinic == candidate.is_clinic
            and canonical_key(existing) == key
            for existing in self._profiles
        )

    async def find_similar_profiles(
        self, candidate: ProfileDraft, exclude_id: Optional[str] = None
    ) -> list[SimilarProfile]:
        """Find stored profiles that look like the candidate, for human review."""
        async with self._lock:
            await self._ensure_loaded()
            similar = []
            for existing in self._profiles:
                if existing.id == exclude_id:
                    continue
                reasons = similarity_reasons(candidate, existing)
                if reasons:
                    similar.append(SimilarProfile(profile=copy.copy(existing), reasons=reasons))
            return similar

    async def get_duplicate_groups(self) -> list[list[Profile]]:
        """Get every set of stored profiles that share a canonical key."""
        async with self._lock:
            await self._ensure_loaded()
            return [
                [copy.copy(p) for p in group]
                for group in group_by_key(self._profiles)
                if len(group) > 1
            ]

    async def delete_duplicates(self) -> int:
        """Collapse each duplicate group to its first-seen member.

        Returns the number of profiles removed.
        """
        async with self._lock:
            await self._ensure_loaded()
            removed = self._collapse_duplicates()
            if removed:
                await self._persist()
                logger.info("duplicate_profiles_removed", removed_count=removed, on_load=False)
            return removed

    def _collapse_duplicates(self) -> int:
        survivors: list[Profile] = []
        # Removed clinic id -> surviving clinic id of the same group
        redirects: dict[str, str] = {}

        for group in group_by_key(self._profiles):
            keeper = group[0]
            survivors.append(keeper)
            if keeper.is_clinic:
                for dropped in group[1:]:
                    redirects[dropped.id] = keeper.id

        removed = len(self._profiles) - len(survivors)
        if not removed:
            return 0

        # Group keepers are already in collection order
        self._profiles = [self._redirect_clinic(p, redirects) for p in survivors]
        return removed

    @staticmethod
    def _redirect_clinic(profile: Profile, redirects: dict[str, str]) -> Profile:
        if profile.clinic_id in redirects:
            return replace(profile, clinic_id=redirects[profile.clinic_id])
        return profile

    # --- Create / Update / Delete ---

    async def add_profile(self, draft: ProfileDraft) -> Profile:
        """Save a new profile, rejecting exact duplicates."""
        async with self._lock:
            await self._ensure_loaded()

            if self._is_duplicate(draft, None):
                logger.info(
                    "duplicate_profile_rejected",
                    is_clinic=draft.is_clinic,
                    key=canonical_key(draft),
                )
                raise DuplicateProfileError()
            self._check_clinic_reference(draft, None)

            profile = Profile.from_draft(
                draft,
                id=str(uuid4()),
                created_at=datetime.now(timezone.utc),
            )
            self._profiles.append(profile)
            await self._persist()

            logger.info("profile_created", profile_id=profile.id, is_clinic=profile.is_clinic)
            return copy.copy(profile)

    async def update_profile(
        self, profile_id: str, updates: Mapping[str, Any]
    ) -> Optional[Profile]:
        """Merge field updates onto a stored profile.

        The merged record is re-validated against the duplicate rule. ``id``
        and ``created_at`` cannot be changed and are ignored. Returns None
        when no profile has the given id.
        """
        async with self._lock:
            await self._ensure_loaded()

            index = self._index_of(profile_id)
            if index is None:
                return None

            changes = {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
            unknown = set(changes) - DRAFT_FIELDS
            if unknown:
                raise TypeError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

            current = self._profiles[index]
            merged = replace(current, **changes)

            if self._is_duplicate(merged, profile_id):
                logger.info(
                    "duplicate_profile_rejected",
                    profile_id=profile_id,
                    is_clinic=merged.is_clinic,
                    key=canonical_key(merged),
                )
                raise DuplicateProfileError(UPDATE_DUPLICATE_MESSAGE)
            self._check_clinic_reference(merged, profile_id)

            self._profiles[index] = merged
            if current.is_clinic and not merged.is_clinic:
                self._detach_practitioners(profile_id)
            await self._persist()

            logger.info("profile_updated", profile_id=profile_id, fields=sorted(changes))
            return copy.copy(merged)

    async def delete_profile(self, profile_id: str) -> bool:
        """Remove a profile; deleting a clinic unlinks its practitioners.

        Returns False when no profile has the given id.
        """
        async with self._lock:
            await self._ensure_loaded()

            index = self._index_of(profile_id)
            if index is None:
                return False

            removed = self._profiles.pop(index)
            detached = 0
            if removed.is_clinic:
                detached = self._detach_practitioners(profile_id)
            await self._persist()

            logger.info(
                "profile_deleted",
                profile_id=profile_id,
                is_clinic=removed.is_clinic,
                detached_vets=detached,
            )
            return True

    def _detach_practitioners(self, clinic_id: str) -> int:
        detached = 0
        for i, profile in enumerate(self._profiles):
            if profile.clinic_id == clinic_id:
                self._profiles[i] = replace(profile, clinic_id=None)
                detached += 1
        return detached

    def _check_clinic_reference(self, profile: ProfileDraft, self_id: Optional[str]) -> None:
        if profile.is_clinic or profile.clinic_id is None:
            return
        clinic = self._find(profile.clinic_id)
        if clinic is None or not clinic.is_clinic or clinic.id == self_id:
            raise InvalidClinicReferenceError(profile.clinic_id)

    # --- Lookups ---

    async def list_profiles(self) -> list[Profile]:
        """Get every stored profile."""
        async with self._lock:
            await self._ensure_loaded()
            return [copy.copy(p) for p in self._profiles]

    async def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Get a profile by ID."""
        async with self._lock:
            await self._ensure_loaded()
            profile = self._find(profile_id)
            return copy.copy(profile) if profile else None

    async def get_clinics(self) -> list[Profile]:
        """Get all clinic profiles."""
        async with self._lock:
            await self._ensure_loaded()
            return [copy.copy(p) for p in self._profiles if p.is_clinic]

    async def get_clinic(self, clinic_id: str) -> Optional[Profile]:
        """Get a clinic by ID; practitioners with that ID do not count."""
        async with self._lock:
            await self._ensure_loaded()
            profile = self._find(clinic_id)
            if profile is None or not profile.is_clinic:
                return None
            return copy.copy(profile)

    async def get_clinic_vets(self, clinic_id: str) -> list[Profile]:
        """Get all practitioners linked to a clinic."""
        async with self._lock:
            await self._ensure_loaded()
            return [
                copy.copy(p)
                for p in self._profiles
                if not p.is_clinic and p.clinic_id == clinic_id
            ]

    def _find(self, profile_id: str) -> Optional[Profile]:
        index = self._index_of(profile_id)
        return self._profiles[index] if index is not None else None

    def _index_of(self, profile_id: str) -> Optional[int]:
        for i, profile in enumerate(self._profiles):
            if profile.id == profile_id:
                return i
        return None

    async def _persist(self) -> None:
        await self._repository.save(list(self._profiles))
