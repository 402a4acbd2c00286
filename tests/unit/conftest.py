"""Shared fixtures for unit tests."""

import pytest

from domain.entities.vet_profile import ProfileDraft


@pytest.fixture
def valley_vet() -> ProfileDraft:
    """A clinic draft."""
    return ProfileDraft(
        is_clinic=True,
        clinic_name="Valley Vet",
        address="123 Main St",
        phone="555-111-2222",
        email="front@valleyvet.example",
    )


@pytest.fixture
def jane_doe() -> ProfileDraft:
    """A practitioner draft."""
    return ProfileDraft(
        is_clinic=False,
        name="Jane Doe",
        clinic_name="Valley Vet",
        specialty="Surgery",
    )
