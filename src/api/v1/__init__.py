"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.user_profile import router as user_profile_router
from api.v1.routes.vet_profiles import router as vet_profiles_router

router = APIRouter()
router.include_router(vet_profiles_router)
router.include_router(user_profile_router)
