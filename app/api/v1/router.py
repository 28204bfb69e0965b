from fastapi import APIRouter

from app.api.v1.endpoints import interactions, matches, profiles

router = APIRouter()

router.include_router(profiles.router, prefix="/profiles")
router.include_router(interactions.router, prefix="/interactions")
router.include_router(matches.router, prefix="/matches")
