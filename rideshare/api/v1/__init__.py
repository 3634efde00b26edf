"""API routes."""

from fastapi import APIRouter

from rideshare.api.v1 import auth, health, trips, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(trips.router, prefix="/trips", tags=["trips"])


@router.get("/")
def api_root() -> dict[str, str]:
    return {"message": "API is accessible"}
