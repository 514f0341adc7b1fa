"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.admin import router as admin_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.recommendations import router as recommendations_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(recommendations_router)
router.include_router(admin_router)
