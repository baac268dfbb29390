from fastapi import APIRouter

from app.modules.auth import router as auth_router
from app.modules.onboarding import router as onboarding_router
from app.modules.reference import router as reference_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(reference_router, prefix="/boards", tags=["Education Boards"])

api_router.include_router(onboarding_router, prefix="/onboarding", tags=["Onboarding"])
