"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from onboarding_api.api.routes.onboarding_routes import router as onboarding_router
from onboarding_api.api.routes.employee_routes import router as employee_router
from onboarding_api.api.routes.file_routes import router as file_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(onboarding_router)
api_router.include_router(employee_router)
api_router.include_router(file_router)
