from fastapi import APIRouter
from app.api import health, profiles

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(profiles.router)
