from fastapi import APIRouter

from translation_gateway.api.routes import health, locales, translation

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(translation.router, prefix="/translation", tags=["translation"])
api_router.include_router(locales.router, prefix="/locales", tags=["locales"])
