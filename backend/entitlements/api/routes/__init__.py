from fastapi import APIRouter

from entitlements.api.routes import admin, health, pricing, properties

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(pricing.router, tags=["pricing"])
api_router.include_router(admin.router, tags=["admin"])
api_router.include_router(properties.router, prefix="/properties", tags=["properties"])
