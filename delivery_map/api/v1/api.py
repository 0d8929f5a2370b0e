"""API v1 router composition."""

from fastapi import APIRouter

from delivery_map.api.v1.endpoints import admin, storefront

api_router: APIRouter = APIRouter()
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(storefront.router, tags=["storefront"])
