"""Main API router that combines all endpoint modules."""

from fastapi import APIRouter

from awibi_api.api.routers import health, root

api_router = APIRouter()

api_router.include_router(root.router)
api_router.include_router(health.router)
