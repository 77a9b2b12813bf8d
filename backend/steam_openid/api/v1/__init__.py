"""API v1 route aggregation.

Each sub-router declares its own `prefix` and `tags`.
"""
from fastapi import APIRouter

from .steam import router as steam_router

ROUTERS = [
    steam_router,
]

api_router = APIRouter()
for router in ROUTERS:
    api_router.include_router(router)

__all__ = ["api_router"]
