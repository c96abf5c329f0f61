"""HTTP API mounted under the configured version prefix."""

from fastapi import APIRouter

from slotbook.api.v1 import router as v1_router
from slotbook.core.config import get_settings


def build_api_router() -> APIRouter:
    router = APIRouter()
    router.include_router(v1_router, prefix=get_settings().api_v1_prefix)
    return router


api_router = build_api_router()

__all__ = ["api_router", "build_api_router"]
