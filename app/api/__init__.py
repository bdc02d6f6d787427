from fastapi import APIRouter

from app.api.admin import router as admin_router
from app.api.recipes import router as recipes_router

api_router = APIRouter()
api_router.include_router(recipes_router)
api_router.include_router(admin_router)

__all__ = ["api_router"]
