"""
Users API.
Prefix: /api/users
"""
from fastapi import APIRouter

from assetverse.core.config import settings

from .routes import users

router = APIRouter(prefix=settings.api_prefix)

router.include_router(users.router)
