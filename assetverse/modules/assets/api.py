"""
Inventory API.
Prefix: /api/assets
"""
from fastapi import APIRouter

from assetverse.core.config import settings

from .routes import assets

router = APIRouter(prefix=settings.api_prefix)

router.include_router(assets.router)
