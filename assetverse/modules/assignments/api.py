"""
Assignment ledger API.
Prefix: /api/assigned-assets
"""
from fastapi import APIRouter

from assetverse.core.config import settings

from .routes import assigned_assets

router = APIRouter(prefix=settings.api_prefix)

router.include_router(assigned_assets.router)
