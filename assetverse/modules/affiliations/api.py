"""
Affiliation API.
Prefix: /api/affiliations
"""
from fastapi import APIRouter

from assetverse.core.config import settings

from .routes import affiliations

router = APIRouter(prefix=settings.api_prefix)

router.include_router(affiliations.router)
