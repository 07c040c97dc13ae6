"""
Request workflow API.
Prefix: /api/requests
"""
from fastapi import APIRouter

from assetverse.core.config import settings

from .routes import requests

router = APIRouter(prefix=settings.api_prefix)

router.include_router(requests.router)
