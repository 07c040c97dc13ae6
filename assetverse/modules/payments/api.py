"""
Packages and payments API.
Prefixes: /api/packages, /api/payments
"""
from fastapi import APIRouter

from assetverse.core.config import settings

from .routes import packages, payments

router = APIRouter(prefix=settings.api_prefix)

router.include_router(packages.router)
router.include_router(payments.router)
