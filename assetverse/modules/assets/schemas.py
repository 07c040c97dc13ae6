"""
Asset schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from assetverse.core.schemas import CamelModel


class AssetCreate(CamelModel):
    product_name: str
    product_image: Optional[str] = None
    product_type: str
    product_quantity: int
    company_name: Optional[str] = None


class AssetUpdate(CamelModel):
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    product_type: Optional[str] = None
    product_quantity: Optional[int] = None


class AssetOut(CamelModel):
    id: UUID
    product_name: str
    product_image: Optional[str] = None
    product_type: str
    product_quantity: int
    available_quantity: int
    hr_email: str
    company_name: Optional[str] = None
    date_added: datetime


class AssetResponse(CamelModel):
    message: str
    asset: AssetOut
