"""
Assignment schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from assetverse.core.schemas import CamelModel


class AssignedAssetOut(CamelModel):
    id: UUID
    asset_id: UUID
    asset_name: str
    asset_image: Optional[str] = None
    asset_type: str
    employee_email: str
    employee_name: Optional[str] = None
    hr_email: str
    company_name: Optional[str] = None
    assignment_date: datetime
    return_date: Optional[datetime] = None
    status: str


class ReturnResponse(CamelModel):
    message: str
    assigned_id: UUID
    return_date: datetime
