"""
Asset request schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from assetverse.core.schemas import CamelModel


class RequestCreate(CamelModel):
    asset_id: str
    note: Optional[str] = None


class RequestReject(CamelModel):
    note: Optional[str] = None


class RequestOut(CamelModel):
    id: UUID
    asset_id: UUID
    asset_name: str
    asset_type: str
    requester_name: Optional[str] = None
    requester_email: str
    hr_email: str
    company_name: Optional[str] = None
    request_date: datetime
    approval_date: Optional[datetime] = None
    request_status: str
    note: Optional[str] = None
    processed_by: Optional[str] = None


class RequestResponse(CamelModel):
    message: str
    request: RequestOut


class ApproveResponse(CamelModel):
    message: str
    assigned_id: UUID
