"""
Asset request models
"""
from uuid import uuid4

from sqlalchemy import Column, DateTime, String, Text, Uuid

from assetverse.core.database import Base
from assetverse.core.utils import utcnow

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUS_RETURNED = "returned"
REQUEST_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED, STATUS_RETURNED)


class AssetRequest(Base):
    """An employee's ask for one unit of an asset."""

    __tablename__ = "asset_requests"

    id = Column(Uuid, primary_key=True, default=uuid4)
    asset_id = Column(Uuid, nullable=False, index=True)
    # snapshot of the asset at request time
    asset_name = Column(String(255), nullable=False)
    asset_type = Column(String(32), nullable=False)
    requester_name = Column(String(255), nullable=True)
    requester_email = Column(String(255), nullable=False, index=True)
    # copied from the asset at creation, never re-derived
    hr_email = Column(String(255), nullable=False, index=True)
    company_name = Column(String(255), nullable=True)
    request_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    approval_date = Column(DateTime(timezone=True), nullable=True)
    request_status = Column(String(32), nullable=False, default=STATUS_PENDING, index=True)
    note = Column(Text, nullable=True)
    processed_by = Column(String(255), nullable=True)
