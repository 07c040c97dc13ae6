"""
Assignment ledger models
"""
from uuid import uuid4

from sqlalchemy import Column, DateTime, String, Uuid

from assetverse.core.database import Base
from assetverse.core.utils import utcnow

STATUS_ASSIGNED = "assigned"
STATUS_RETURNED = "returned"
ASSIGNMENT_STATUSES = (STATUS_ASSIGNED, STATUS_RETURNED)


class AssignedAsset(Base):
    """One unit of an asset held by one employee."""

    __tablename__ = "assigned_assets"

    id = Column(Uuid, primary_key=True, default=uuid4)
    # linked to assets/requests by convention only, no foreign keys
    asset_id = Column(Uuid, nullable=False, index=True)
    asset_name = Column(String(255), nullable=False)
    asset_image = Column(String(512), nullable=True)
    asset_type = Column(String(32), nullable=False)
    employee_email = Column(String(255), nullable=False, index=True)
    employee_name = Column(String(255), nullable=True)
    hr_email = Column(String(255), nullable=False, index=True)
    company_name = Column(String(255), nullable=True)
    assignment_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    return_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(32), nullable=False, default=STATUS_ASSIGNED, index=True)
