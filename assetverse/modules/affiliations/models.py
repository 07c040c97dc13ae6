"""
Employee affiliation model
"""
from uuid import uuid4

from sqlalchemy import Column, DateTime, String, UniqueConstraint, Uuid

from assetverse.core.database import Base
from assetverse.core.utils import utcnow

STATUS_ACTIVE = "active"


class EmployeeAffiliation(Base):
    """Enrollment of one employee under one HR tenant; counts against capacity."""

    __tablename__ = "employee_affiliations"
    __table_args__ = (
        UniqueConstraint("employee_email", "hr_email", name="uq_affiliation_employee_hr"),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    employee_email = Column(String(255), nullable=False, index=True)
    employee_name = Column(String(255), nullable=True)
    hr_email = Column(String(255), nullable=False, index=True)
    company_name = Column(String(255), nullable=True)
    company_logo = Column(String(512), nullable=True)
    affiliation_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    status = Column(String(32), nullable=False, default=STATUS_ACTIVE)
