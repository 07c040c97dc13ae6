from uuid import uuid4

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Uuid

from assetverse.core.database import Base
from assetverse.core.utils import utcnow

ROLE_HR = "hr"
ROLE_EMPLOYEE = "employee"
ROLES = (ROLE_HR, ROLE_EMPLOYEE)


class User(Base):
    """
    Account of an HR administrator (tenant owner) or an employee.

    HR accounts also carry the tenant's capacity counters: package_limit is
    raised only by payments, current_employees tracks live affiliations.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)  # hr, employee
    date_of_birth = Column(Date, nullable=True)
    profile_image = Column(String(512), nullable=True)
    phone = Column(String(32), nullable=True)
    address = Column(String(512), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # HR only
    company_name = Column(String(255), nullable=True, index=True)
    company_logo = Column(String(512), nullable=True)
    package_limit = Column(Integer, nullable=True)
    current_employees = Column(Integer, nullable=True)
    subscription = Column(String(100), nullable=True)  # basic, Standard, Premium, ...

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def is_hr(self) -> bool:
        return self.role == ROLE_HR
