"""
Package catalogue and payment audit models
"""
from uuid import uuid4

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Uuid

from assetverse.core.database import Base, JSONType
from assetverse.core.utils import utcnow

PAYMENT_COMPLETED = "completed"


class Package(Base):
    """Subscription tier an HR can buy; employee_limit becomes their package_limit."""

    __tablename__ = "packages"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False, unique=True)
    employee_limit = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    features = Column(JSONType, default=list, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class Payment(Base):
    """Append-only record of a completed payment event."""

    __tablename__ = "payments"

    id = Column(Uuid, primary_key=True, default=uuid4)
    hr_email = Column(String(255), nullable=True, index=True)
    package_id = Column(String(64), nullable=True)
    package_name = Column(String(100), nullable=True)
    employee_limit = Column(Integer, nullable=False, default=0)
    amount = Column(Integer, nullable=True)  # smallest currency unit
    currency = Column(String(10), nullable=True)
    # unique so a redelivered provider event cannot be applied twice
    transaction_id = Column(String(255), nullable=False, unique=True)
    payment_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    status = Column(String(32), nullable=False, default=PAYMENT_COMPLETED)
    raw_session = Column(JSONType, nullable=True)
