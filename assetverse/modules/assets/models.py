"""
Inventory models
"""
from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Uuid

from assetverse.core.database import Base
from assetverse.core.utils import utcnow

TYPE_RETURNABLE = "Returnable"
TYPE_NON_RETURNABLE = "Non-returnable"
ASSET_TYPES = (TYPE_RETURNABLE, TYPE_NON_RETURNABLE)


class Asset(Base):
    """Tenant-owned inventory line."""

    __tablename__ = "assets"
    __table_args__ = (
        CheckConstraint("available_quantity >= 0", name="ck_assets_available_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    product_name = Column(String(255), nullable=False)
    product_image = Column(String(512), nullable=True)
    product_type = Column(String(32), nullable=False)  # Returnable, Non-returnable
    product_quantity = Column(Integer, nullable=False)
    # mutated only through services.inventory guarded updates
    available_quantity = Column(Integer, nullable=False)
    hr_email = Column(String(255), nullable=False, index=True)
    company_name = Column(String(255), nullable=True, index=True)
    date_added = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    @property
    def is_returnable(self) -> bool:
        return self.product_type == TYPE_RETURNABLE
