"""
Package and payment schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from assetverse.core.schemas import CamelModel


class PackageOut(CamelModel):
    id: UUID
    name: str
    employee_limit: int
    price: float
    features: List[str] = []


class PackageList(CamelModel):
    packages: List[PackageOut]


class CheckoutRequest(CamelModel):
    package_id: str


class CheckoutResponse(CamelModel):
    url: Optional[str] = None
    id: str


class SimulateRequest(CamelModel):
    session: Optional[Dict[str, Any]] = None


class PaymentOut(CamelModel):
    id: UUID
    hr_email: Optional[str] = None
    package_id: Optional[str] = None
    package_name: Optional[str] = None
    employee_limit: int
    amount: Optional[int] = None
    currency: Optional[str] = None
    transaction_id: str
    payment_date: datetime
    status: str


class PaymentHistory(CamelModel):
    items: List[PaymentOut]


class WebhookAck(CamelModel):
    received: bool = True
