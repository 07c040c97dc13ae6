"""
Payment capacity updater and package catalogue.

A completed payment writes one audit row and overwrites the HR's
package_limit with the purchased tier's employee limit, in one transaction.
Events are keyed by provider transaction id; a redelivery is a no-op.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from assetverse.core.database import transaction
from assetverse.core.exceptions import InvalidInput, NotFound
from assetverse.core.utils import parse_id
from assetverse.modules.payments.models import PAYMENT_COMPLETED, Package, Payment
from assetverse.modules.users.models import ROLE_HR, User

logger = logging.getLogger(__name__)

DEFAULT_PACKAGES = [
    {
        "name": "Basic",
        "employee_limit": 5,
        "price": 5,
        "features": ["Asset Tracking", "Employee Management", "Basic Support"],
    },
    {
        "name": "Standard",
        "employee_limit": 10,
        "price": 8,
        "features": ["All Basic features", "Advanced Analytics", "Priority Support"],
    },
    {
        "name": "Premium",
        "employee_limit": 20,
        "price": 15,
        "features": ["All Standard features", "Custom Branding", "24/7 Support"],
    },
]


@dataclass
class PaymentEvent:
    """A verified checkout completion, reduced to what the updater needs."""

    transaction_id: str
    hr_email: Optional[str]
    package_id: Optional[str]
    package_name: Optional[str]
    employee_limit: int
    amount: Optional[int] = None
    currency: Optional[str] = None
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_session(cls, session: dict[str, Any], simulated: bool = False) -> "PaymentEvent":
        """Builds an event from a checkout session object (provider or simulated)."""
        metadata = session.get("metadata") or {}
        try:
            employee_limit = int(metadata.get("employeeLimit") or 0)
        except (TypeError, ValueError):
            raise InvalidInput("employeeLimit must be an integer")

        transaction_id = session.get("id")
        if not transaction_id:
            if not simulated:
                raise InvalidInput("Checkout session id missing")
            transaction_id = f"sim_{int(time.time() * 1000)}"

        hr_email = metadata.get("hrEmail")
        return cls(
            transaction_id=str(transaction_id),
            hr_email=str(hr_email).strip().lower() if hr_email else None,
            package_id=metadata.get("packageId"),
            package_name=metadata.get("packageName"),
            employee_limit=employee_limit,
            amount=session.get("amount_total"),
            currency=session.get("currency"),
            raw=session,
        )


def apply_payment_event(db: Session, event: PaymentEvent) -> Optional[Payment]:
    """
    Records the payment and grants capacity.

    Returns the new Payment, or None when the transaction id was already
    applied.
    """
    existing = db.query(Payment).filter(Payment.transaction_id == event.transaction_id).first()
    if existing:
        logger.info(f"Payment {event.transaction_id} already applied, ignoring redelivery")
        return None

    payment = Payment(
        hr_email=event.hr_email,
        package_id=event.package_id,
        package_name=event.package_name,
        employee_limit=event.employee_limit,
        amount=event.amount,
        currency=event.currency,
        transaction_id=event.transaction_id,
        status=PAYMENT_COMPLETED,
        raw_session=event.raw,
    )
    try:
        with transaction(db):
            db.add(payment)
            db.flush()

            if event.hr_email and event.employee_limit > 0:
                # overwrite, not add: the purchased tier is the new ceiling
                result = db.execute(
                    update(User)
                    .where(User.email == event.hr_email, User.role == ROLE_HR)
                    .values(
                        package_limit=event.employee_limit,
                        subscription=event.package_name or "upgraded",
                    )
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    logger.warning(f"Payment {event.transaction_id}: no HR account {event.hr_email}")
    except IntegrityError:
        logger.info(f"Payment {event.transaction_id} recorded concurrently, ignoring redelivery")
        return None

    db.expire_all()
    logger.info(
        f"Payment {event.transaction_id} applied: hr={event.hr_email}, "
        f"package={event.package_name}, limit={event.employee_limit}"
    )
    return payment


def list_packages(db: Session) -> list[Package]:
    return db.query(Package).order_by(Package.employee_limit).all()


def get_package(db: Session, package_id) -> Package:
    package = db.query(Package).filter(Package.id == parse_id(package_id, "package id")).first()
    if not package:
        raise NotFound("Package not found")
    return package


def seed_default_packages(db: Session, replace: bool = False) -> int:
    """
    Loads the default catalogue.

    Without ``replace`` nothing happens when packages already exist;
    with it the catalogue is cleared first. Returns the number inserted.
    """
    with transaction(db):
        if replace:
            deleted = db.query(Package).delete()
            logger.info(f"Cleared {deleted} packages")
        elif db.query(Package).count() > 0:
            return 0
        for data in DEFAULT_PACKAGES:
            db.add(Package(**data))

    logger.info(f"Seeded {len(DEFAULT_PACKAGES)} packages")
    return len(DEFAULT_PACKAGES)
