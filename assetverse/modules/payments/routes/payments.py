"""Routes /payments: checkout, provider webhook, dev simulation, history."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session

from assetverse.core.config import settings
from assetverse.core.database import get_db
from assetverse.core.exceptions import Forbidden, InvalidInput, NotFound
from assetverse.core.schemas import MessageResponse
from assetverse.modules.payments.models import Payment
from assetverse.modules.payments.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    PaymentHistory,
    SimulateRequest,
    WebhookAck,
)
from assetverse.modules.payments.services.gateway import (
    CHECKOUT_COMPLETED,
    create_checkout_session,
    verify_webhook,
)
from assetverse.modules.payments.services.payments import PaymentEvent, apply_payment_event, get_package
from assetverse.modules.users.dependencies import require_hr
from assetverse.modules.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    if not payload.package_id:
        raise InvalidInput("packageId required")
    package = get_package(db, payload.package_id)
    return create_checkout_session(hr, package)


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
    db: Session = Depends(get_db),
):
    """Raw-body endpoint; the signature is checked before any write."""
    payload = await request.body()
    event = verify_webhook(payload, stripe_signature)

    if event["type"] == CHECKOUT_COMPLETED:
        session = (event.get("data") or {}).get("object") or {}
        apply_payment_event(db, PaymentEvent.from_session(session))
    else:
        logger.info(f"Webhook event {event['type']} acknowledged without action")
    return {"received": True}


@router.post("/simulate", response_model=MessageResponse)
def simulate_payment(
    payload: SimulateRequest,
    x_simulate_secret: Optional[str] = Header(None, alias="X-Simulate-Secret"),
    db: Session = Depends(get_db),
):
    """Development stand-in for a completed checkout; never served in production."""
    if settings.is_production:
        raise NotFound("Not found")
    if not settings.simulate_secret or x_simulate_secret != settings.simulate_secret:
        raise Forbidden("Simulate secret missing or invalid")
    if not payload.session or not payload.session.get("metadata"):
        raise InvalidInput("session with metadata required")

    apply_payment_event(db, PaymentEvent.from_session(payload.session, simulated=True))
    return {"message": "Simulated webhook processed"}


@router.get("/history", response_model=PaymentHistory)
def payment_history(
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    items = (
        db.query(Payment)
        .filter(Payment.hr_email == hr.email)
        .order_by(Payment.payment_date.desc())
        .all()
    )
    return {"items": items}
