"""
Stripe integration: checkout session creation and webhook verification.
"""
import json
import logging

import stripe

from assetverse.core.config import settings
from assetverse.core.exceptions import Internal, InvalidInput
from assetverse.modules.payments.models import Package
from assetverse.modules.users.models import User

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


def create_checkout_session(hr: User, package: Package) -> dict:
    """Creates a one-off payment session; metadata drives the webhook later."""
    if not settings.stripe_secret_key:
        logger.error("Checkout requested but STRIPE_SECRET_KEY is not set")
        raise Internal("Payment provider is not configured")

    amount = int(round(float(package.price) * 100))
    try:
        session = stripe.checkout.Session.create(
            api_key=settings.stripe_secret_key,
            payment_method_types=["card"],
            mode="payment",
            line_items=[
                {
                    "price_data": {
                        "currency": settings.stripe_currency,
                        "product_data": {
                            "name": f"AssetVerse - {package.name} Package",
                            "description": f"Upgrade to {package.name} ({package.employee_limit} employees)",
                        },
                        "unit_amount": amount,
                    },
                    "quantity": 1,
                }
            ],
            metadata={
                "hrEmail": hr.email,
                "packageId": str(package.id),
                "packageName": package.name,
                "employeeLimit": str(package.employee_limit),
            },
            success_url=f"{settings.client_url}/payments/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{settings.client_url}/payments/cancel",
        )
    except stripe.StripeError as e:
        logger.error(f"Stripe checkout failed for {hr.email}: {e}")
        raise Internal("Failed to create checkout session")

    logger.info(f"Checkout session {session.id} created for {hr.email}, package {package.name}")
    return {"url": session.url, "id": session.id}


def verify_webhook(payload: bytes, sig_header: str | None) -> dict:
    """
    Checks the Stripe-Signature header against the raw body and returns the
    parsed event. Any failure raises InvalidInput before anything is written.
    """
    if not settings.stripe_webhook_secret:
        logger.error("Webhook received but STRIPE_WEBHOOK_SECRET is not set")
        raise Internal("Webhook secret is not configured")
    if not sig_header:
        raise InvalidInput("Webhook Error: missing Stripe-Signature header")

    try:
        body = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            body,
            sig_header,
            settings.stripe_webhook_secret,
            settings.stripe_webhook_tolerance,
        )
        event = json.loads(body)
    except stripe.SignatureVerificationError as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        raise InvalidInput(f"Webhook Error: {e}")
    except (UnicodeDecodeError, ValueError) as e:
        logger.warning(f"Webhook payload unreadable: {e}")
        raise InvalidInput("Webhook Error: invalid payload")

    if not isinstance(event, dict) or "type" not in event:
        raise InvalidInput("Webhook Error: invalid payload")
    return event
