"""
Request state machine.

pending -> approved | rejected, approved -> returned. Each move is a single
UPDATE conditioned on the expected current status, so of two concurrent
deciders only one matches the row.
"""
import logging
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from assetverse.core.exceptions import InvalidState
from assetverse.modules.requests.models import (
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    STATUS_RETURNED,
    AssetRequest,
)

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    STATUS_PENDING: {STATUS_APPROVED, STATUS_REJECTED},
    STATUS_APPROVED: {STATUS_RETURNED},
}


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


def transition(db: Session, request_id: UUID, expected: str, target: str, **values) -> None:
    """Moves a request from ``expected`` to ``target``; raises InvalidState otherwise."""
    if not can_transition(expected, target):
        raise InvalidState(f"Cannot move request from {expected} to {target}")

    result = db.execute(
        update(AssetRequest)
        .where(AssetRequest.id == request_id, AssetRequest.request_status == expected)
        .values(request_status=target, **values)
        .execution_options(synchronize_session=False)
    )
    cached = db.identity_map.get(db.identity_key(AssetRequest, request_id))
    if cached is not None:
        db.expire(cached)
    if result.rowcount == 0:
        logger.warning(f"Request {request_id} no longer {expected}, {target} refused")
        raise InvalidState(f"Request is no longer {expected}")


def mark_returned_for(db: Session, asset_id: UUID, employee_email: str) -> bool:
    """
    Best-effort link from a returned assignment back to its request.

    Requests and assignments share no key; the most recent approved request
    for the same asset and employee is moved to returned. Finding none is
    not an error.
    """
    related = (
        db.query(AssetRequest)
        .filter(
            AssetRequest.asset_id == asset_id,
            AssetRequest.requester_email == employee_email,
            AssetRequest.request_status == STATUS_APPROVED,
        )
        .order_by(AssetRequest.approval_date.desc())
        .first()
    )
    if not related:
        logger.info(f"No approved request to close for asset={asset_id}, employee={employee_email}")
        return False

    result = db.execute(
        update(AssetRequest)
        .where(AssetRequest.id == related.id, AssetRequest.request_status == STATUS_APPROVED)
        .values(request_status=STATUS_RETURNED)
        .execution_options(synchronize_session=False)
    )
    db.expire(related)
    return result.rowcount > 0
