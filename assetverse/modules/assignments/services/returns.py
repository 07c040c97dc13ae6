"""
Return flow for assigned assets.
"""
import logging
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from assetverse.core.database import transaction
from assetverse.core.exceptions import Forbidden, InvalidOperation, InvalidState, NotFound
from assetverse.core.utils import parse_id, utcnow
from assetverse.modules.assets.models import Asset
from assetverse.modules.assets.services.inventory import increment_available
from assetverse.modules.assignments.models import STATUS_ASSIGNED, STATUS_RETURNED, AssignedAsset
from assetverse.modules.requests.services.transitions import mark_returned_for
from assetverse.modules.users.models import User

logger = logging.getLogger(__name__)


def release_assignment(db: Session, assignment: AssignedAsset, when: datetime) -> bool:
    """
    Marks one assignment returned and puts its unit back into stock.

    Runs inside the caller's transaction. Returns False if the assignment was
    no longer ``assigned`` when the UPDATE ran.
    """
    asset_id, employee_email = assignment.asset_id, assignment.employee_email
    result = db.execute(
        update(AssignedAsset)
        .where(AssignedAsset.id == assignment.id, AssignedAsset.status == STATUS_ASSIGNED)
        .values(status=STATUS_RETURNED, return_date=when)
        .execution_options(synchronize_session=False)
    )
    db.expire(assignment)
    if result.rowcount == 0:
        return False

    increment_available(db, asset_id)
    mark_returned_for(db, asset_id, employee_email)
    return True


def return_assignment(db: Session, employee: User, assignment_id) -> dict:
    """Employee hands a returnable asset back. All writes commit together."""
    aid = parse_id(assignment_id, "assigned asset id")

    with transaction(db):
        assignment = db.query(AssignedAsset).filter(AssignedAsset.id == aid).first()
        if not assignment:
            raise NotFound("Assigned asset not found")
        if assignment.employee_email != employee.email:
            raise Forbidden("Not authorized to return this asset")
        if assignment.status != STATUS_ASSIGNED:
            raise InvalidState("Asset is not currently assigned or already returned")

        asset = db.query(Asset).filter(Asset.id == assignment.asset_id).first()
        if not asset:
            raise NotFound("Underlying asset record not found")
        if not asset.is_returnable:
            raise InvalidOperation("This asset type is non-returnable")

        now = utcnow()
        if not release_assignment(db, assignment, now):
            raise InvalidState("Asset is not currently assigned or already returned")

    logger.info(f"Assignment {aid} returned by {employee.email}")
    return {"message": "Return processed successfully", "assigned_id": aid, "return_date": now}
