"""
Request workflow: creation, approval and rejection.

Approval is the one multi-table write in the system. Stock decrement,
assignment insert, request transition and (for a first-time employee)
affiliation enrollment commit together or not at all.
"""
import logging

from sqlalchemy.orm import Session

from assetverse.core.database import transaction
from assetverse.core.exceptions import Conflict, Forbidden, InvalidInput, InvalidState, NotFound
from assetverse.core.utils import parse_id, utcnow
from assetverse.modules.affiliations.services.capacity import ensure_affiliation
from assetverse.modules.assets.models import Asset
from assetverse.modules.assets.services.inventory import decrement_available, get_asset
from assetverse.modules.assignments.models import STATUS_ASSIGNED, AssignedAsset
from assetverse.modules.requests.models import (
    REQUEST_STATUSES,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    AssetRequest,
)
from assetverse.modules.requests.services.transitions import transition
from assetverse.modules.users.models import User

logger = logging.getLogger(__name__)


def create_request(db: Session, employee: User, asset_id, note: str | None = None) -> AssetRequest:
    """
    Files a pending request. HR identity and company are copied from the
    asset now; stock is not checked until approval.
    """
    asset = get_asset(db, asset_id)

    request = AssetRequest(
        asset_id=asset.id,
        asset_name=asset.product_name,
        asset_type=asset.product_type,
        requester_name=employee.name,
        requester_email=employee.email,
        hr_email=asset.hr_email,
        company_name=asset.company_name,
        request_status=STATUS_PENDING,
        note=note or None,
    )
    with transaction(db):
        db.add(request)
    db.refresh(request)
    logger.info(f"Request {request.id} created by {employee.email} for asset {asset.id}")
    return request


def get_request_for_hr(db: Session, hr: User, request_id) -> AssetRequest:
    rid = parse_id(request_id, "request id")
    request = db.query(AssetRequest).filter(AssetRequest.id == rid).first()
    if not request:
        raise NotFound("Request not found")
    if request.hr_email != hr.email:
        raise Forbidden("Not authorized to process this request")
    return request


def approve_request(db: Session, hr: User, request_id) -> AssignedAsset:
    """
    Approves a pending request.

    Steps, each aborting the whole transaction on failure:
      1. request exists, belongs to this HR and is pending
      2. asset exists and one unit is taken by a conditional decrement
      3. assignment row is inserted
      4. request moves pending -> approved
      5. first approval for this employee under this HR enrolls them,
         subject to the package limit
    """
    with transaction(db):
        request = get_request_for_hr(db, hr, request_id)
        if request.request_status != STATUS_PENDING:
            raise InvalidState("Request is not pending")

        asset = db.query(Asset).filter(Asset.id == request.asset_id).first()
        if not asset:
            raise NotFound("Asset not found")
        if asset.available_quantity <= 0:
            raise Conflict("Asset not available")
        decrement_available(db, asset.id)

        now = utcnow()
        assignment = AssignedAsset(
            asset_id=asset.id,
            asset_name=asset.product_name,
            asset_image=asset.product_image,
            asset_type=asset.product_type,
            employee_email=request.requester_email,
            employee_name=request.requester_name,
            hr_email=hr.email,
            company_name=asset.company_name or hr.company_name,
            assignment_date=now,
            status=STATUS_ASSIGNED,
        )
        db.add(assignment)
        db.flush()

        transition(
            db,
            request.id,
            STATUS_PENDING,
            STATUS_APPROVED,
            approval_date=now,
            processed_by=hr.email,
        )

        ensure_affiliation(db, hr.email, request.requester_email, request.requester_name)

    db.refresh(assignment)
    logger.info(f"Request {request_id} approved by {hr.email}, assignment {assignment.id}")
    return assignment


def reject_request(db: Session, hr: User, request_id, note: str | None = None) -> AssetRequest:
    """pending -> rejected. Inventory is untouched."""
    with transaction(db):
        request = get_request_for_hr(db, hr, request_id)
        if request.request_status != STATUS_PENDING:
            raise InvalidState("Request is not pending")

        values = {"approval_date": utcnow(), "processed_by": hr.email}
        if note:
            values["note"] = note
        transition(db, request.id, STATUS_PENDING, STATUS_REJECTED, **values)

    db.refresh(request)
    logger.info(f"Request {request.id} rejected by {hr.email}")
    return request


def my_requests_query(db: Session, employee: User):
    return db.query(AssetRequest).filter(AssetRequest.requester_email == employee.email)


def hr_requests_query(db: Session, hr: User, status: str | None = None):
    q = db.query(AssetRequest).filter(AssetRequest.hr_email == hr.email)
    if status:
        if status not in REQUEST_STATUSES:
            raise InvalidInput(f"Unknown status: {status}")
        q = q.filter(AssetRequest.request_status == status)
    return q
