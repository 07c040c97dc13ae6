"""Routes /assigned-assets: units in hand and their return."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetverse.core.database import get_db
from assetverse.core.exceptions import InvalidInput
from assetverse.core.pagination import PageParams, paginate
from assetverse.core.schemas import Page
from assetverse.modules.assignments.models import ASSIGNMENT_STATUSES, AssignedAsset
from assetverse.modules.assignments.schemas import AssignedAssetOut, ReturnResponse
from assetverse.modules.assignments.services.returns import return_assignment
from assetverse.modules.users.dependencies import get_current_user, require_hr
from assetverse.modules.users.models import User

router = APIRouter(prefix="/assigned-assets", tags=["assigned-assets"])


def _filter_status(q, status: Optional[str]):
    if not status:
        return q
    if status not in ASSIGNMENT_STATUSES:
        raise InvalidInput(f"Unknown status: {status}")
    return q.filter(AssignedAsset.status == status)


@router.get("/my", response_model=Page[AssignedAssetOut])
def my_assigned_assets(
    status: Optional[str] = Query(None),
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    q = db.query(AssignedAsset).filter(AssignedAsset.employee_email == user.email)
    q = _filter_status(q, status)
    return paginate(q, params, AssignedAsset.assignment_date.desc())


@router.get("/company", response_model=Page[AssignedAssetOut])
def company_assigned_assets(
    status: Optional[str] = Query(None),
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    """Every assignment issued by the caller's tenant."""
    q = db.query(AssignedAsset).filter(AssignedAsset.hr_email == hr.email)
    q = _filter_status(q, status)
    return paginate(q, params, AssignedAsset.assignment_date.desc())


@router.post("/{assigned_id}/return", response_model=ReturnResponse)
def return_assigned_asset(
    assigned_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return return_assignment(db, user, assigned_id)
