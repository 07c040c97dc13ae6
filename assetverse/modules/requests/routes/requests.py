"""Routes /requests: employees ask, HR decides."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from assetverse.core.database import get_db
from assetverse.core.pagination import PageParams, paginate
from assetverse.core.schemas import Page
from assetverse.modules.requests.models import AssetRequest
from assetverse.modules.requests.schemas import (
    ApproveResponse,
    RequestCreate,
    RequestOut,
    RequestReject,
    RequestResponse,
)
from assetverse.modules.requests.services import workflow
from assetverse.modules.users.dependencies import require_employee, require_hr
from assetverse.modules.users.models import User

router = APIRouter(prefix="/requests", tags=["requests"])


@router.post("", response_model=RequestOut, status_code=201)
def create_request(
    payload: RequestCreate,
    db: Session = Depends(get_db),
    employee: User = Depends(require_employee),
):
    return workflow.create_request(db, employee, payload.asset_id, payload.note)


@router.get("/my", response_model=Page[RequestOut])
def my_requests(
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    employee: User = Depends(require_employee),
):
    q = workflow.my_requests_query(db, employee)
    return paginate(q, params, AssetRequest.request_date.desc())


@router.get("", response_model=Page[RequestOut])
def hr_requests(
    status: Optional[str] = Query(None),
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    """Requests addressed to the caller's tenant."""
    q = workflow.hr_requests_query(db, hr, status=status)
    return paginate(q, params, AssetRequest.request_date.desc())


@router.put("/{request_id}/approve", response_model=ApproveResponse)
def approve_request(
    request_id: str,
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    assignment = workflow.approve_request(db, hr, request_id)
    return {"message": "Request approved and asset assigned", "assigned_id": assignment.id}


@router.put("/{request_id}/reject", response_model=RequestResponse)
def reject_request(
    request_id: str,
    payload: Optional[RequestReject] = Body(None),
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    request = workflow.reject_request(db, hr, request_id, payload.note if payload else None)
    return {"message": "Request rejected", "request": request}
