"""Routes /assets: the tenant inventory."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetverse.core.database import get_db
from assetverse.core.pagination import PageParams, paginate
from assetverse.core.schemas import MessageResponse, Page
from assetverse.modules.assets.models import Asset
from assetverse.modules.assets.schemas import AssetCreate, AssetOut, AssetResponse, AssetUpdate
from assetverse.modules.assets.services import inventory
from assetverse.modules.users.dependencies import get_current_user, require_hr
from assetverse.modules.users.models import User

router = APIRouter(prefix="/assets", tags=["assets"])


@router.post("", response_model=AssetResponse, status_code=201)
def create_asset(
    payload: AssetCreate,
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    asset = inventory.create_asset(db, hr, payload)
    return {"message": "Asset created", "asset": asset}


@router.get("", response_model=Page[AssetOut])
def list_assets(
    search: Optional[str] = Query(None),
    product_type: Optional[str] = Query(None, alias="type"),
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    """HR's own assets, newest first."""
    q = inventory.hr_assets_query(db, hr, search=search, product_type=product_type)
    return paginate(q, params, Asset.date_added.desc())


@router.get("/available", response_model=Page[AssetOut])
def list_available_assets(
    search: Optional[str] = Query(None),
    company_name: Optional[str] = Query(None, alias="companyName"),
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Assets with at least one unit in stock, across tenants."""
    q = inventory.available_assets_query(db, search=search, company_name=company_name)
    return paginate(q, params, Asset.date_added.desc())


@router.get("/{asset_id}", response_model=AssetOut)
def get_asset(
    asset_id: str,
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    return inventory.get_owned_asset(db, hr, asset_id)


@router.put("/{asset_id}", response_model=AssetResponse)
def update_asset(
    asset_id: str,
    payload: AssetUpdate,
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    asset = inventory.update_asset(db, hr, asset_id, payload)
    return {"message": "Asset updated", "asset": asset}


@router.delete("/{asset_id}", response_model=MessageResponse)
def delete_asset(
    asset_id: str,
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    inventory.delete_asset(db, hr, asset_id)
    return {"message": "Asset deleted"}
