"""
Inventory ledger: asset records and their available-quantity counter.

available_quantity is never read-modified-written across two statements;
every change goes through a single guarded UPDATE so concurrent approvals
and returns cannot lose updates.
"""
import logging
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.orm import Query, Session

from assetverse.core.database import transaction
from assetverse.core.exceptions import Conflict, Forbidden, InvalidInput, NotFound
from assetverse.core.utils import parse_id
from assetverse.modules.assets.models import ASSET_TYPES, Asset
from assetverse.modules.assets.schemas import AssetCreate, AssetUpdate
from assetverse.modules.assignments.models import STATUS_ASSIGNED, AssignedAsset
from assetverse.modules.users.models import User

logger = logging.getLogger(__name__)


def _validate_type(product_type: str) -> None:
    if product_type not in ASSET_TYPES:
        raise InvalidInput('productType must be "Returnable" or "Non-returnable"')


def _validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
        raise InvalidInput("productQuantity must be a non-negative integer")
    return quantity


def _expire_cached(db: Session, asset_id: UUID) -> None:
    """Drops a stale in-session copy after a bulk UPDATE bypassed the ORM."""
    cached = db.identity_map.get(db.identity_key(Asset, asset_id))
    if cached is not None:
        db.expire(cached)


def create_asset(db: Session, hr: User, payload: AssetCreate) -> Asset:
    if not payload.product_name or not payload.product_name.strip():
        raise InvalidInput("productName, productType and productQuantity are required")
    _validate_type(payload.product_type)
    qty = _validate_quantity(payload.product_quantity)

    asset = Asset(
        product_name=payload.product_name.strip(),
        product_image=payload.product_image or None,
        product_type=payload.product_type,
        product_quantity=qty,
        available_quantity=qty,
        hr_email=hr.email,
        company_name=payload.company_name or hr.company_name,
    )
    with transaction(db):
        db.add(asset)
    db.refresh(asset)
    logger.info(f"Asset created: id={asset.id}, hr={hr.email}, qty={qty}")
    return asset


def get_asset(db: Session, asset_id) -> Asset:
    asset = db.query(Asset).filter(Asset.id == parse_id(asset_id, "asset id")).first()
    if not asset:
        raise NotFound("Asset not found")
    return asset


def get_owned_asset(db: Session, hr: User, asset_id) -> Asset:
    asset = get_asset(db, asset_id)
    if asset.hr_email != hr.email:
        raise Forbidden("Not authorized to access this asset")
    return asset


def hr_assets_query(
    db: Session,
    hr: User,
    search: str | None = None,
    product_type: str | None = None,
) -> Query:
    q = db.query(Asset).filter(Asset.hr_email == hr.email)
    if search and search.strip():
        q = q.filter(Asset.product_name.ilike(f"%{search.strip()}%"))
    if product_type:
        q = q.filter(Asset.product_type == product_type)
    return q


def available_assets_query(
    db: Session,
    search: str | None = None,
    company_name: str | None = None,
) -> Query:
    q = db.query(Asset).filter(Asset.available_quantity > 0)
    if search and search.strip():
        q = q.filter(Asset.product_name.ilike(f"%{search.strip()}%"))
    if company_name:
        q = q.filter(func.lower(Asset.company_name) == company_name.strip().lower())
    return q


def update_asset(db: Session, hr: User, asset_id, payload: AssetUpdate) -> Asset:
    """
    Updates descriptive fields and, optionally, the total quantity.

    A total-quantity change shifts available_quantity by the same delta in one
    guarded UPDATE; it is refused if it would leave available below zero.
    """
    asset = get_owned_asset(db, hr, asset_id)
    data = payload.model_dump(exclude_unset=True)

    with transaction(db):
        if data.get("product_name") is not None:
            if not data["product_name"].strip():
                raise InvalidInput("productName cannot be empty")
            asset.product_name = data["product_name"].strip()
        if "product_image" in data:
            asset.product_image = data["product_image"] or None
        if data.get("product_type") is not None:
            _validate_type(data["product_type"])
            asset.product_type = data["product_type"]
        db.flush()

        if data.get("product_quantity") is not None:
            new_total = _validate_quantity(data["product_quantity"])
            delta = new_total - asset.product_quantity
            if delta:
                result = db.execute(
                    update(Asset)
                    .where(Asset.id == asset.id, Asset.available_quantity + delta >= 0)
                    .values(
                        product_quantity=new_total,
                        available_quantity=Asset.available_quantity + delta,
                    )
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise InvalidInput("productQuantity cannot be lower than the units currently assigned")
                db.expire(asset)

    db.refresh(asset)
    return asset


def decrement_available(db: Session, asset_id: UUID) -> None:
    """
    Takes one unit out of stock.

    Conditional on available_quantity > 0 in the UPDATE predicate itself;
    zero matched rows means the last unit went to someone else.
    """
    result = db.execute(
        update(Asset)
        .where(Asset.id == asset_id, Asset.available_quantity > 0)
        .values(available_quantity=Asset.available_quantity - 1)
        .execution_options(synchronize_session=False)
    )
    _expire_cached(db, asset_id)
    if result.rowcount == 0:
        logger.warning(f"Decrement lost race or stock exhausted: asset={asset_id}")
        raise Conflict("Asset is no longer available (concurrent update)")


def increment_available(db: Session, asset_id: UUID) -> bool:
    """
    Puts one unit back into stock.

    Capped at product_quantity: returns False (and changes nothing) when the
    counter is already full, which only happens on inconsistent data.
    """
    result = db.execute(
        update(Asset)
        .where(Asset.id == asset_id, Asset.available_quantity < Asset.product_quantity)
        .values(available_quantity=Asset.available_quantity + 1)
        .execution_options(synchronize_session=False)
    )
    _expire_cached(db, asset_id)
    if result.rowcount == 0:
        logger.warning(f"Increment skipped, asset missing or already at full stock: asset={asset_id}")
        return False
    return True


def delete_asset(db: Session, hr: User, asset_id) -> None:
    asset = get_owned_asset(db, hr, asset_id)
    deleted_id = asset.id

    with transaction(db):
        assigned_count = (
            db.query(AssignedAsset)
            .filter(AssignedAsset.asset_id == asset.id, AssignedAsset.status == STATUS_ASSIGNED)
            .count()
        )
        if assigned_count > 0:
            raise Conflict("Cannot delete asset with currently assigned items")
        db.delete(asset)

    logger.info(f"Asset deleted: id={deleted_id}, hr={hr.email}")
