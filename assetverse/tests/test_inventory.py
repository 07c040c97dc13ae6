"""
Inventory ledger: asset CRUD and the guarded available-quantity counter
"""
import pytest

from assetverse.core.exceptions import Conflict, Forbidden, InvalidInput, NotFound
from assetverse.modules.assets.models import Asset
from assetverse.modules.assets.schemas import AssetCreate, AssetUpdate
from assetverse.modules.assets.services import inventory
from assetverse.modules.assignments.models import AssignedAsset


def _available(db, asset_id) -> int:
    db.expire_all()
    return db.query(Asset).filter(Asset.id == asset_id).one().available_quantity


def test_create_asset_sets_available_to_total(db, hr):
    asset = inventory.create_asset(
        db,
        hr,
        AssetCreate(product_name=" Monitor ", product_type="Returnable", product_quantity=3),
    )
    assert asset.product_name == "Monitor"
    assert asset.available_quantity == 3
    assert asset.hr_email == hr.email
    assert asset.company_name == "Acme"


@pytest.mark.parametrize(
    "product_type, quantity",
    [("Consumable", 1), ("Returnable", -1)],
)
def test_create_asset_rejects_bad_input(db, hr, product_type, quantity):
    with pytest.raises(InvalidInput):
        inventory.create_asset(
            db,
            hr,
            AssetCreate(product_name="Chair", product_type=product_type, product_quantity=quantity),
        )
    assert db.query(Asset).count() == 0


def test_decrement_stops_at_zero(db, hr, make_asset):
    asset = make_asset(hr, quantity=1)

    inventory.decrement_available(db, asset.id)
    db.commit()
    assert _available(db, asset.id) == 0

    with pytest.raises(Conflict):
        inventory.decrement_available(db, asset.id)
    db.rollback()
    assert _available(db, asset.id) == 0


def test_increment_is_clamped_to_total(db, hr, make_asset):
    asset = make_asset(hr, quantity=2, available=1)

    assert inventory.increment_available(db, asset.id) is True
    db.commit()
    assert _available(db, asset.id) == 2

    assert inventory.increment_available(db, asset.id) is False
    db.commit()
    assert _available(db, asset.id) == 2


def test_update_quantity_shifts_available_by_delta(db, hr, make_asset):
    asset = make_asset(hr, quantity=5, available=2)

    updated = inventory.update_asset(db, hr, asset.id, AssetUpdate(product_quantity=8))
    assert updated.product_quantity == 8
    assert updated.available_quantity == 5

    # 3 units are out; total cannot drop below that
    with pytest.raises(InvalidInput):
        inventory.update_asset(db, hr, asset.id, AssetUpdate(product_quantity=2))
    assert _available(db, asset.id) == 5


def test_update_requires_owner(db, hr, make_hr, make_asset):
    other = make_hr(email="other@globex.test", company_name="Globex")
    asset = make_asset(hr)
    with pytest.raises(Forbidden):
        inventory.update_asset(db, other, asset.id, AssetUpdate(product_name="Mine now"))


def test_get_asset_bad_id(db):
    with pytest.raises(InvalidInput):
        inventory.get_asset(db, "not-a-uuid")


def test_delete_blocked_while_assigned(db, hr, employee, make_asset):
    asset = make_asset(hr, quantity=2, available=1)
    db.add(
        AssignedAsset(
            asset_id=asset.id,
            asset_name=asset.product_name,
            asset_type=asset.product_type,
            employee_email=employee.email,
            hr_email=hr.email,
            status="assigned",
        )
    )
    db.commit()

    with pytest.raises(Conflict):
        inventory.delete_asset(db, hr, asset.id)
    assert db.query(Asset).count() == 1


def test_delete_asset(db, hr, make_asset):
    asset = make_asset(hr)
    inventory.delete_asset(db, hr, asset.id)
    with pytest.raises(NotFound):
        inventory.get_asset(db, asset.id)


def test_zero_quantity_line_is_listed_but_not_available(db, hr):
    asset = inventory.create_asset(
        db,
        hr,
        AssetCreate(product_name="Projector", product_type="Returnable", product_quantity=0),
    )
    assert asset.product_quantity == 0
    assert asset.available_quantity == 0
    assert inventory.hr_assets_query(db, hr).count() == 1
    assert inventory.available_assets_query(db).count() == 0
