"""
Return flow
"""
import pytest

from assetverse.core.exceptions import Forbidden, InvalidOperation, InvalidState, NotFound
from assetverse.modules.assets.models import Asset
from assetverse.modules.assignments.models import AssignedAsset
from assetverse.modules.assignments.services.returns import return_assignment
from assetverse.modules.requests.models import AssetRequest
from assetverse.modules.requests.services import workflow


def _fresh(db, model, pk):
    db.expire_all()
    return db.query(model).filter(model.id == pk).one()


@pytest.fixture
def issued(db, hr, employee, make_asset):
    """Factory: approves one request and returns (asset, request, assignment)."""

    def _issue(returnable=True, quantity=1):
        asset = make_asset(hr, quantity=quantity, returnable=returnable)
        request = workflow.create_request(db, employee, asset.id)
        assignment = workflow.approve_request(db, hr, request.id)
        return asset, request, assignment

    return _issue


def test_return_restores_stock(db, employee, issued):
    asset, request, assignment = issued(quantity=3)
    before = 3

    return_assignment(db, employee, assignment.id)

    assert _fresh(db, Asset, asset.id).available_quantity == before
    assert _fresh(db, AssetRequest, request.id).request_status == "returned"
    returned = _fresh(db, AssignedAsset, assignment.id)
    assert returned.status == "returned"
    assert returned.return_date is not None


def test_non_returnable_cannot_be_returned(db, employee, issued):
    asset, request, assignment = issued(returnable=False)

    with pytest.raises(InvalidOperation):
        return_assignment(db, employee, assignment.id)

    assert _fresh(db, Asset, asset.id).available_quantity == 0
    assert _fresh(db, AssignedAsset, assignment.id).status == "assigned"
    assert _fresh(db, AssetRequest, request.id).request_status == "approved"


def test_only_holder_can_return(db, make_employee, issued):
    asset, _, assignment = issued()
    stranger = make_employee(email="stranger@acme.test")

    with pytest.raises(Forbidden):
        return_assignment(db, stranger, assignment.id)
    assert _fresh(db, Asset, asset.id).available_quantity == 0


def test_second_return_is_refused(db, employee, issued):
    asset, _, assignment = issued()
    return_assignment(db, employee, assignment.id)

    with pytest.raises(InvalidState):
        return_assignment(db, employee, assignment.id)
    assert _fresh(db, Asset, asset.id).available_quantity == 1


def test_return_without_matching_request(db, hr, employee, make_asset):
    asset = make_asset(hr, quantity=1, available=0)
    assignment = AssignedAsset(
        asset_id=asset.id,
        asset_name=asset.product_name,
        asset_type=asset.product_type,
        employee_email=employee.email,
        hr_email=hr.email,
        status="assigned",
    )
    db.add(assignment)
    db.commit()

    result = return_assignment(db, employee, assignment.id)

    assert result["message"] == "Return processed successfully"
    assert _fresh(db, Asset, asset.id).available_quantity == 1


def test_return_missing_assignment(db, employee):
    with pytest.raises(NotFound):
        return_assignment(db, employee, "00000000-0000-0000-0000-000000000000")
