"""
Request workflow: approval transaction, state machine and capacity guard
"""
import pytest

from assetverse.core.database import SessionLocal
from assetverse.core.exceptions import CapacityExceeded, Conflict, Forbidden, InvalidState
from assetverse.modules.affiliations.models import EmployeeAffiliation
from assetverse.modules.assets.models import Asset
from assetverse.modules.assignments.models import AssignedAsset
from assetverse.modules.assignments.services.returns import return_assignment
from assetverse.modules.requests.models import AssetRequest
from assetverse.modules.requests.services import workflow
from assetverse.modules.requests.services.transitions import can_transition, transition
from assetverse.modules.users.models import User


def _fresh(db, model, pk):
    db.expire_all()
    return db.query(model).filter(model.id == pk).one()


def test_request_snapshots_asset_and_hr(db, hr, employee, make_asset):
    asset = make_asset(hr, name="Headset", quantity=1, available=0)

    request = workflow.create_request(db, employee, str(asset.id), note="for calls")

    assert request.request_status == "pending"
    assert request.asset_name == "Headset"
    assert request.asset_type == "Returnable"
    assert request.hr_email == hr.email
    assert request.company_name == "Acme"
    assert request.requester_email == employee.email
    assert request.note == "for calls"


def test_approve_then_return_round_trip(db, hr, employee, make_asset):
    asset = make_asset(hr, quantity=1)
    request = workflow.create_request(db, employee, asset.id)

    assignment = workflow.approve_request(db, hr, request.id)

    assert _fresh(db, Asset, asset.id).available_quantity == 0
    assert assignment.status == "assigned"
    assert assignment.employee_email == employee.email
    approved = _fresh(db, AssetRequest, request.id)
    assert approved.request_status == "approved"
    assert approved.processed_by == hr.email
    assert approved.approval_date is not None

    result = return_assignment(db, employee, assignment.id)

    assert result["assigned_id"] == assignment.id
    assert _fresh(db, Asset, asset.id).available_quantity == 1
    assert _fresh(db, AssignedAsset, assignment.id).status == "returned"
    assert _fresh(db, AssetRequest, request.id).request_status == "returned"


def test_first_approval_enrolls_employee(db, hr, employee, make_asset):
    asset = make_asset(hr, quantity=2)
    first = workflow.create_request(db, employee, asset.id)
    second = workflow.create_request(db, employee, asset.id)

    workflow.approve_request(db, hr, first.id)
    workflow.approve_request(db, hr, second.id)

    assert db.query(EmployeeAffiliation).count() == 1
    assert _fresh(db, User, hr.id).current_employees == 1


def test_capacity_exceeded_rolls_back_everything(db, make_hr, employee, make_asset):
    hr = make_hr(package_limit=1, current_employees=1)
    asset = make_asset(hr, quantity=1)
    request = workflow.create_request(db, employee, asset.id)

    with pytest.raises(CapacityExceeded):
        workflow.approve_request(db, hr, request.id)

    assert _fresh(db, Asset, asset.id).available_quantity == 1
    assert _fresh(db, AssetRequest, request.id).request_status == "pending"
    assert db.query(AssignedAsset).count() == 0
    assert db.query(EmployeeAffiliation).count() == 0
    hr = _fresh(db, User, hr.id)
    assert hr.current_employees == 1
    assert hr.current_employees <= hr.package_limit


def test_capacity_counts_distinct_employees(db, make_hr, make_employee, make_asset):
    hr = make_hr(package_limit=1)
    first = make_employee(email="first@acme.test")
    second = make_employee(email="second@acme.test")
    asset = make_asset(hr, quantity=2)
    r1 = workflow.create_request(db, first, asset.id)
    r2 = workflow.create_request(db, second, asset.id)

    workflow.approve_request(db, hr, r1.id)
    with pytest.raises(CapacityExceeded):
        workflow.approve_request(db, hr, r2.id)

    assert _fresh(db, User, hr.id).current_employees == 1
    assert _fresh(db, Asset, asset.id).available_quantity == 1
    assert _fresh(db, AssetRequest, r2.id).request_status == "pending"


def test_last_unit_goes_to_one_approval(db, hr, make_employee, make_asset):
    asset = make_asset(hr, quantity=1)
    r1 = workflow.create_request(db, make_employee(email="a@acme.test"), asset.id)
    r2 = workflow.create_request(db, make_employee(email="b@acme.test"), asset.id)

    workflow.approve_request(db, hr, r1.id)
    with pytest.raises(Conflict):
        workflow.approve_request(db, hr, r2.id)

    assert _fresh(db, Asset, asset.id).available_quantity == 0
    assert _fresh(db, AssetRequest, r2.id).request_status == "pending"
    assert db.query(AssignedAsset).count() == 1


def test_stale_read_loses_on_conditional_decrement(db, hr, make_employee, make_asset):
    asset = make_asset(hr, quantity=1)
    r1 = workflow.create_request(db, make_employee(email="a@acme.test"), asset.id)
    r2 = workflow.create_request(db, make_employee(email="b@acme.test"), asset.id)

    # this session has seen one unit in stock
    assert db.query(Asset).filter(Asset.id == asset.id).one().available_quantity == 1

    other = SessionLocal()
    try:
        workflow.approve_request(other, other.get(User, hr.id), r1.id)
    finally:
        other.close()

    with pytest.raises(Conflict):
        workflow.approve_request(db, hr, r2.id)

    assert _fresh(db, Asset, asset.id).available_quantity == 0
    assert _fresh(db, AssetRequest, r2.id).request_status == "pending"
    assert db.query(AssignedAsset).count() == 1


def test_decided_request_cannot_move_again(db, hr, employee, make_asset):
    asset = make_asset(hr, quantity=3)
    approved = workflow.create_request(db, employee, asset.id)
    rejected = workflow.create_request(db, employee, asset.id)
    workflow.approve_request(db, hr, approved.id)
    workflow.reject_request(db, hr, rejected.id, note="not now")

    with pytest.raises(InvalidState):
        workflow.approve_request(db, hr, approved.id)
    with pytest.raises(InvalidState):
        workflow.reject_request(db, hr, approved.id)
    with pytest.raises(InvalidState):
        workflow.approve_request(db, hr, rejected.id)

    assert _fresh(db, AssetRequest, rejected.id).note == "not now"
    assert _fresh(db, Asset, asset.id).available_quantity == 2


def test_reject_leaves_inventory_alone(db, hr, employee, make_asset):
    asset = make_asset(hr, quantity=1)
    request = workflow.create_request(db, employee, asset.id)

    rejected = workflow.reject_request(db, hr, request.id)

    assert rejected.request_status == "rejected"
    assert _fresh(db, Asset, asset.id).available_quantity == 1


def test_other_tenant_cannot_decide(db, hr, make_hr, employee, make_asset):
    other = make_hr(email="boss@globex.test", company_name="Globex")
    asset = make_asset(hr)
    request = workflow.create_request(db, employee, asset.id)

    with pytest.raises(Forbidden):
        workflow.approve_request(db, other, request.id)
    with pytest.raises(Forbidden):
        workflow.reject_request(db, other, request.id)


def test_transition_table():
    assert can_transition("pending", "approved")
    assert can_transition("pending", "rejected")
    assert can_transition("approved", "returned")
    assert not can_transition("approved", "pending")
    assert not can_transition("rejected", "approved")
    assert not can_transition("returned", "approved")


def test_transition_requires_expected_status(db, hr, employee, make_asset):
    asset = make_asset(hr)
    request = workflow.create_request(db, employee, asset.id)

    with pytest.raises(InvalidState):
        transition(db, request.id, "approved", "returned")
    db.rollback()
    assert _fresh(db, AssetRequest, request.id).request_status == "pending"
