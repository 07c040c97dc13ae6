"""
Shared fixtures: in-memory SQLite, users, assets and an API client.
"""
import os

# must be set before assetverse.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-assetverse-unit-tests-0123456789")
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_secret"
os.environ["SIMULATE_SECRET"] = "sim-secret"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from assetverse.core.auth import create_access_token, get_password_hash  # noqa: E402
from assetverse.core.database import Base, SessionLocal, engine  # noqa: E402
from assetverse.main import app  # noqa: E402
from assetverse.models import load_all_models  # noqa: E402
from assetverse.modules.assets.models import TYPE_NON_RETURNABLE, TYPE_RETURNABLE, Asset  # noqa: E402
from assetverse.modules.users.models import ROLE_EMPLOYEE, ROLE_HR, User  # noqa: E402

load_all_models()

PASSWORD = "password123"


@pytest.fixture
def db() -> Session:
    """Fresh schema per test."""
    Base.metadata.create_all(engine)
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def client(db) -> TestClient:
    # no context manager: startup (create_all + seeding) stays out of tests
    return TestClient(app)


@pytest.fixture
def make_hr(db):
    def _make(email="hr@acme.test", package_limit=5, current_employees=0, company_name="Acme"):
        user = User(
            name="HR " + email.split("@")[0],
            email=email,
            password_hash=get_password_hash(PASSWORD),
            role=ROLE_HR,
            company_name=company_name,
            package_limit=package_limit,
            current_employees=current_employees,
            subscription="basic",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_employee(db):
    def _make(email="emp@acme.test", name="Employee"):
        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(PASSWORD),
            role=ROLE_EMPLOYEE,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_asset(db):
    def _make(hr, name="Laptop", quantity=1, returnable=True, available=None):
        asset = Asset(
            product_name=name,
            product_type=TYPE_RETURNABLE if returnable else TYPE_NON_RETURNABLE,
            product_quantity=quantity,
            available_quantity=quantity if available is None else available,
            hr_email=hr.email,
            company_name=hr.company_name,
        )
        db.add(asset)
        db.commit()
        db.refresh(asset)
        return asset

    return _make


@pytest.fixture
def hr(make_hr):
    return make_hr()


@pytest.fixture
def employee(make_employee):
    return make_employee()


def auth_headers(user: User) -> dict:
    token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {token}"}
