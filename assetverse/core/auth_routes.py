"""
Authentication routes: registration, login, current user
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from assetverse.core.auth import create_access_token, get_password_hash, verify_password
from assetverse.core.config import settings
from assetverse.core.database import get_db
from assetverse.core.exceptions import Conflict, Forbidden, InvalidInput, Unauthorized
from assetverse.modules.users.dependencies import get_current_user
from assetverse.modules.users.models import ROLE_HR, ROLES, User
from assetverse.modules.users.schemas import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.api_prefix}/auth", tags=["auth"])


def _normalize_email(email: str) -> str:
    return str(email).strip().lower()


def _token_for(user: User) -> str:
    return create_access_token(user_id=user.id, email=user.email, role=user.role)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Registers an HR administrator or an employee.

    HR accounts must carry companyName and start with the default package
    limit and zero enrolled employees.
    """
    if payload.role not in ROLES:
        raise InvalidInput('Invalid role. Must be "hr" or "employee"')

    email = _normalize_email(payload.email)
    if "@" not in email:
        raise InvalidInput("Invalid email")

    if payload.role == ROLE_HR and not payload.company_name:
        raise InvalidInput("HR registration requires companyName")

    if db.query(User).filter(User.email == email).first():
        raise Conflict("Email already in use")

    user = User(
        name=payload.name,
        email=email,
        password_hash=get_password_hash(payload.password),
        role=payload.role,
        date_of_birth=payload.date_of_birth,
        profile_image=payload.profile_image,
    )
    if payload.role == ROLE_HR:
        user.company_name = payload.company_name
        user.company_logo = payload.company_logo
        user.package_limit = (
            payload.package_limit if payload.package_limit is not None else settings.default_package_limit
        )
        user.current_employees = 0
        user.subscription = payload.subscription or settings.default_subscription

    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # unique index on email caught a concurrent registration
        db.rollback()
        raise Conflict("Email already exists")
    db.refresh(user)
    logger.info(f"Registered {user.role} account {user.email}")

    return AuthResponse(
        message="Registration successful",
        user=UserOut.model_validate(user),
        token=_token_for(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Exchanges email + password for a bearer token."""
    user = db.query(User).filter(User.email == _normalize_email(payload.email)).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise Unauthorized("Invalid credentials")

    if not user.is_active:
        raise Forbidden("User is deactivated")

    return AuthResponse(
        message="Login successful",
        user=UserOut.model_validate(user),
        token=_token_for(user),
    )


@router.get("/me", response_model=MeResponse)
def me(user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=UserOut.model_validate(user))
