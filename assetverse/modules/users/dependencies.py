"""
Caller identity dependencies used by every module router.
"""
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from assetverse.core.auth import get_token_payload
from assetverse.core.database import get_db
from assetverse.core.exceptions import Forbidden, Unauthorized
from assetverse.modules.users.models import ROLE_EMPLOYEE, ROLE_HR, User


def get_current_user(
    db: Session = Depends(get_db),
    payload: dict = Depends(get_token_payload),
) -> User:
    """Current user from the JWT, re-read from the database for a fresh role."""
    user = None
    user_id_str = payload.get("sub")
    if user_id_str:
        try:
            user_id = UUID(user_id_str)
        except ValueError:
            raise Unauthorized("Token payload invalid")
        user = db.query(User).filter(User.id == user_id).first()
    elif payload.get("email"):
        user = db.query(User).filter(User.email == str(payload["email"]).lower()).first()

    if not user:
        raise Unauthorized("User not found (invalid token)")
    if not user.is_active:
        raise Forbidden("User is deactivated")
    return user


def require_hr(user: User = Depends(get_current_user)) -> User:
    if user.role != ROLE_HR:
        raise Forbidden("HR role required")
    return user


def require_employee(user: User = Depends(get_current_user)) -> User:
    if user.role != ROLE_EMPLOYEE:
        raise Forbidden("Employee role required")
    return user
