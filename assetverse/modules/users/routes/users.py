"""Routes /users: the caller's own profile."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from assetverse.modules.users.dependencies import get_current_user, get_db
from assetverse.modules.users.models import User
from assetverse.modules.users.schemas import ProfileUpdate, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/me", response_model=UserOut)
def update_me(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> User:
    update_data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    if "photo" in update_data:
        user.profile_image = update_data.pop("photo")
    for k, v in update_data.items():
        setattr(user, k, v)

    db.commit()
    db.refresh(user)
    return user
