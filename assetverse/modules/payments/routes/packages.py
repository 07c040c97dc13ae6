"""Routes /packages: public catalogue."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from assetverse.core.database import get_db
from assetverse.modules.payments.schemas import PackageList
from assetverse.modules.payments.services.payments import list_packages

router = APIRouter(prefix="/packages", tags=["packages"])


@router.get("", response_model=PackageList)
def get_packages(db: Session = Depends(get_db)):
    return {"packages": list_packages(db)}
