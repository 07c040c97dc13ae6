"""Routes /affiliations: employees enrolled under an HR tenant."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from assetverse.core.database import get_db
from assetverse.core.pagination import PageParams, paginate
from assetverse.modules.affiliations.models import EmployeeAffiliation
from assetverse.modules.affiliations.schemas import MyAffiliations, RemovalResponse, TeamPage
from assetverse.modules.affiliations.services.capacity import remove_affiliation
from assetverse.modules.users.dependencies import require_employee, require_hr
from assetverse.modules.users.models import User

router = APIRouter(prefix="/affiliations", tags=["affiliations"])


@router.get("", response_model=TeamPage)
def list_team(
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    q = db.query(EmployeeAffiliation).filter(EmployeeAffiliation.hr_email == hr.email)
    page = paginate(q, params, EmployeeAffiliation.affiliation_date.desc())
    page["package_limit"] = hr.package_limit or 0
    page["current_employees"] = hr.current_employees or 0
    return page


@router.get("/my", response_model=MyAffiliations)
def my_companies(
    db: Session = Depends(get_db),
    employee: User = Depends(require_employee),
):
    items = (
        db.query(EmployeeAffiliation)
        .filter(EmployeeAffiliation.employee_email == employee.email)
        .order_by(EmployeeAffiliation.affiliation_date.desc())
        .all()
    )
    return {"items": items}


@router.delete("/{employee_email}", response_model=RemovalResponse)
def offboard_employee(
    employee_email: str,
    db: Session = Depends(get_db),
    hr: User = Depends(require_hr),
):
    """Returns the employee's live assignments and frees a capacity slot."""
    returned = remove_affiliation(db, hr, employee_email)
    return {
        "message": "Employee removed from team",
        "employee_email": employee_email.strip().lower(),
        "returned_assignments": returned,
    }
