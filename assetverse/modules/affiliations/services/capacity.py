"""
Affiliation / capacity guard.

An HR account carries two counters: package_limit (raised by payments) and
current_employees (one per affiliation). Both counter moves are guarded
UPDATEs on the users row, so the limit holds under concurrent enrollments.
"""
import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from assetverse.core.database import transaction
from assetverse.core.exceptions import CapacityExceeded, Conflict, NotFound
from assetverse.core.utils import utcnow
from assetverse.modules.affiliations.models import EmployeeAffiliation
from assetverse.modules.assignments.models import STATUS_ASSIGNED, AssignedAsset
from assetverse.modules.assignments.services.returns import release_assignment
from assetverse.modules.users.models import ROLE_HR, User

logger = logging.getLogger(__name__)


def _expire_user(db: Session, hr_id) -> None:
    cached = db.identity_map.get(db.identity_key(User, hr_id))
    if cached is not None:
        db.expire(cached)


def find_affiliation(db: Session, employee_email: str, hr_email: str) -> EmployeeAffiliation | None:
    return (
        db.query(EmployeeAffiliation)
        .filter(
            EmployeeAffiliation.employee_email == employee_email,
            EmployeeAffiliation.hr_email == hr_email,
        )
        .first()
    )


def reserve_slot(db: Session, hr: User) -> None:
    """current_employees += 1, only while below package_limit."""
    result = db.execute(
        update(User)
        .where(User.id == hr.id, User.current_employees < User.package_limit)
        .values(current_employees=User.current_employees + 1)
        .execution_options(synchronize_session=False)
    )
    _expire_user(db, hr.id)
    if result.rowcount == 0:
        logger.warning(f"Capacity exhausted for HR {hr.email}")
        raise CapacityExceeded("HR package limit reached. Upgrade package to add more employees.")


def release_slot(db: Session, hr: User) -> bool:
    """current_employees -= 1, floored at zero."""
    result = db.execute(
        update(User)
        .where(User.id == hr.id, User.current_employees > 0)
        .values(current_employees=User.current_employees - 1)
        .execution_options(synchronize_session=False)
    )
    _expire_user(db, hr.id)
    if result.rowcount == 0:
        logger.warning(f"current_employees already 0 for HR {hr.email}, decrement skipped")
        return False
    return True


def ensure_affiliation(
    db: Session,
    hr_email: str,
    employee_email: str,
    employee_name: str | None = None,
) -> bool:
    """
    Enrolls the employee under the HR tenant unless already enrolled.

    Runs inside the caller's transaction; CapacityExceeded or Conflict must
    abort it. Returns True when a new affiliation was created.
    """
    if find_affiliation(db, employee_email, hr_email):
        return False

    hr = db.query(User).filter(User.email == hr_email, User.role == ROLE_HR).first()
    if not hr:
        raise NotFound("HR account not found")

    reserve_slot(db, hr)

    db.add(
        EmployeeAffiliation(
            employee_email=employee_email,
            employee_name=employee_name,
            hr_email=hr_email,
            company_name=hr.company_name,
            company_logo=hr.company_logo,
        )
    )
    try:
        db.flush()
    except IntegrityError:
        logger.warning(f"Concurrent affiliation insert for {employee_email} under {hr_email}")
        raise Conflict("Affiliation was created concurrently, retry the approval")

    logger.info(f"Affiliation created: employee={employee_email}, hr={hr_email}")
    return True


def remove_affiliation(db: Session, hr: User, employee_email: str) -> int:
    """
    Offboards an employee: returns every live assignment they hold under this
    HR, deletes the affiliation and frees one capacity slot, all in one
    transaction. Returns the number of assignments reverted.
    """
    employee_email = employee_email.strip().lower()

    with transaction(db):
        affiliation = find_affiliation(db, employee_email, hr.email)
        if not affiliation:
            raise NotFound("Affiliation not found")

        live = (
            db.query(AssignedAsset)
            .filter(
                AssignedAsset.employee_email == employee_email,
                AssignedAsset.hr_email == hr.email,
                AssignedAsset.status == STATUS_ASSIGNED,
            )
            .all()
        )
        now = utcnow()
        returned = sum(1 for assignment in live if release_assignment(db, assignment, now))

        db.delete(affiliation)
        db.flush()
        release_slot(db, hr)

    logger.info(f"Affiliation removed: employee={employee_email}, hr={hr.email}, returned={returned}")
    return returned
