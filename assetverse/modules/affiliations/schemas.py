"""
Affiliation schemas
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from assetverse.core.schemas import CamelModel, Page


class AffiliationOut(CamelModel):
    id: UUID
    employee_email: str
    employee_name: Optional[str] = None
    hr_email: str
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    affiliation_date: datetime
    status: str


class TeamPage(Page[AffiliationOut]):
    package_limit: int
    current_employees: int


class MyAffiliations(CamelModel):
    items: List[AffiliationOut]


class RemovalResponse(CamelModel):
    message: str
    employee_email: str
    returned_assignments: int
