"""Page/limit pagination over SQLAlchemy queries."""
import math
from typing import Any

from fastapi import Query as QueryParam
from sqlalchemy.orm import Query

from .config import settings


class PageParams:
    """Dependency reading ?page=&limit= with the configured bounds."""

    def __init__(
        self,
        page: int = QueryParam(1, ge=1),
        limit: int = QueryParam(settings.default_page_size, ge=1, le=settings.max_page_size),
    ):
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate(query: Query, params: PageParams, *order_by: Any) -> dict:
    total = query.order_by(None).count()
    if order_by:
        query = query.order_by(*order_by)
    items = query.offset(params.offset).limit(params.limit).all()
    return {
        "page": params.page,
        "limit": params.limit,
        "total": total,
        "total_pages": math.ceil(total / params.limit),
        "items": items,
    }
