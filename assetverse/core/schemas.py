"""
Base schemas shared by module APIs
"""
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire (assetId, totalPages, ...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(CamelModel, Generic[T]):
    page: int
    limit: int
    total: int
    total_pages: int
    items: List[T]


class MessageResponse(CamelModel):
    message: str
