"""Offset pagination shared by every listing endpoint."""

from typing import Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Query as OrmQuery

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PageRequest(BaseModel):
    """Zero-based page number and page size."""

    page: int = Field(default=0, ge=0)
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    """
    One page of results.

    has_more is inferred from a full page: when the last page holds exactly
    `size` rows it still reports True and the next request returns nothing.
    """

    items: list[T]
    has_more: bool


def page_params(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(
        DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"
    ),
) -> PageRequest:
    """Dependency: read ?page=&size= from the query string."""
    return PageRequest(page=page, size=size)


def fetch_page(query: OrmQuery, request: PageRequest) -> tuple[list, bool]:
    """Apply offset/limit to an id-ordered query; return (rows, has_more)."""
    rows = query.offset(request.offset).limit(request.size).all()
    return rows, len(rows) == request.size
