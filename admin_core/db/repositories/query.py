"""
Pagination and query value types shared by every repository.
"""
from __future__ import annotations

import math
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

SortDirection = Literal[1, -1]

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class QueryOptions(BaseModel):
    """Read options; ``None`` means the adapter default for that aspect."""
    skip: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=1)
    sort: dict[str, SortDirection] | None = None
    select: list[str] | None = None
    populate: list[str] | None = None


class PaginationOptions(QueryOptions):
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    search: str | None = None
    search_fields: list[str] = Field(default_factory=list)

    def to_query_options(self) -> QueryOptions:
        return QueryOptions(
            skip=(self.page - 1) * self.limit,
            limit=self.limit,
            sort=self.sort,
            select=self.select,
            populate=self.populate,
        )


class PaginationMeta(BaseModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next: bool
    has_prev: bool
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "PaginationMeta":
        total_pages = math.ceil(total_count / limit) if limit > 0 else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            limit=limit,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class PaginatedResult(BaseModel, Generic[T]):
    items: list[T]
    pagination: PaginationMeta


class BulkUpdateResult(BaseModel, Generic[T]):
    count: int
    updated: list[T]


class BulkDeleteResult(BaseModel, Generic[T]):
    count: int
    deleted: list[T]
