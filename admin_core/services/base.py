"""
Shared plumbing for domain services: public-id lookup, uniqueness checks,
paginated listing with search, and cache-tag invalidation.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Optional, TypeVar

from admin_core.db.repositories import IEquals, Not, PaginatedResult, PaginationOptions, QueryOptions, Repository
from admin_core.db.types import InternalKey
from admin_core.errors import ConflictError, NotFoundError
from admin_core.utils.cache import CachePort, NullCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityService(Generic[T]):
    entity_label: ClassVar[str] = "record"
    cache_tag: ClassVar[str] = ""
    search_fields: ClassVar[List[str]] = []
    default_sort: ClassVar[Dict[str, int]] = {"created_at": -1}

    def __init__(self, repository: Repository[T], cache: Optional[CachePort] = None):
        self.repository = repository
        self.cache = cache or NullCache()

    def get_by_public_id(self, public_id: str, *, populate: Optional[List[str]] = None) -> T:
        options = QueryOptions(populate=populate) if populate else None
        record = self.repository.get_detail({"public_id": public_id}, options)
        if record is None:
            raise NotFoundError(
                f"{self.entity_label.capitalize()} with public id {public_id} not found",
                details={"public_id": public_id},
            )
        return record

    def list(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        options: Optional[PaginationOptions] = None,
    ) -> PaginatedResult[T]:
        options = options or PaginationOptions()
        defaults: Dict[str, Any] = {}
        if not options.sort:
            defaults["sort"] = dict(self.default_sort)
        if options.search and not options.search_fields:
            defaults["search_fields"] = list(self.search_fields)
        if defaults:
            options = options.model_copy(update=defaults)
        return self.repository.find_with_pagination(filter, options)

    def _ensure_unique(self, values: Mapping[str, Optional[str]], *, exclude_id: Optional[InternalKey] = None) -> None:
        """Raise ``ConflictError`` when another record already uses one of ``values`` (case-insensitive)."""
        for field, value in values.items():
            if value is None:
                continue
            filter: Dict[str, Any] = {field: IEquals(value)}
            if exclude_id is not None:
                filter["id"] = Not(exclude_id)
            if self.repository.exists(filter):
                raise ConflictError(
                    f"{self.entity_label.capitalize()} with {field} '{value}' already exists",
                    details={"field": field, "value": value},
                )

    def _invalidate(self, *tags: str) -> None:
        for tag in (self.cache_tag, *tags):
            if tag:
                self.cache.invalidate_tag(tag)
