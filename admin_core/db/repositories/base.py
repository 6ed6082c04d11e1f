"""
Generic repository contract.

Every entity is read and written through a ``Repository[T]`` regardless of
which backend adapter is bound behind it. Adapters implement the abstract
operations; ``exists``, ``find_with_pagination`` and ``set_exclusive`` are
expressed here in terms of them and may be overridden with cheaper or
stronger store-native versions.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Generic, List, Mapping, Optional, TypeVar

from admin_core.errors import BackendError
from admin_core.db.types import InternalKey
from .filters import Filter, with_search
from .query import (
    BulkDeleteResult,
    BulkUpdateResult,
    PaginatedResult,
    PaginationMeta,
    PaginationOptions,
    QueryOptions,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Operations every entity repository must provide."""

    # Whether the items and count reads of a page may run on separate threads.
    parallel_reads: bool = True

    @property
    @abstractmethod
    def entity_name(self) -> str:
        """Table or collection backing this repository (for logs and errors)."""

    @abstractmethod
    def get_all(self, filter: Optional[Mapping[str, Any]] = None, options: Optional[QueryOptions] = None) -> List[T]:
        """Return all entities matching ``filter``, honoring skip/limit/sort/select/populate."""

    @abstractmethod
    def get_detail_by_id(self, id: InternalKey, options: Optional[QueryOptions] = None) -> Optional[T]:
        """Return the entity with internal key ``id`` or ``None``."""

    @abstractmethod
    def get_detail(self, filter: Mapping[str, Any], options: Optional[QueryOptions] = None) -> Optional[T]:
        """Return the first entity matching ``filter`` or ``None``."""

    @abstractmethod
    def insert(self, data: Mapping[str, Any]) -> T:
        """Create an entity. The repository assigns the internal key and public id."""

    @abstractmethod
    def update_by_id(self, id: InternalKey, data: Mapping[str, Any]) -> T:
        """Partially update one entity; raises ``NotFoundError`` if ``id`` is unknown."""

    @abstractmethod
    def update_many(self, filter: Mapping[str, Any], data: Mapping[str, Any]) -> BulkUpdateResult[T]:
        """Update every match of ``filter``.

        ``count`` is the number of rows matched at write time. ``updated`` is
        re-read with the same filter after the write, so when ``data`` touches
        a filtered field it reflects the post-update state rather than the
        originally matched set.
        """

    @abstractmethod
    def delete_by_id(self, id: InternalKey) -> bool:
        """Delete one entity; failures are reported as ``False``, never raised."""

    @abstractmethod
    def delete_many(self, filter: Mapping[str, Any]) -> BulkDeleteResult[T]:
        """Delete every match of ``filter`` and return the pre-delete snapshot."""

    @abstractmethod
    def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        """Count entities matching ``filter``."""

    @abstractmethod
    def increment(self, id: InternalKey, field: str, amount: int = 1) -> Optional[T]:
        """Atomically add ``amount`` to a numeric field; ``None`` if ``id`` is unknown."""

    @abstractmethod
    def max_value(self, field: str, filter: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        """Return the highest value of ``field`` among matches, ``None`` when empty."""

    def exists(self, filter: Mapping[str, Any]) -> bool:
        try:
            return self.get_detail(filter) is not None
        except BackendError as exc:
            logger.warning(f"Existence check on {self.entity_name} failed: {exc}")
            return False

    def search_filter(self, filter: Optional[Mapping[str, Any]], search: Optional[str], fields: List[str]) -> Filter:
        return with_search(filter, search, fields)

    def find_with_pagination(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        options: Optional[PaginationOptions] = None,
    ) -> PaginatedResult[T]:
        options = options or PaginationOptions()
        effective = self.search_filter(filter, options.search, options.search_fields)
        query = options.to_query_options()

        if self.parallel_reads:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix=f"page-{self.entity_name}") as pool:
                items_future = pool.submit(self.get_all, effective, query)
                count_future = pool.submit(self.count, effective)
                items = items_future.result()
                total_count = count_future.result()
        else:
            items = self.get_all(effective, query)
            total_count = self.count(effective)

        return PaginatedResult(
            items=items,
            pagination=PaginationMeta.build(options.page, options.limit, total_count),
        )

    def set_exclusive(self, id: InternalKey, field: str, on_value: Any, off_value: Any) -> T:
        """Give ``id`` the ``on_value`` marker and every other record ``off_value``.

        Generic fallback for adapters without a native exclusive update: two
        sequential writes, demote the current holders then promote the target.
        A reader between them can observe no holder. Both shipped adapters
        override this with a single-statement version.
        """
        self.update_many({field: on_value}, {field: off_value})
        return self.update_by_id(id, {field: on_value})
