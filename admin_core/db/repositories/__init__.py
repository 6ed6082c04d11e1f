"""
Generic repository contract and its two backend adapters.

Domain services depend on ``Repository[T]`` only; the relational and
document adapters are selected and bound in ``admin_core.db.registry``.
"""

from .base import Repository
from .query import (
    QueryOptions,
    PaginationOptions,
    PaginationMeta,
    PaginatedResult,
    BulkUpdateResult,
    BulkDeleteResult,
)
from .filters import AnyOf, Contains, IEquals, Not

__all__ = [
    "Repository",
    "QueryOptions",
    "PaginationOptions",
    "PaginationMeta",
    "PaginatedResult",
    "BulkUpdateResult",
    "BulkDeleteResult",
    "AnyOf",
    "Contains",
    "IEquals",
    "Not",
]
