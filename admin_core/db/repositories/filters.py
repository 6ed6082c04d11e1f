"""
Backend-neutral filter vocabulary.

A filter is a ``dict`` of field name to criterion. A plain value means
equality, a list/tuple/set means membership, and the operator classes below
cover the remaining cases both backends can express. ``AnyOf`` entries are
stored under any key starting with ``$or``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

Filter = dict[str, Any]
FilterConverter = Callable[[Mapping[str, Any]], Filter]

OR_KEY = "$or"


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match."""
    value: str


@dataclass(frozen=True)
class IEquals:
    """Case-insensitive equality."""
    value: str


@dataclass(frozen=True)
class Not:
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """Match when at least one of the sub-filters matches."""
    filters: Sequence[Mapping[str, Any]]


def is_membership(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


def identity_filter(filter: Optional[Mapping[str, Any]]) -> Filter:
    return dict(filter or {})


def text_filter(fields: Iterable[str]) -> FilterConverter:
    """Build a converter that turns plain strings on ``fields`` into ``Contains``."""
    text_fields = frozenset(fields)

    def convert(filter: Optional[Mapping[str, Any]]) -> Filter:
        converted: Filter = {}
        for key, value in (filter or {}).items():
            if key in text_fields and isinstance(value, str):
                converted[key] = Contains(value)
            else:
                converted[key] = value
        return converted

    return convert


def with_search(filter: Optional[Mapping[str, Any]], search: Optional[str], fields: Sequence[str]) -> Filter:
    """Return ``filter`` AND (any of ``fields`` contains ``search``)."""
    merged = dict(filter or {})
    term = (search or "").strip()
    if not term or not fields:
        return merged
    key = OR_KEY
    while key in merged:
        key += "_"
    merged[key] = AnyOf([{field: Contains(term)} for field in fields])
    return merged
