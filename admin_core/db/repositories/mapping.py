"""
Entity metadata shared by both adapters.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from admin_core.db.schemas.common import LanguageSummary


@dataclass(frozen=True)
class Reference:
    """A foreign reference that callers may ask to populate.

    ``path`` is the name used in ``QueryOptions.populate``, ``field`` the
    attribute holding the referenced internal key, and ``target`` the ORM
    relationship name or the referenced collection name depending on the
    backend.
    """
    path: str
    field: str
    target: str


def summarize_reference(value: Any) -> Optional[LanguageSummary]:
    """Reduce a populated reference (ORM object or document) to ``{public_id, name}``.

    Returns ``None`` when the value does not carry a public identifier, in
    which case the caller keeps the raw reference.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        public_id, name = value.get("public_id"), value.get("name")
    else:
        public_id, name = getattr(value, "public_id", None), getattr(value, "name", None)
    if not public_id:
        return None
    return LanguageSummary(public_id=str(public_id), name=name or "")


PROTECTED_FIELDS = frozenset({"id", "_id", "public_id", "created_at", "updated_at"})


def writable(data: dict[str, Any] | Any, allowed: frozenset[str], entity_name: str) -> dict[str, Any]:
    """Drop identity/timestamp fields and reject fields the entity does not have."""
    payload = {k: v for k, v in dict(data).items() if k not in PROTECTED_FIELDS}
    unknown = set(payload) - allowed
    if unknown:
        raise ValueError(f"Unknown fields for {entity_name}: {', '.join(sorted(unknown))}")
    return payload
