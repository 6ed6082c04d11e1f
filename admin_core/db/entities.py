"""
Per-entity metadata for both backends.

Each entity is described once here: its relational table (ORM model and
projection) and its document collection (fields and mapping pair), sharing
the same filter conversion, references and delete policy. The backend
selector turns these descriptions into adapter instances at startup.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from admin_core.db import models, schemas
from admin_core.db.repositories.document import DocumentCollection
from admin_core.db.repositories.filters import FilterConverter, identity_filter, text_filter
from admin_core.db.repositories.mapping import Reference
from admin_core.db.repositories.relational import RelationalTable

T = TypeVar("T")

LANGUAGE_REFERENCE = Reference(path="language", field="language_id", target="language")
LANGUAGE_DOCUMENT_REFERENCE = Reference(path="language", field="language_id", target="languages")


@dataclass(frozen=True)
class EntityDescriptor(Generic[T]):
    relational: RelationalTable[T]
    document: DocumentCollection[T]


def _fields(model) -> frozenset:
    return frozenset(c.key for c in model.__table__.columns)


def _defaults(model) -> dict:
    """Scalar column defaults (status, use_count, is_default, ...) keyed by field."""
    return {
        c.key: c.default.arg
        for c in model.__table__.columns
        if c.default is not None and c.default.is_scalar
    }


def _describe(
    model,
    entity,
    *,
    collection: str,
    convert_filter: FilterConverter = identity_filter,
    language_scoped: bool = False,
    soft_delete_field: Optional[str] = None,
    projection: Optional[Sequence[str]] = None,
) -> EntityDescriptor:
    relational = RelationalTable(
        model=model,
        entity=entity,
        projection=projection,
        convert_filter=convert_filter,
        references=(LANGUAGE_REFERENCE,) if language_scoped else (),
        soft_delete_field=soft_delete_field,
    )
    document = DocumentCollection(
        name=collection,
        entity=entity,
        fields=_fields(model),
        defaults=_defaults(model),
        convert_filter=convert_filter,
        references=(LANGUAGE_DOCUMENT_REFERENCE,) if language_scoped else (),
        soft_delete_field=soft_delete_field,
    )
    return EntityDescriptor(relational=relational, document=document)


LANGUAGES = _describe(
    models.Language, schemas.Language,
    collection="languages",
    soft_delete_field="status",
)

CURRENCIES = _describe(
    models.Currency, schemas.Currency,
    collection="currencies",
)

COUNTRIES = _describe(
    models.Country, schemas.Country,
    collection="countries",
)

MANAGE_DROPDOWNS = _describe(
    models.ManageDropdown, schemas.ManageDropdown,
    collection="manage_dropdowns",
    convert_filter=text_filter(["name"]),
    language_scoped=True,
    soft_delete_field="status",
)

EMAIL_TEMPLATES = _describe(
    models.EmailTemplate, schemas.EmailTemplate,
    collection="email_templates",
    convert_filter=text_filter(["sender_email", "subject"]),
    language_scoped=True,
)

META_SETTINGS = _describe(
    models.MetaSetting, schemas.MetaSetting,
    collection="meta_settings",
    convert_filter=text_filter(["site_name", "meta_title"]),
    language_scoped=True,
)

SLIDERS = _describe(
    models.Slider, schemas.Slider,
    collection="sliders",
    convert_filter=text_filter(["title"]),
    language_scoped=True,
)

CAMPAIGN_FAQS = _describe(
    models.CampaignFaq, schemas.CampaignFaq,
    collection="campaign_faqs",
)

LEAD_INVESTORS = _describe(
    models.LeadInvestor, schemas.LeadInvestor,
    collection="lead_investors",
)
