"""
Backend selection and the per-entity binding table.

``build_bindings`` runs once at startup: it reads the configured database
type, constructs one adapter per entity, and returns them as a frozen
``RepositoryBindings``. Nothing downstream branches on the backend again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pymongo.database import Database
from sqlalchemy.engine import Engine

from admin_core.db import entities, schemas
from admin_core.db.database import create_engine_from_settings, create_session_factory
from admin_core.db.mongo import create_mongo_client, ensure_indexes, get_mongo_database
from admin_core.db.repositories.base import Repository
from admin_core.db.repositories.document import DocumentRepository
from admin_core.db.repositories.relational import RelationalRepository
from admin_core.utils.settings import DatabaseType, Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryBindings:
    database_type: DatabaseType
    languages: Repository[schemas.Language]
    currencies: Repository[schemas.Currency]
    countries: Repository[schemas.Country]
    manage_dropdowns: Repository[schemas.ManageDropdown]
    email_templates: Repository[schemas.EmailTemplate]
    meta_settings: Repository[schemas.MetaSetting]
    sliders: Repository[schemas.Slider]
    campaign_faqs: Repository[schemas.CampaignFaq]
    lead_investors: Repository[schemas.LeadInvestor]


def _bind_all(database_type: DatabaseType, build: Callable[[entities.EntityDescriptor], Repository]) -> RepositoryBindings:
    return RepositoryBindings(
        database_type=database_type,
        languages=build(entities.LANGUAGES),
        currencies=build(entities.CURRENCIES),
        countries=build(entities.COUNTRIES),
        manage_dropdowns=build(entities.MANAGE_DROPDOWNS),
        email_templates=build(entities.EMAIL_TEMPLATES),
        meta_settings=build(entities.META_SETTINGS),
        sliders=build(entities.SLIDERS),
        campaign_faqs=build(entities.CAMPAIGN_FAQS),
        lead_investors=build(entities.LEAD_INVESTORS),
    )


def build_relational_bindings(engine: Engine) -> RepositoryBindings:
    session_factory = create_session_factory(engine)
    return _bind_all(
        DatabaseType.POSTGRES,
        lambda descriptor: RelationalRepository(session_factory, descriptor.relational),
    )


def build_document_bindings(database: Database, *, use_transactions: bool = False) -> RepositoryBindings:
    return _bind_all(
        DatabaseType.MONGODB,
        lambda descriptor: DocumentRepository(database, descriptor.document, use_transactions=use_transactions),
    )


def build_bindings(
    settings: Settings,
    *,
    engine: Optional[Engine] = None,
    mongo_database: Optional[Database] = None,
) -> RepositoryBindings:
    """Bind every entity to the adapter for ``settings.database_type``.

    ``engine``/``mongo_database`` override the connections that would
    otherwise be created from settings. Missing configuration raises
    ``ValueError`` here rather than on first use.
    """
    if settings.database_type is DatabaseType.POSTGRES:
        engine = engine if engine is not None else create_engine_from_settings(settings)
        logger.info(f"Binding repositories to relational backend ({engine.dialect.name})")
        return build_relational_bindings(engine)

    if settings.database_type is DatabaseType.MONGODB:
        if mongo_database is None:
            mongo_database = get_mongo_database(create_mongo_client(settings), settings)
        ensure_indexes(mongo_database)
        logger.info(f"Binding repositories to document backend ({mongo_database.name})")
        return build_document_bindings(mongo_database, use_transactions=settings.mongodb_transactions)

    raise ValueError(f"Invalid DATABASE_TYPE: {settings.database_type}")
