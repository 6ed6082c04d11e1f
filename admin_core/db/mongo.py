"""
MongoDB client and index management for the document backend.
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from admin_core.utils.settings import Settings

logger = logging.getLogger(__name__)

_PUBLIC_ID_COLLECTIONS = (
    "languages",
    "currencies",
    "countries",
    "manage_dropdowns",
    "email_templates",
    "meta_settings",
    "sliders",
    "campaign_faqs",
    "lead_investors",
)


def create_mongo_client(settings: Settings) -> MongoClient:
    if not settings.mongodb_uri:
        raise ValueError("MONGODB_URI is not configured")
    client = MongoClient(settings.mongodb_uri, tz_aware=True)
    logger.info(f"MongoDB client created for database {settings.mongodb_database}")
    return client


def get_mongo_database(client: MongoClient, settings: Settings) -> Database:
    return client[settings.mongodb_database]


def ensure_indexes(database: Database) -> None:
    """Create the unique indexes that back the per-entity invariants."""
    for name in _PUBLIC_ID_COLLECTIONS:
        database[name].create_index([("public_id", ASCENDING)], unique=True)
    database["languages"].create_index([("name", ASCENDING)], unique=True)
    database["languages"].create_index([("folder", ASCENDING)], unique=True)
    database["currencies"].create_index([("code", ASCENDING)], unique=True)
    database["email_templates"].create_index(
        [("task", ASCENDING), ("language_id", ASCENDING)], unique=True
    )
    database["meta_settings"].create_index([("language_id", ASCENDING)], unique=True)
    database["sliders"].create_index(
        [("unique_code", ASCENDING), ("language_id", ASCENDING)], unique=True
    )
    database["sliders"].create_index([("language_id", ASCENDING), ("status", ASCENDING)])
    database["manage_dropdowns"].create_index([("dropdown_type", ASCENDING), ("language_id", ASCENDING)])
    database["manage_dropdowns"].create_index([("unique_code", ASCENDING)])
    database["campaign_faqs"].create_index([("equity_id", ASCENDING)])
    database["lead_investors"].create_index([("equity_id", ASCENDING)])
