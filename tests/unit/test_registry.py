import pytest

from admin_core.container import build_container
from admin_core.db.registry import build_bindings
from admin_core.db.repositories.document import DocumentRepository
from admin_core.db.repositories.relational import RelationalRepository
from admin_core.errors import BackendError
from admin_core.utils.cache import InMemoryTagCache
from admin_core.utils.settings import DatabaseType, Settings

_ENTITIES = (
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


def test_postgres_binds_relational_adapters(engine):
    bindings = build_bindings(Settings(database_type=DatabaseType.POSTGRES), engine=engine)

    assert bindings.database_type is DatabaseType.POSTGRES
    for name in _ENTITIES:
        assert isinstance(getattr(bindings, name), RelationalRepository)


def test_mongodb_binds_document_adapters(mongo_database):
    settings = Settings(database_type=DatabaseType.MONGODB, mongodb_uri="mongodb://localhost")
    bindings = build_bindings(settings, mongo_database=mongo_database)

    assert bindings.database_type is DatabaseType.MONGODB
    for name in _ENTITIES:
        assert isinstance(getattr(bindings, name), DocumentRepository)
    assert bindings.languages.entity_name == "languages"


def test_postgres_without_url_fails_at_startup():
    with pytest.raises(ValueError, match="DATABASE_URL"):
        build_bindings(Settings(database_type=DatabaseType.POSTGRES))


def test_mongodb_without_uri_fails_at_startup():
    with pytest.raises(ValueError, match="MONGODB_URI"):
        build_bindings(Settings(database_type=DatabaseType.MONGODB))


def test_bindings_are_immutable(engine):
    bindings = build_bindings(Settings(database_type=DatabaseType.POSTGRES), engine=engine)
    with pytest.raises(AttributeError):
        bindings.languages = None


def test_container_shares_bindings_and_cache(engine):
    cache = InMemoryTagCache()
    container = build_container(Settings(database_type=DatabaseType.POSTGRES), engine=engine, cache=cache)

    assert container.languages.repository is container.bindings.languages
    assert container.manage_dropdowns.resolver is container.resolver
    assert container.currencies.cache is cache


def test_container_reads_settings_from_environment(monkeypatch, engine):
    monkeypatch.setenv("DATABASE_TYPE", "postgres")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")

    container = build_container(engine=engine)

    assert container.settings.database_type is DatabaseType.POSTGRES
    assert container.settings.database_url == "sqlite:///:memory:"


def test_mongodb_binding_creates_unique_indexes(mongo_database):
    settings = Settings(database_type=DatabaseType.MONGODB, mongodb_uri="mongodb://localhost")
    build_bindings(settings, mongo_database=mongo_database)

    for name in _ENTITIES:
        assert mongo_database[name].index_information()["public_id_1"]["unique"] is True
    assert mongo_database["languages"].index_information()["folder_1"]["unique"] is True
    assert mongo_database["email_templates"].index_information()["task_1_language_id_1"]["unique"] is True
    assert mongo_database["meta_settings"].index_information()["language_id_1"]["unique"] is True
    assert mongo_database["sliders"].index_information()["unique_code_1_language_id_1"]["unique"] is True


def test_mongodb_indexes_reject_a_second_meta_setting_per_language(mongo_database):
    settings = Settings(database_type=DatabaseType.MONGODB, mongodb_uri="mongodb://localhost")
    bindings = build_bindings(settings, mongo_database=mongo_database)
    language = bindings.languages.insert({"name": "English", "folder": "en", "iso2": "EN", "iso3": "ENG"})
    content = {
        "language_id": language.id,
        "site_name": "Equity",
        "meta_title": "Invest",
        "meta_description": "Crowdfunding",
        "meta_keyword": "equity",
        "og_title": "Equity",
        "og_description": "Invest together",
        "og_image": "https://cdn.example.com/og.png",
    }
    bindings.meta_settings.insert(content)

    with pytest.raises(BackendError):
        bindings.meta_settings.insert(content)

