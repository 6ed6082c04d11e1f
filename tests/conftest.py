import mongomock
import pytest

from admin_core.container import build_container
from admin_core.db.database import create_engine_for_url, create_schema
from admin_core.db.registry import build_document_bindings, build_relational_bindings
from admin_core.utils.cache import InMemoryTagCache
from admin_core.utils.settings import DatabaseType, Settings, refresh_settings_cache
from tests.factories import language_payload

BACKENDS = ["postgres", "mongodb"]


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch):
    """Keep tests independent of the developer's shell environment."""
    for name in ("DATABASE_TYPE", "DATABASE_URL", "MONGODB_URI", "MONGODB_TRANSACTIONS", "LOG_LEVEL", "CACHE_BACKEND", "REDIS_URL"):
        monkeypatch.delenv(name, raising=False)
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest.fixture
def engine():
    # In-memory sqlite stands in for PostgreSQL; StaticPool keeps one shared connection
    engine = create_engine_for_url("sqlite:///:memory:")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def mongo_database():
    client = mongomock.MongoClient()
    yield client["equity_admin_test"]
    client.close()


@pytest.fixture(params=BACKENDS)
def backend(request):
    return request.param


@pytest.fixture
def bindings(backend, request):
    if backend == "postgres":
        return build_relational_bindings(request.getfixturevalue("engine"))
    return build_document_bindings(request.getfixturevalue("mongo_database"))


@pytest.fixture
def cache():
    return InMemoryTagCache(default_ttl=60)


@pytest.fixture
def container(backend, request, cache):
    if backend == "postgres":
        settings = Settings(database_type=DatabaseType.POSTGRES, database_url="sqlite:///:memory:")
        return build_container(settings, engine=request.getfixturevalue("engine"), cache=cache)
    settings = Settings(database_type=DatabaseType.MONGODB, mongodb_uri="mongodb://localhost:27017")
    return build_container(settings, mongo_database=request.getfixturevalue("mongo_database"), cache=cache)


@pytest.fixture
def languages(container):
    """English (default), French and an inactive German."""
    english = container.languages.create(language_payload("English", "en", "en", "eng", is_default="YES"))
    french = container.languages.create(language_payload("French", "fr", "fr", "fra"))
    german = container.languages.create(language_payload("German", "de", "de", "deu", status=False))
    return {"en": english, "fr": french, "de": german}
