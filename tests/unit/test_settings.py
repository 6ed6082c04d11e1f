import pytest

from admin_core.utils.settings import DatabaseType, get_settings, load_settings, refresh_settings_cache


def test_postgres_is_the_default_backend():
    settings = load_settings({"DATABASE_URL": "postgresql://u:p@db:5432/equity"})
    assert settings.database_type is DatabaseType.POSTGRES
    assert settings.database_url == "postgresql://u:p@db:5432/equity"
    assert settings.mongodb_uri is None


def test_database_url_is_composed_from_postgres_parts():
    settings = load_settings({
        "DATABASE_TYPE": "postgres",
        "POSTGRES_USER": "admin",
        "POSTGRES_PASSWORD": "secret",
        "POSTGRES_HOST": "db",
        "POSTGRES_PORT": "5433",
        "POSTGRES_DB": "equity",
    })
    assert settings.database_url == "postgresql://admin:secret@db:5433/equity"


def test_postgres_without_connection_details_fails():
    with pytest.raises(ValueError, match="DATABASE_URL is required"):
        load_settings({"DATABASE_TYPE": "postgres", "POSTGRES_USER": "admin"})


@pytest.mark.parametrize("raw", ["mysql", "Mongo", "sqlite"])
def test_unknown_database_type_is_rejected(raw):
    with pytest.raises(ValueError, match="Invalid DATABASE_TYPE"):
        load_settings({"DATABASE_TYPE": raw, "DATABASE_URL": "postgresql://x"})


def test_database_type_is_case_insensitive():
    settings = load_settings({"DATABASE_TYPE": " MongoDB ", "MONGODB_URI": "mongodb://mongo:27017"})
    assert settings.database_type is DatabaseType.MONGODB


def test_mongodb_requires_uri():
    with pytest.raises(ValueError, match="MONGODB_URI"):
        load_settings({"DATABASE_TYPE": "mongodb"})


def test_mongodb_options():
    settings = load_settings({
        "DATABASE_TYPE": "mongodb",
        "MONGODB_URI": "mongodb://mongo:27017",
        "MONGODB_DATABASE": "admin_panel",
        "MONGODB_TRANSACTIONS": "yes",
        "CACHE_TTL_SECONDS": "not-a-number",
        "LOG_LEVEL": "debug",
    })
    assert settings.mongodb_database == "admin_panel"
    assert settings.mongodb_transactions is True
    assert settings.cache_ttl_seconds == 300
    assert settings.log_level == "DEBUG"


def test_get_settings_is_cached_until_refreshed(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://first")
    assert get_settings().database_url == "postgresql://first"

    monkeypatch.setenv("DATABASE_URL", "postgresql://second")
    assert get_settings().database_url == "postgresql://first"

    refresh_settings_cache()
    assert get_settings().database_url == "postgresql://second"


def test_cache_backend_defaults_to_memory():
    settings = load_settings({"DATABASE_URL": "sqlite://"})
    assert settings.cache_backend == "memory"
    assert settings.redis_url is None


def test_redis_cache_requires_url():
    with pytest.raises(ValueError, match="REDIS_URL"):
        load_settings({"DATABASE_URL": "sqlite://", "CACHE_BACKEND": "redis"})

    settings = load_settings({"DATABASE_URL": "sqlite://", "CACHE_BACKEND": "Redis", "REDIS_URL": "redis://cache:6379/0"})
    assert settings.cache_backend == "redis"
    assert settings.redis_url == "redis://cache:6379/0"


def test_unknown_cache_backend_is_rejected():
    with pytest.raises(ValueError, match="CACHE_BACKEND"):
        load_settings({"DATABASE_URL": "sqlite://", "CACHE_BACKEND": "memcached"})
