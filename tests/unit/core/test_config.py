"""Unit tests for settings."""

from core.config import Settings


class TestSettings:
    def test_empty_database_url_disables_durable_store(self):
        settings = Settings(database_url="")

        assert settings.durable_store_enabled is False

    def test_postgres_url_uses_asyncpg(self):
        settings = Settings(database_url="postgresql://user:pw@db:5432/surf")

        assert settings.durable_store_enabled is True
        assert settings.async_database_url == "postgresql+asyncpg://user:pw@db:5432/surf"

    def test_short_postgres_scheme(self):
        settings = Settings(database_url="postgres://db/surf")

        assert settings.async_database_url == "postgresql+asyncpg://db/surf"

    def test_explicit_driver_is_kept(self):
        settings = Settings(database_url="sqlite+aiosqlite:///:memory:")

        assert settings.async_database_url == "sqlite+aiosqlite:///:memory:"

    def test_defaults(self):
        settings = Settings(database_url="")

        assert settings.profile_cache_ttl_seconds == 300.0
        assert settings.durable_store_timeout_seconds == 5.0
        assert settings.recommendation_limit == 3

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
