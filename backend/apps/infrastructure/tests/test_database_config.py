"""
Tests for database configuration
"""

from io import StringIO

import pytest
from django.conf import settings
from django.core.management import call_command
from django.db import connection

from config.settings.databases import (
    get_all_environments,
    get_database_config,
    validate_environment,
)


@pytest.mark.django_db
class TestDatabaseConfiguration:
    """Test database is configured correctly for tests"""

    def test_database_connection(self):
        """Verify test database is accessible"""
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            result = cursor.fetchone()
            assert result[0] == 1

    def test_environment_is_test(self):
        """Verify ENVIRONMENT is set to 'test'"""
        assert (
            settings.ENVIRONMENT == "test"
        ), f"Expected test, got {settings.ENVIRONMENT}"

    def test_prompt_tables_migrated(self):
        """Verify the prompt tables exist"""
        tables = connection.introspection.table_names()

        assert "prompts_aiprompt" in tables
        assert "prompts_userinstruction" in tables

    def test_models_match_migrations(self):
        """No model change is missing a migration"""
        out = StringIO()

        call_command("makemigrations", "prompts", "--check", "--dry-run", stdout=out)

        assert "No changes detected" in out.getvalue()


class TestDatabaseConfigModule:
    """Test config.settings.databases helpers"""

    def test_development_config(self, monkeypatch):
        monkeypatch.delenv("DB_NAME", raising=False)
        monkeypatch.delenv("DB_PORT", raising=False)

        config = get_database_config("development")

        assert config["ENGINE"] == "django.db.backends.postgresql"
        assert config["NAME"] == "prompts_dev"
        assert config["PORT"] == "5432"
        assert config["OPTIONS"]["connect_timeout"] == 10

    def test_invalid_environment(self):
        with pytest.raises(ValueError, match="Invalid environment"):
            get_database_config("qa")

    def test_production_requires_credentials(self, monkeypatch):
        for var in ["DB_NAME", "DB_USER", "DB_PASSWORD", "DB_HOST"]:
            monkeypatch.delenv(var, raising=False)

        with pytest.raises(ValueError, match="Missing required environment variables"):
            get_database_config("production")

    def test_production_config(self, monkeypatch):
        monkeypatch.setenv("DB_NAME", "prompts")
        monkeypatch.setenv("DB_USER", "app")
        monkeypatch.setenv("DB_PASSWORD", "secret")
        monkeypatch.setenv("DB_HOST", "db.internal")

        config = get_database_config("production")

        assert config["HOST"] == "db.internal"
        assert config["OPTIONS"]["sslmode"] == "verify-full"
        assert config["CONN_MAX_AGE"] == 600

    def test_environment_helpers(self):
        assert get_all_environments() == ["test", "development", "staging", "production"]
        assert validate_environment("staging")
        assert not validate_environment("qa")

    def test_staging_config(self, monkeypatch):
        monkeypatch.setenv("DB_NAME", "prompts")
        monkeypatch.setenv("DB_USER", "app")
        monkeypatch.setenv("DB_PASSWORD", "secret")
        monkeypatch.setenv("DB_HOST", "db.staging")

        config = get_database_config("staging")

        assert config["OPTIONS"]["sslmode"] == "require"
        assert config["OPTIONS"]["connect_timeout"] == 10
        assert config["CONN_MAX_AGE"] == 300
