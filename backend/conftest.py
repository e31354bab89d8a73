# backend/conftest.py

"""
Pytest configuration and fixtures.
"""
import pytest
from django.core.cache import cache

from apps.domain.models import BasePrompt


@pytest.fixture(scope="session")
def django_db_setup(django_db_setup, django_db_blocker):
    """Verify test database configuration."""
    from django.conf import settings

    assert settings.ENVIRONMENT == "test"
    assert settings.DATABASES["default"]["ENGINE"] in [
        "django.db.backends.sqlite3",
        "django.db.backends.postgresql",
    ]


@pytest.fixture(autouse=True)
def enable_db_access_for_all_tests(db):
    """Automatically enable database access for all tests."""
    pass


@pytest.fixture(autouse=True)
def clear_cache():
    """Start every test with an empty Django cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def summarize_prompt():
    """The canonical base prompt used across tests."""
    return BasePrompt(
        id="p1",
        description="Summarize text",
        content="Summarize: {text}",
        model="gpt-4",
        temperature=0.7,
    )
