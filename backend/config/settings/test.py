# config/settings/test.py
"""
Test environment settings.

This file is used exclusively for running tests.
"""

from .base import *

# Force test environment (read by apps.infrastructure.config as well)
ENVIRONMENT = "test"
os.environ["ENVIRONMENT"] = "test"

# Load .env.test explicitly
env_test_path = BASE_DIR / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=False)

# Test database configuration - PostgreSQL only when explicitly requested
if os.environ.get("DB_HOST"):
    DATABASES = {"default": get_database_config("test")}
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "prompt-resolution-test",
    }
}

# Speed up password hashing in tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]
