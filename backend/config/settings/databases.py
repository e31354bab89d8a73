"""
Database Configuration Module

PostgreSQL settings per environment. Importable without Django so it can
be tested on its own.

Usage:
    from config.settings.databases import get_database_config

    DATABASES = {'default': get_database_config('development')}
"""

import os
from pathlib import Path

# Base directory (backend root)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENTS = ['test', 'development', 'staging', 'production']

REQUIRED_VARS = ['DB_NAME', 'DB_USER', 'DB_PASSWORD', 'DB_HOST']

COMMON_DB_SETTINGS = {
    'ENGINE': 'django.db.backends.postgresql',
    'CONN_MAX_AGE': 60,
    'ATOMIC_REQUESTS': True,
    'OPTIONS': {
        'connect_timeout': 10,
        'application_name': 'prompt-studio',
    },
}


def get_database_config(environment: str) -> dict:
    """
    Get database configuration for an environment.

    Args:
        environment: One of 'test', 'development', 'staging', 'production'

    Returns:
        Django DATABASES entry

    Raises:
        ValueError: If the environment is unknown or, for staging and
            production, credentials are missing
    """
    if environment == 'test':
        return _local_config(
            name='test_prompts',
            user='postgres',
            password='postgres',
            port=os.getenv('DB_PORT', '5433'),
            extra={'TEST': {'NAME': 'test_prompts'}},
        )
    if environment == 'development':
        return _local_config(
            name=os.getenv('DB_NAME', 'prompts_dev'),
            user=os.getenv('DB_USER', 'prompts_user'),
            password=os.getenv('DB_PASSWORD', 'dev_password_123'),
            port=os.getenv('DB_PORT', '5432'),
        )
    if environment == 'staging':
        return _managed_config('staging', conn_max_age=300, ssl={'sslmode': 'require'})
    if environment == 'production':
        return _managed_config(
            'production',
            conn_max_age=600,
            ssl={
                'sslmode': 'verify-full',
                'sslrootcert': str(BASE_DIR / 'certs' / 'db-ca-bundle.pem'),
            },
        )

    raise ValueError(
        f"Invalid environment '{environment}'. "
        f"Must be one of: {', '.join(ENVIRONMENTS)}"
    )


def _local_config(name, user, password, port, extra=None) -> dict:
    config = {
        **COMMON_DB_SETTINGS,
        'NAME': name,
        'USER': user,
        'PASSWORD': password,
        'HOST': os.getenv('DB_HOST', 'localhost'),
        'PORT': port,
        'OPTIONS': {**COMMON_DB_SETTINGS['OPTIONS'], 'sslmode': 'disable'},
    }
    config.update(extra or {})
    return config


def _managed_config(environment: str, conn_max_age: int, ssl: dict) -> dict:
    missing_vars = [var for var in REQUIRED_VARS if not os.getenv(var)]
    if missing_vars:
        raise ValueError(
            f"Missing required environment variables for {environment}: "
            f"{', '.join(missing_vars)}"
        )

    return {
        **COMMON_DB_SETTINGS,
        'NAME': os.getenv('DB_NAME'),
        'USER': os.getenv('DB_USER'),
        'PASSWORD': os.getenv('DB_PASSWORD'),
        'HOST': os.getenv('DB_HOST'),
        'PORT': os.getenv('DB_PORT', '5432'),
        'CONN_MAX_AGE': conn_max_age,
        'OPTIONS': {**COMMON_DB_SETTINGS['OPTIONS'], **ssl},
    }


def get_all_environments() -> list:
    """Get list of supported environment names."""
    return list(ENVIRONMENTS)


def validate_environment(environment: str) -> bool:
    """Check if environment name is valid."""
    return environment in ENVIRONMENTS
