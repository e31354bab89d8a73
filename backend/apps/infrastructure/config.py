# apps/infrastructure/config.py

"""
Configuration Management

Environment-specific configurations for different deployment contexts.
"""

import os
from typing import Any, Dict, List


def get_environment() -> str:
    """
    Get current environment from environment variable

    Returns:
        Environment name: 'test', 'development', 'staging', or 'production'
    """
    return os.getenv("ENVIRONMENT", "development")


def get_config() -> Dict[str, Any]:
    """
    Get configuration for current environment

    Returns:
        Configuration dictionary for active environment
    """
    env = get_environment()

    configs = {
        "test": TEST_CONFIG,
        "development": DEVELOPMENT_CONFIG,
        "staging": STAGING_CONFIG,
        "production": PRODUCTION_CONFIG,
    }

    config = dict(configs.get(env, DEVELOPMENT_CONFIG))
    config["environment"] = env  # Add environment name to config

    return config


def _allowed_models() -> List[str]:
    raw = os.getenv("PROMPT_ALLOWED_MODELS", "gpt-4o-mini,gpt-4o,gpt-4")
    return [m.strip() for m in raw.split(",") if m.strip()]


# ============================================================
# TEST CONFIGURATION
# ============================================================

TEST_CONFIG = {
    "repositories": {"type": "django"},
    "resolution_cache": {"enabled": False, "ttl": 0},
    "prompts": {
        "allowed_models": ["gpt-4o-mini", "gpt-4o", "gpt-4"],
        "temperature_min": 0.0,
        "temperature_max": 2.0,
    },
}

# ============================================================
# DEVELOPMENT CONFIGURATION
# ============================================================

DEVELOPMENT_CONFIG = {
    "repositories": {"type": "django"},
    "resolution_cache": {"enabled": False, "ttl": 60},
    "prompts": {
        "allowed_models": _allowed_models(),
        "temperature_min": 0.0,
        "temperature_max": 2.0,
    },
}

# ============================================================
# STAGING CONFIGURATION
# ============================================================

STAGING_CONFIG = {
    "repositories": {"type": "django"},
    "resolution_cache": {"enabled": True, "ttl": 300},
    "prompts": {
        "allowed_models": _allowed_models(),
        "temperature_min": 0.0,
        "temperature_max": 2.0,
    },
}

# ============================================================
# PRODUCTION CONFIGURATION
# ============================================================

PRODUCTION_CONFIG = {
    "repositories": {"type": "django"},
    "resolution_cache": {"enabled": True, "ttl": 300},
    "prompts": {
        "allowed_models": _allowed_models(),
        "temperature_min": 0.0,
        "temperature_max": 2.0,
    },
}


# ============================================================
# CONFIGURATION HELPERS
# ============================================================


def get_prompts_config() -> Dict[str, Any]:
    """Get prompt validation configuration for current environment"""
    return get_config()["prompts"]


def get_cache_config() -> Dict[str, Any]:
    """Get resolution cache configuration for current environment"""
    return get_config()["resolution_cache"]


def is_production() -> bool:
    """Check if running in production environment"""
    return get_environment() == "production"


def is_test() -> bool:
    """Check if running in test environment"""
    return get_environment() == "test"


def is_development() -> bool:
    """Check if running in development environment"""
    return get_environment() == "development"


def is_staging() -> bool:
    """Check if running in staging environment"""
    return get_environment() == "staging"
