# apps/infrastructure/container.py

"""
Dependency Injection Container

Simple factory functions for creating fully-wired services.
No magic, no framework - just explicit construction.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
import logging

from apps.domain.models import DomainException
from apps.domain.services.key_locks import KeyedLock
from apps.infrastructure.config import get_config

logger = logging.getLogger(__name__)

# Shared by every lifecycle manager in this process so that edits to the
# same (prompt_id, owner_id) from concurrent requests are serialized.
_edit_locks = KeyedLock()


# ============================================================
# ADAPTER FACTORIES
# ============================================================

def create_prompt_catalog(use_inmemory: bool = False):
    """
    Factory for the base prompt catalog

    Args:
        use_inmemory: If True, use in-memory catalog (for testing)

    Returns:
        Implementation of IPromptCatalog
    """
    if use_inmemory:
        from apps.adapters.repositories.inmemory_repos import InMemoryPromptCatalog
        return InMemoryPromptCatalog()
    else:
        from apps.adapters.repositories.django_repos import DjangoPromptCatalog
        return DjangoPromptCatalog()


def create_customization_repository(use_inmemory: bool = False):
    """
    Factory for customization repository

    Args:
        use_inmemory: If True, use in-memory repo (for testing)

    Returns:
        Implementation of ICustomizationRepository
    """
    if use_inmemory:
        from apps.adapters.repositories.inmemory_repos import InMemoryCustomizationRepository
        return InMemoryCustomizationRepository()
    else:
        from apps.adapters.repositories.django_repos import DjangoCustomizationRepository
        return DjangoCustomizationRepository()


def create_resolution_cache(config: Dict[str, Any]):
    """
    Factory for the resolution cache

    Args:
        config: Resolution cache configuration dict with 'enabled' key

    Returns:
        Implementation of IResolutionCache, or None when disabled
    """
    if not config.get('enabled', False):
        return None

    from apps.infrastructure.resolution_cache import DjangoResolutionCache
    return DjangoResolutionCache(ttl=config.get('ttl', 300))


# ============================================================
# SERVICE FACTORIES
# ============================================================

@dataclass
class PromptServices:
    """Resolver and lifecycle manager sharing one set of adapters"""
    resolver: Any
    lifecycle: Any


def create_override_resolver(catalog, customization_repo, cache=None):
    """
    Create OverrideResolver over the given adapters

    Args:
        catalog: IPromptCatalog implementation
        customization_repo: ICustomizationRepository implementation
        cache: Optional IResolutionCache

    Returns:
        OverrideResolver instance
    """
    from apps.domain.services.prompt_resolver import OverrideResolver
    return OverrideResolver(
        catalog=catalog,
        customization_repo=customization_repo,
        cache=cache
    )


def create_lifecycle_manager(
        catalog,
        customization_repo,
        prompts_config: Dict[str, Any],
        cache=None
):
    """
    Create CustomizationLifecycleManager over the given adapters

    Args:
        catalog: IPromptCatalog implementation
        customization_repo: ICustomizationRepository implementation
        prompts_config: Validation settings ('allowed_models', temperature range)
        cache: Optional IResolutionCache to invalidate on write

    Returns:
        CustomizationLifecycleManager instance
    """
    from apps.domain.services.customization_service import CustomizationLifecycleManager
    return CustomizationLifecycleManager(
        catalog=catalog,
        customization_repo=customization_repo,
        cache=cache,
        allowed_models=prompts_config.get('allowed_models'),
        temperature_range=(
            prompts_config.get('temperature_min', 0.0),
            prompts_config.get('temperature_max', 2.0),
        ),
        locks=_edit_locks,
    )


def create_prompt_services(
        config: Optional[Dict] = None,
        use_inmemory_repos: bool = False
) -> PromptServices:
    """
    Create fully-wired resolver and lifecycle manager

    This is the main entry point for the prompt API.

    Args:
        config: Optional configuration dict. If None, uses environment config.
        use_inmemory_repos: If True, use in-memory repos (for testing)

    Returns:
        PromptServices with resolver and lifecycle manager

    Example:
        >>> services = create_prompt_services()
        >>> services.lifecycle.submit_edit("summarize", "u1", "Be concise")
        <EditOutcome.CREATED: 'created'>
    """
    config = config or get_config()

    try:
        validate_config(config)

        use_inmemory = (
            use_inmemory_repos or config['repositories']['type'] == 'inmemory'
        )
        catalog = create_prompt_catalog(use_inmemory=use_inmemory)
        customization_repo = create_customization_repository(use_inmemory=use_inmemory)
        cache = create_resolution_cache(config['resolution_cache'])

        services = PromptServices(
            resolver=create_override_resolver(catalog, customization_repo, cache),
            lifecycle=create_lifecycle_manager(
                catalog, customization_repo, config['prompts'], cache
            ),
        )

        logger.debug(
            f"Created prompt services with "
            f"repositories={'inmemory' if use_inmemory else 'django'}, "
            f"cache={'on' if cache is not None else 'off'}"
        )

        return services

    except Exception as e:
        logger.error(f"Failed to create prompt services: {e}")
        raise DomainException(f"Service initialization failed: {e}") from e


# ============================================================
# VALIDATION
# ============================================================

def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate configuration structure

    Args:
        config: Configuration dictionary to validate

    Returns:
        True if valid

    Raises:
        ValueError: If configuration is invalid
    """
    required_keys = ['repositories', 'resolution_cache', 'prompts']

    for key in required_keys:
        if key not in config:
            raise ValueError(f"Missing required config key: {key}")

    repo_type = config['repositories'].get('type')
    if repo_type not in ('django', 'inmemory'):
        raise ValueError(f"Unknown repository type: {repo_type}")

    prompts = config['prompts']
    low = prompts.get('temperature_min', 0.0)
    high = prompts.get('temperature_max', 2.0)
    if low > high:
        raise ValueError(
            f"temperature_min ({low}) must not exceed temperature_max ({high})"
        )

    return True


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_service_info(config: Optional[Dict] = None) -> Dict[str, Any]:
    """
    Get information about configured services

    Args:
        config: Optional config dict, uses environment config if None

    Returns:
        Dict with service configuration info
    """
    config = config or get_config()

    return {
        'environment': config.get('environment', 'unknown'),
        'repositories': config['repositories'].get('type'),
        'resolution_cache': {
            'enabled': config['resolution_cache'].get('enabled', False),
            'ttl': config['resolution_cache'].get('ttl', 'N/A'),
        },
        'allowed_models': config['prompts'].get('allowed_models') or 'any',
        'temperature_range': [
            config['prompts'].get('temperature_min', 0.0),
            config['prompts'].get('temperature_max', 2.0),
        ],
    }
