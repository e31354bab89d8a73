# apps/domain/services/prompt_resolver.py

"""
Override Resolver - Computes the effective prompt view for an owner

Stateless: every call reads the catalog and the customization store.
An injected cache is the only state, and it is invalidated by the
lifecycle manager on write.
"""

import logging
from typing import List, Optional

from apps.domain.models import NotFoundError, ResolvedPrompt
from apps.domain.ports.cache import IResolutionCache
from apps.domain.ports.repositories import ICustomizationRepository, IPromptCatalog

logger = logging.getLogger(__name__)


class OverrideResolver:
    """
    Merges base prompts with an owner's customizations

    Responsibilities:
    - Preserve catalog order
    - Report UNSET for prompts the owner has not customized
    - Propagate catalog/store failures unchanged
    """

    def __init__(
        self,
        catalog: IPromptCatalog,
        customization_repo: ICustomizationRepository,
        cache: Optional[IResolutionCache] = None,
    ):
        """
        Initialize resolver

        Args:
            catalog: Source of base prompts
            customization_repo: Source of owner customizations
            cache: Optional per-owner resolution cache
        """
        self._catalog = catalog
        self._customization_repo = customization_repo
        self._cache = cache

    def resolve(self, owner_id: str) -> List[ResolvedPrompt]:
        """
        Resolve every base prompt for an owner

        Args:
            owner_id: Owner identity

        Returns:
            One ResolvedPrompt per base prompt, in catalog order

        Raises:
            NotAvailableError: If catalog or store is unreachable
        """
        generation = None
        if self._cache is not None:
            cached = self._cache.get(owner_id)
            if cached is not None:
                logger.debug(f"Resolution cache hit for owner {owner_id}")
                return cached
            # Read before the store so a concurrent edit outdates this fill
            generation = self._cache.generation(owner_id)

        base_prompts = self._catalog.list_base_prompts()
        customizations = {
            c.prompt_id: c for c in self._customization_repo.list_by_owner(owner_id)
        }

        resolved = [
            ResolvedPrompt.from_base(base, customizations.get(base.id))
            for base in base_prompts
        ]

        logger.debug(
            f"Resolved {len(resolved)} prompts for owner {owner_id} "
            f"({len(customizations)} customized)"
        )

        if self._cache is not None:
            self._cache.set(owner_id, resolved, generation)

        return resolved

    def resolve_one(self, prompt_id: str, owner_id: str) -> ResolvedPrompt:
        """
        Resolve a single base prompt for an owner

        Bypasses the cache; used right after an edit to report fresh state.

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity

        Returns:
            ResolvedPrompt for the given prompt

        Raises:
            NotFoundError: If the prompt is not in the catalog
            NotAvailableError: If catalog or store is unreachable
        """
        base = self._catalog.get(prompt_id)
        if base is None:
            raise NotFoundError(
                f"Prompt {prompt_id} not found",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="resolve",
            )

        customization = self._customization_repo.get(prompt_id, owner_id)
        return ResolvedPrompt.from_base(base, customization)
