# apps/domain/ports/cache.py

"""
Resolution Cache Port - Interface for caching resolved prompt views

Optional. The resolver works without one; when present it must be
invalidated on every customization mutation.

Entries are tagged with the owner's generation token as read before the
store reads. Invalidation replaces the token, so an entry filled from a
read that raced with a write is never served.
"""

from typing import Hashable, List, Optional, Protocol

from apps.domain.models import ResolvedPrompt


class IResolutionCache(Protocol):
    """
    Interface for a per-owner cache of resolved prompts
    """

    def generation(self, owner_id: str) -> Hashable:
        """
        Get the owner's current generation token

        Args:
            owner_id: Owner identity

        Returns:
            Opaque token, replaced by every invalidate() for the owner
        """
        ...

    def get(self, owner_id: str) -> Optional[List[ResolvedPrompt]]:
        """
        Get cached resolution for an owner

        Args:
            owner_id: Owner identity

        Returns:
            Cached list of ResolvedPrompt, or None on miss or when the
            entry's token is no longer current
        """
        ...

    def set(
        self, owner_id: str, prompts: List[ResolvedPrompt], generation: Hashable
    ) -> None:
        """
        Store resolution for an owner

        Args:
            owner_id: Owner identity
            prompts: Resolved prompts in catalog order
            generation: Token read before the prompts were resolved
        """
        ...

    def invalidate(self, owner_id: str, prompt_id: Optional[str] = None) -> None:
        """
        Drop cached resolution after a mutation and replace the token

        Args:
            owner_id: Owner whose customization changed
            prompt_id: Prompt that changed (informational; the whole
                owner entry is dropped)
        """
        ...
