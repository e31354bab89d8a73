# apps/domain/ports/repositories.py

"""
Repository Ports - Interfaces for data persistence

These ports define contracts for accessing stored prompts and
owner customizations.
"""

from typing import Protocol, Optional, List

from apps.domain.models import BasePrompt, Customization


class IPromptCatalog(Protocol):
    """
    Interface for the base prompt catalog

    Read-only. Base prompts are managed outside the domain.
    """

    def list_base_prompts(self) -> List[BasePrompt]:
        """
        Get all base prompts in catalog order

        Returns:
            List of BasePrompt objects

        Raises:
            NotAvailableError: If the backing store is unreachable
        """
        ...

    def get(self, prompt_id: str) -> Optional[BasePrompt]:
        """
        Retrieve a base prompt by ID

        Args:
            prompt_id: Prompt identifier

        Returns:
            BasePrompt if found, None otherwise

        Raises:
            NotAvailableError: If the backing store is unreachable
        """
        ...


class ICustomizationRepository(Protocol):
    """
    Interface for customization persistence

    Holds at most one record per (prompt_id, owner_id).
    """

    def get(self, prompt_id: str, owner_id: str) -> Optional[Customization]:
        """
        Retrieve the customization for a prompt/owner pair

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity

        Returns:
            Customization if present, None otherwise
        """
        ...

    def list_by_owner(self, owner_id: str) -> List[Customization]:
        """
        Get all customizations belonging to an owner

        Args:
            owner_id: Owner identity

        Returns:
            List of Customization objects (unordered)
        """
        ...

    def upsert(
            self,
            prompt_id: str,
            owner_id: str,
            content: str,
            model: Optional[str] = None,
            temperature: Optional[float] = None
    ) -> Customization:
        """
        Create or overwrite the customization for a prompt/owner pair

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity
            content: Override text, must be non-empty after trimming
            model: Optional model override
            temperature: Optional temperature override

        Returns:
            Stored customization

        Raises:
            InvalidContentError: If content is empty or whitespace-only
            NotAvailableError: If the backing store is unreachable
        """
        ...

    def remove(self, prompt_id: str, owner_id: str) -> None:
        """
        Delete the customization for a prompt/owner pair

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity

        Raises:
            NotFoundError: If no customization exists
            NotAvailableError: If the backing store is unreachable
        """
        ...
