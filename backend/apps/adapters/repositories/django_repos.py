# apps/adapters/repositories/django_repos.py
"""
Django ORM Repository Adapters

Implements repository ports using Django models.
"""
from typing import Optional, List
import logging

from django.db import DatabaseError, transaction

from apps.domain.models import (
    BasePrompt,
    Customization,
    InvalidContentError,
    NotAvailableError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class DjangoPromptCatalog:
    """
    Base prompt catalog using Django ORM

    Only active prompts are part of the catalog.
    """

    def list_base_prompts(self) -> List[BasePrompt]:
        """
        List active base prompts

        Returns:
            List of BasePrompt ordered by position, then id
        """
        from apps.prompts.models import AiPrompt

        try:
            queryset = AiPrompt.objects.filter(is_active=True).order_by('position', 'id')
            return [self._to_domain(p) for p in queryset]

        except DatabaseError as e:
            logger.error(f"Error listing base prompts: {e}")
            raise NotAvailableError(
                f"Prompt catalog unavailable: {e}", operation="list_base_prompts"
            ) from e

    def get(self, prompt_id: str) -> Optional[BasePrompt]:
        """
        Get active base prompt by ID

        Args:
            prompt_id: Prompt identifier

        Returns:
            BasePrompt or None if not found
        """
        from apps.prompts.models import AiPrompt

        try:
            orm_prompt = AiPrompt.objects.get(id=prompt_id, is_active=True)
            return self._to_domain(orm_prompt)

        except AiPrompt.DoesNotExist:
            return None

        except DatabaseError as e:
            logger.error(f"Error loading base prompt {prompt_id}: {e}")
            raise NotAvailableError(
                f"Prompt catalog unavailable: {e}",
                prompt_id=prompt_id,
                operation="get_base_prompt",
            ) from e

    def _to_domain(self, orm_prompt) -> BasePrompt:
        """Convert ORM model to domain model"""
        return BasePrompt(
            id=orm_prompt.id,
            description=orm_prompt.description,
            content=orm_prompt.content,
            model=orm_prompt.model,
            temperature=orm_prompt.temperature,
        )


class DjangoCustomizationRepository:
    """
    Customization repository using Django ORM

    Wraps Django UserInstruction model with domain interface. The
    (prompt, owner_id) unique constraint backs the one-record-per-pair rule.
    """

    def get(self, prompt_id: str, owner_id: str) -> Optional[Customization]:
        """
        Get customization by prompt/owner pair

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity

        Returns:
            Customization or None if not found
        """
        from apps.prompts.models import UserInstruction

        try:
            orm_instruction = UserInstruction.objects.get(
                prompt_id=prompt_id, owner_id=owner_id
            )
            return self._to_domain(orm_instruction)

        except UserInstruction.DoesNotExist:
            return None

        except DatabaseError as e:
            logger.error(
                f"Error loading customization prompt={prompt_id} owner={owner_id}: {e}"
            )
            raise NotAvailableError(
                f"Customization store unavailable: {e}",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="get",
            ) from e

    def list_by_owner(self, owner_id: str) -> List[Customization]:
        """
        List customizations for an owner

        Args:
            owner_id: Owner identity

        Returns:
            List of Customization objects
        """
        from apps.prompts.models import UserInstruction

        try:
            queryset = UserInstruction.objects.filter(owner_id=owner_id)
            return [self._to_domain(i) for i in queryset]

        except DatabaseError as e:
            logger.error(f"Error listing customizations for owner={owner_id}: {e}")
            raise NotAvailableError(
                f"Customization store unavailable: {e}",
                owner_id=owner_id,
                operation="list_by_owner",
            ) from e

    def upsert(
            self,
            prompt_id: str,
            owner_id: str,
            content: str,
            model: Optional[str] = None,
            temperature: Optional[float] = None
    ) -> Customization:
        """
        Create or overwrite customization

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity
            content: Non-empty override text
            model: Optional model override
            temperature: Optional temperature override

        Returns:
            Stored customization
        """
        from apps.prompts.models import UserInstruction

        if content is None or not content.strip():
            raise InvalidContentError(
                "Customization content cannot be empty; use remove instead",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="upsert",
            )

        try:
            with transaction.atomic():
                orm_instruction, created = UserInstruction.objects.update_or_create(
                    prompt_id=prompt_id,
                    owner_id=owner_id,
                    defaults={
                        'content': content,
                        'model': model,
                        'temperature': temperature,
                    }
                )

            logger.debug(
                f"{'Created' if created else 'Updated'} instruction "
                f"prompt={prompt_id} owner={owner_id}"
            )
            return self._to_domain(orm_instruction)

        except DatabaseError as e:
            logger.error(
                f"Error saving customization prompt={prompt_id} owner={owner_id}: {e}"
            )
            raise NotAvailableError(
                f"Customization store unavailable: {e}",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="upsert",
            ) from e

    def remove(self, prompt_id: str, owner_id: str) -> None:
        """
        Delete customization

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity

        Raises:
            NotFoundError: If no customization exists
        """
        from apps.prompts.models import UserInstruction

        try:
            deleted, _ = UserInstruction.objects.filter(
                prompt_id=prompt_id, owner_id=owner_id
            ).delete()

        except DatabaseError as e:
            logger.error(
                f"Error deleting customization prompt={prompt_id} owner={owner_id}: {e}"
            )
            raise NotAvailableError(
                f"Customization store unavailable: {e}",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="remove",
            ) from e

        if deleted == 0:
            raise NotFoundError(
                f"No customization for prompt {prompt_id} and owner {owner_id}",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="remove",
            )

    def _to_domain(self, orm_instruction) -> Customization:
        """Convert ORM model to domain model"""
        return Customization(
            prompt_id=orm_instruction.prompt_id,
            owner_id=orm_instruction.owner_id,
            content=orm_instruction.content,
            model=orm_instruction.model,
            temperature=orm_instruction.temperature,
            created_at=orm_instruction.created_at,
            updated_at=orm_instruction.updated_at,
        )
