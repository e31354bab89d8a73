# apps/domain/services/customization_service.py

"""
Customization Lifecycle Manager - Create/update/delete of owner overrides

This is the only component allowed to call upsert and remove on the
customization repository. All edit requests go through submit_edit so
the "empty content means delete" rule can't be bypassed.

States per (prompt_id, owner_id):
    NoCustomization  --non-empty edit-->  HasCustomization   (created)
    HasCustomization --non-empty edit-->  HasCustomization   (updated)
    HasCustomization --empty edit------>  NoCustomization    (deleted)
    NoCustomization  --empty edit------>  NoCustomization    (deleted, no-op)
    HasCustomization --delete---------->  NoCustomization    (deleted)
    NoCustomization  --delete---------->  NotFoundError
"""

import logging
from typing import Optional, Sequence, Tuple

from apps.domain.models import (
    Customization,
    MAX_OWNER_ID_LENGTH,
    EditOutcome,
    NotFoundError,
    ValidationError,
)
from apps.domain.ports.cache import IResolutionCache
from apps.domain.ports.repositories import ICustomizationRepository, IPromptCatalog
from apps.domain.services.key_locks import KeyedLock

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE_RANGE = (0.0, 2.0)


class CustomizationLifecycleManager:
    """
    State machine for owner customizations

    Responsibilities:
    - Normalize submitted text
    - Decide create vs. update vs. delete
    - Validate optional model/temperature overrides
    - Serialize mutations per (prompt_id, owner_id)
    - Invalidate the resolution cache after each mutation
    """

    def __init__(
        self,
        catalog: IPromptCatalog,
        customization_repo: ICustomizationRepository,
        cache: Optional[IResolutionCache] = None,
        allowed_models: Optional[Sequence[str]] = None,
        temperature_range: Tuple[float, float] = DEFAULT_TEMPERATURE_RANGE,
        locks: Optional[KeyedLock] = None,
    ):
        """
        Initialize lifecycle manager

        Args:
            catalog: Base prompt catalog (used to reject unknown prompts)
            customization_repo: Customization store
            cache: Optional resolution cache to invalidate on write
            allowed_models: Accepted model overrides; None accepts any
            temperature_range: Inclusive (min, max) for temperature overrides
            locks: Lock registry, shared when several managers wrap one store
        """
        self._catalog = catalog
        self._customization_repo = customization_repo
        self._cache = cache
        self._allowed_models = list(allowed_models) if allowed_models else None
        self._temperature_range = temperature_range
        self._locks = locks or KeyedLock()

    def submit_edit(
        self,
        prompt_id: str,
        owner_id: str,
        raw_text: Optional[str],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> EditOutcome:
        """
        Apply an edit to an owner's customization

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity
            raw_text: Submitted instruction text; blank means delete
            model: Optional model override
            temperature: Optional temperature override

        Returns:
            EditOutcome.CREATED, UPDATED or DELETED

        Raises:
            ValidationError: If owner_id or an override is invalid
            NotFoundError: If the prompt is not in the catalog
            NotAvailableError: If the backing store is unreachable
        """
        self._require_owner(owner_id, prompt_id, "submit_edit")
        self._require_prompt(prompt_id, owner_id, "submit_edit")

        text = (raw_text or "").strip()

        if text:
            model = self._validate_model(model, prompt_id, owner_id)
            temperature = self._validate_temperature(temperature, prompt_id, owner_id)

        with self._locks.hold((prompt_id, owner_id)):
            existing = self._customization_repo.get(prompt_id, owner_id)

            if not text:
                if existing is None:
                    logger.debug(
                        f"Empty edit for prompt={prompt_id} owner={owner_id}: "
                        f"nothing to delete"
                    )
                    return EditOutcome.DELETED

                try:
                    self._customization_repo.remove(prompt_id, owner_id)
                except NotFoundError:
                    # Removed by another process between get and remove
                    logger.debug(
                        f"Customization prompt={prompt_id} owner={owner_id} "
                        f"already removed"
                    )
                self._invalidate(prompt_id, owner_id)
                logger.info(
                    f"Customization deleted by empty edit: "
                    f"prompt={prompt_id} owner={owner_id}"
                )
                return EditOutcome.DELETED

            self._customization_repo.upsert(
                prompt_id,
                owner_id,
                text,
                model=model,
                temperature=temperature,
            )
            self._invalidate(prompt_id, owner_id)

            outcome = EditOutcome.CREATED if existing is None else EditOutcome.UPDATED
            logger.info(
                f"Customization {outcome.value}: prompt={prompt_id} owner={owner_id}"
            )
            return outcome

    def delete_customization(self, prompt_id: str, owner_id: str) -> EditOutcome:
        """
        Explicitly delete an owner's customization

        Args:
            prompt_id: Prompt identifier
            owner_id: Owner identity

        Returns:
            EditOutcome.DELETED

        Raises:
            NotFoundError: If no customization exists (callers wanting an
                idempotent delete treat this as success)
            NotAvailableError: If the backing store is unreachable
        """
        self._require_owner(owner_id, prompt_id, "delete")

        with self._locks.hold((prompt_id, owner_id)):
            self._customization_repo.remove(prompt_id, owner_id)
            self._invalidate(prompt_id, owner_id)

        logger.info(f"Customization deleted: prompt={prompt_id} owner={owner_id}")
        return EditOutcome.DELETED

    def get_customization(self, prompt_id: str, owner_id: str) -> Optional[Customization]:
        """Read-only passthrough for callers that need the raw record"""
        return self._customization_repo.get(prompt_id, owner_id)

    # ============================================================
    # HELPERS
    # ============================================================

    def _invalidate(self, prompt_id: str, owner_id: str) -> None:
        if self._cache is not None:
            self._cache.invalidate(owner_id, prompt_id)

    def _require_owner(self, owner_id: str, prompt_id: str, operation: str) -> None:
        if not owner_id or not str(owner_id).strip():
            raise ValidationError(
                "Owner id is required",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation=operation,
            )
        if len(str(owner_id)) > MAX_OWNER_ID_LENGTH:
            raise ValidationError(
                f"Owner id must be at most {MAX_OWNER_ID_LENGTH} characters",
                prompt_id=prompt_id,
                operation=operation,
            )

    def _require_prompt(self, prompt_id: str, owner_id: str, operation: str) -> None:
        if self._catalog.get(prompt_id) is None:
            raise NotFoundError(
                f"Prompt {prompt_id} not found",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation=operation,
            )

    def _validate_model(
        self, model: Optional[str], prompt_id: str, owner_id: str
    ) -> Optional[str]:
        if model is None:
            return None
        if not isinstance(model, str):
            raise ValidationError(
                f"Model must be a string, got {model!r}",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="submit_edit",
            )
        if not model.strip():
            return None

        model = model.strip()
        if self._allowed_models is not None and model not in self._allowed_models:
            raise ValidationError(
                f"Model '{model}' is not allowed. "
                f"Must be one of: {', '.join(self._allowed_models)}",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="submit_edit",
            )
        return model

    def _validate_temperature(
        self, temperature: Optional[float], prompt_id: str, owner_id: str
    ) -> Optional[float]:
        if temperature is None:
            return None

        try:
            value = float(temperature)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Temperature must be a number, got {temperature!r}",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="submit_edit",
            )

        low, high = self._temperature_range
        if not low <= value <= high:
            raise ValidationError(
                f"Temperature {value} out of range [{low}, {high}]",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="submit_edit",
            )
        return value
