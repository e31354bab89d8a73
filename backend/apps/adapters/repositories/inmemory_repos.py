# apps/adapters/repositories/inmemory_repos.py
"""
In-Memory Repository Adapters for testing
"""
from typing import Optional, List, Dict, Iterable, Tuple
from copy import deepcopy
from datetime import datetime, timezone
import threading

from apps.domain.models import (
    BasePrompt,
    Customization,
    InvalidContentError,
    NotAvailableError,
    NotFoundError,
)


class InMemoryPromptCatalog:
    """
    In-memory base prompt catalog for testing

    Insertion order is catalog order.
    """

    def __init__(self, prompts: Optional[Iterable[BasePrompt]] = None):
        self._prompts: Dict[str, BasePrompt] = {}
        self.available = True
        for prompt in prompts or []:
            self.add(prompt)

    def add(self, prompt: BasePrompt) -> BasePrompt:
        """Seed a base prompt (test helper, not part of the port)"""
        self._prompts[prompt.id] = prompt
        return prompt

    def list_base_prompts(self) -> List[BasePrompt]:
        """List base prompts in insertion order"""
        self._check_available()
        return list(self._prompts.values())

    def get(self, prompt_id: str) -> Optional[BasePrompt]:
        """Get base prompt by ID"""
        self._check_available()
        return self._prompts.get(prompt_id)

    def _check_available(self):
        if not self.available:
            raise NotAvailableError("Prompt catalog unavailable", operation="catalog")

    def clear(self):
        """Clear all prompts"""
        self._prompts.clear()


class InMemoryCustomizationRepository:
    """
    In-memory customization repository for testing

    Each call is atomic under an internal lock, mirroring a store with
    atomic upsert/remove.
    """

    def __init__(self):
        self._customizations: Dict[Tuple[str, str], Customization] = {}
        self._lock = threading.Lock()
        self.available = True

    def get(self, prompt_id: str, owner_id: str) -> Optional[Customization]:
        """Get customization by prompt/owner pair"""
        self._check_available("get", prompt_id, owner_id)
        with self._lock:
            return deepcopy(self._customizations.get((prompt_id, owner_id)))

    def list_by_owner(self, owner_id: str) -> List[Customization]:
        """List customizations for an owner"""
        self._check_available("list", None, owner_id)
        with self._lock:
            return [
                deepcopy(c) for c in self._customizations.values()
                if c.owner_id == owner_id
            ]

    def upsert(
            self,
            prompt_id: str,
            owner_id: str,
            content: str,
            model: Optional[str] = None,
            temperature: Optional[float] = None
    ) -> Customization:
        """Create or overwrite customization"""
        self._check_available("upsert", prompt_id, owner_id)

        if content is None or not content.strip():
            raise InvalidContentError(
                "Customization content cannot be empty; use remove instead",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation="upsert",
            )

        now = datetime.now(timezone.utc)
        with self._lock:
            existing = self._customizations.get((prompt_id, owner_id))
            customization = Customization(
                prompt_id=prompt_id,
                owner_id=owner_id,
                content=content,
                model=model,
                temperature=temperature,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            self._customizations[(prompt_id, owner_id)] = customization
            return deepcopy(customization)

    def remove(self, prompt_id: str, owner_id: str) -> None:
        """Delete customization"""
        self._check_available("remove", prompt_id, owner_id)
        with self._lock:
            if (prompt_id, owner_id) not in self._customizations:
                raise NotFoundError(
                    f"No customization for prompt {prompt_id} and owner {owner_id}",
                    prompt_id=prompt_id,
                    owner_id=owner_id,
                    operation="remove",
                )
            del self._customizations[(prompt_id, owner_id)]

    def count(self, prompt_id: Optional[str] = None, owner_id: Optional[str] = None) -> int:
        """Count stored records, optionally filtered"""
        with self._lock:
            return sum(
                1 for (p, o) in self._customizations
                if (prompt_id is None or p == prompt_id)
                and (owner_id is None or o == owner_id)
            )

    def _check_available(self, operation, prompt_id, owner_id):
        if not self.available:
            raise NotAvailableError(
                "Customization store unavailable",
                prompt_id=prompt_id,
                owner_id=owner_id,
                operation=operation,
            )

    def clear(self):
        """Clear all customizations"""
        with self._lock:
            self._customizations.clear()
