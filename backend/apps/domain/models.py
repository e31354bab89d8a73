# apps/domain/models.py

"""
Domain Models - Value Objects and Entities

Value Objects: Immutable, defined by attributes (e.g., BasePrompt, ResolvedPrompt)
Entities: Have identity, mutable (e.g., Customization)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from datetime import datetime, timezone
from enum import Enum

# Owner ids are stored in a 255-character column
MAX_OWNER_ID_LENGTH = 255


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EditOutcome(str, Enum):
    """Result of a customization edit"""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class _Unset:
    """
    Marker for "no customization set"

    Distinct from None and from the empty string so callers can't confuse
    an absent instruction with real content.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET = _Unset()


# ============================================================
# VALUE OBJECTS (Immutable)
# ============================================================

@dataclass(frozen=True)
class BasePrompt:
    """
    A system-defined instruction template

    Read-only from the domain's point of view. Seeded and managed
    externally (admin, seed command).
    """
    id: str
    description: str
    content: str
    model: str
    temperature: float

    def __str__(self) -> str:
        return f"{self.id} ({self.model} @ {self.temperature})"


@dataclass(frozen=True)
class ResolvedPrompt:
    """
    Effective view of a base prompt for one owner

    Computed on demand, never persisted.
    """
    id: str
    description: str
    content: str
    model: str
    temperature: float
    effective_instruction: Union[str, _Unset] = UNSET
    effective_model: Optional[str] = None
    effective_temperature: Optional[float] = None

    @classmethod
    def from_base(
            cls,
            base: BasePrompt,
            customization: Optional["Customization"] = None
    ) -> "ResolvedPrompt":
        """
        Merge a base prompt with an optional customization

        Args:
            base: Base prompt definition
            customization: Owner customization, or None

        Returns:
            ResolvedPrompt with effective fields populated
        """
        if customization is None:
            return cls(
                id=base.id,
                description=base.description,
                content=base.content,
                model=base.model,
                temperature=base.temperature,
                effective_instruction=UNSET,
                effective_model=base.model,
                effective_temperature=base.temperature,
            )

        return cls(
            id=base.id,
            description=base.description,
            content=base.content,
            model=base.model,
            temperature=base.temperature,
            effective_instruction=customization.content,
            effective_model=customization.model or base.model,
            effective_temperature=(
                customization.temperature
                if customization.temperature is not None
                else base.temperature
            ),
        )

    @property
    def is_customized(self) -> bool:
        return self.effective_instruction is not UNSET

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses"""
        return {
            'id': self.id,
            'description': self.description,
            'content': self.content,
            'model': self.model,
            'temperature': self.temperature,
            'effective_instruction': (
                self.effective_instruction if self.is_customized else None
            ),
            'effective_model': self.effective_model,
            'effective_temperature': self.effective_temperature,
            'is_customized': self.is_customized,
        }


# ============================================================
# ENTITIES (Have Identity, Mutable)
# ============================================================

@dataclass
class Customization:
    """
    An owner-specific override of a base prompt

    Identity is the (prompt_id, owner_id) pair. Content is never empty;
    an empty edit is a delete, not a record.
    """
    prompt_id: str
    owner_id: str
    content: str
    model: Optional[str] = None
    temperature: Optional[float] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def key(self) -> tuple:
        return (self.prompt_id, self.owner_id)


# ============================================================
# DOMAIN EXCEPTIONS
# ============================================================

class DomainException(Exception):
    """
    Base exception for domain layer

    Carries the prompt/owner/operation context so the calling layer can
    log and present a message without re-deriving it.
    """

    def __init__(
            self,
            message: str,
            prompt_id: Optional[str] = None,
            owner_id: Optional[str] = None,
            operation: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.prompt_id = prompt_id
        self.owner_id = owner_id
        self.operation = operation

    def context(self) -> Dict[str, Optional[str]]:
        return {
            'prompt_id': self.prompt_id,
            'owner_id': self.owner_id,
            'operation': self.operation,
        }


class ValidationError(DomainException):
    """Raised when domain validation fails"""
    pass


class NotFoundError(DomainException):
    """Raised when entity not found"""
    pass


class InvalidContentError(DomainException):
    """Raised when a customization would be stored with empty content"""
    pass


class NotAvailableError(DomainException):
    """Raised when the backing store is unreachable"""
    pass
