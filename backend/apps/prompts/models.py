# backend/apps/prompts/models.py
"""
Prompt models for base prompts and per-owner instructions
"""
import uuid

from django.core.exceptions import ValidationError
from django.db import models


class AiPrompt(models.Model):
    """A system-defined prompt template (read-only for end users)"""

    id = models.SlugField(primary_key=True, max_length=100)
    description = models.CharField(max_length=255)
    content = models.TextField()
    model = models.CharField(max_length=100, default="gpt-4o-mini")
    temperature = models.FloatField(default=1.0)
    position = models.PositiveIntegerField(
        default=0, help_text="Catalog order (ascending)"
    )
    is_active = models.BooleanField(
        default=True, help_text="Retired prompts are hidden from the catalog"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["position", "id"]
        verbose_name = "AI prompt"

    def __str__(self):
        return f"{self.id} - {self.description}"


class UserInstruction(models.Model):
    """
    An owner's customization of a base prompt

    At most one per (prompt, owner_id). Content is never blank; an
    empty edit deletes the row instead.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    prompt = models.ForeignKey(
        AiPrompt, related_name="instructions", on_delete=models.CASCADE
    )
    owner_id = models.CharField(max_length=255, db_index=True)
    content = models.TextField()

    # Optional overrides, null inherits from the base prompt
    model = models.CharField(max_length=100, null=True, blank=True)
    temperature = models.FloatField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["prompt", "owner_id"], name="unique_instruction_per_owner"
            ),
        ]
        indexes = [
            models.Index(
                fields=["owner_id", "prompt"], name="instruction_owner_prompt_idx"
            ),
        ]

    def __str__(self):
        return f"{self.owner_id}: {self.content[:50]}..."

    def clean(self):
        if not self.content or not self.content.strip():
            raise ValidationError({"content": "Instruction content cannot be blank"})
