import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AiPrompt",
            fields=[
                (
                    "id",
                    models.SlugField(
                        max_length=100, primary_key=True, serialize=False
                    ),
                ),
                ("description", models.CharField(max_length=255)),
                ("content", models.TextField()),
                ("model", models.CharField(default="gpt-4o-mini", max_length=100)),
                ("temperature", models.FloatField(default=1.0)),
                (
                    "position",
                    models.PositiveIntegerField(
                        default=0, help_text="Catalog order (ascending)"
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Retired prompts are hidden from the catalog",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "AI prompt",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="UserInstruction",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("owner_id", models.CharField(db_index=True, max_length=255)),
                ("content", models.TextField()),
                ("model", models.CharField(blank=True, max_length=100, null=True)),
                ("temperature", models.FloatField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "prompt",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="instructions",
                        to="prompts.aiprompt",
                    ),
                ),
            ],
            options={
                "ordering": ["-updated_at"],
                "indexes": [
                    models.Index(
                        fields=["owner_id", "prompt"],
                        name="instruction_owner_prompt_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("prompt", "owner_id"),
                        name="unique_instruction_per_owner",
                    )
                ],
            },
        ),
    ]
