# backend/apps/prompts/admin.py
"""
Admin configuration for prompt models
"""
from django.contrib import admin
from django.utils.html import format_html

from .models import AiPrompt, UserInstruction


class UserInstructionInline(admin.TabularInline):
    model = UserInstruction
    extra = 0
    fields = ["owner_id", "content", "model", "temperature", "updated_at"]
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(AiPrompt)
class AiPromptAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "description",
        "model",
        "temperature",
        "position",
        "status_badge",
        "instruction_count",
        "updated_at",
    ]
    list_filter = ["is_active", "model"]
    search_fields = ["id", "description", "content"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [UserInstructionInline]

    fieldsets = (
        ("Prompt", {"fields": ("id", "description", "content")}),
        ("Model", {"fields": ("model", "temperature")}),
        ("Catalog", {"fields": ("position", "is_active")}),
        (
            "Timestamps",
            {"fields": ("created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )

    def status_badge(self, obj):
        """Visual status indicator"""
        if obj.is_active:
            color = "#28a745"  # green
            text = "ACTIVE"
        else:
            color = "#6c757d"  # grey
            text = "RETIRED"

        return format_html(
            '<span style="background: {}; color: white; padding: 3px 10px; '
            'border-radius: 3px; font-weight: bold;">{}</span>',
            color,
            text,
        )

    status_badge.short_description = "Status"

    def instruction_count(self, obj):
        return obj.instructions.count()

    instruction_count.short_description = "Customizations"


@admin.register(UserInstruction)
class UserInstructionAdmin(admin.ModelAdmin):
    list_display = ["owner_id", "prompt", "content_preview", "model", "updated_at"]
    list_filter = ["prompt", "updated_at"]
    search_fields = ["owner_id", "content"]
    readonly_fields = ["id", "created_at", "updated_at"]

    # Edits go through the API so the empty-means-delete rule holds
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def content_preview(self, obj):
        return obj.content[:100] + "..." if len(obj.content) > 100 else obj.content

    content_preview.short_description = "Content"
