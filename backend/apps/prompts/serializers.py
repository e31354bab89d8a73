# apps/prompts/serializers.py
"""
Prompt API serializers
"""
from rest_framework import serializers


class ResolvedPromptSerializer(serializers.Serializer):
    """
    Serializer for resolved prompts (read-only)

    Takes ResolvedPrompt.to_dict() output; effective_instruction is null
    when the owner has no customization.
    """

    id = serializers.CharField()
    description = serializers.CharField()
    content = serializers.CharField()
    model = serializers.CharField()
    temperature = serializers.FloatField()
    effective_instruction = serializers.CharField(allow_null=True)
    effective_model = serializers.CharField()
    effective_temperature = serializers.FloatField()
    is_customized = serializers.BooleanField()


class InstructionEditSerializer(serializers.Serializer):
    """
    Serializer for instruction edits

    Blank content is accepted here on purpose: it means "delete".
    Range and model checks happen in the lifecycle manager.
    """

    content = serializers.CharField(
        allow_blank=True, allow_null=True, required=False, trim_whitespace=False
    )
    model = serializers.CharField(
        max_length=100, allow_blank=True, allow_null=True, required=False
    )
    temperature = serializers.FloatField(allow_null=True, required=False)


class EditResultSerializer(serializers.Serializer):
    """Serializer for edit responses"""

    outcome = serializers.ChoiceField(choices=["created", "updated", "deleted"])
    prompt = ResolvedPromptSerializer()
