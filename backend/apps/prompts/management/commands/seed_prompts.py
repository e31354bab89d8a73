# apps/prompts/management/commands/seed_prompts.py
"""
Django management command to seed the base prompt catalog
"""
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.prompts.models import AiPrompt

DEFAULT_PROMPTS = [
    {
        "id": "resume-customization",
        "description": "Tailor a resume to a job description",
        "content": (
            "You are an expert resume writer. Rewrite the resume below so it "
            "highlights the experience most relevant to the job description. "
            "Keep every fact truthful.\n\nJob description:\n{job_description}\n\n"
            "Resume:\n{resume}"
        ),
        "model": "gpt-4o-mini",
        "temperature": 0.7,
    },
    {
        "id": "cover-letter",
        "description": "Write a cover letter for a job application",
        "content": (
            "Write a concise, professional cover letter for the position below, "
            "drawing on the candidate's resume.\n\nJob description:\n"
            "{job_description}\n\nResume:\n{resume}"
        ),
        "model": "gpt-4o-mini",
        "temperature": 0.8,
    },
    {
        "id": "job-summary",
        "description": "Summarize a job posting",
        "content": (
            "Summarize the job posting below in five bullet points covering "
            "role, seniority, required skills, location and compensation.\n\n"
            "{job_description}"
        ),
        "model": "gpt-4o-mini",
        "temperature": 0.3,
    },
]


class Command(BaseCommand):
    help = "Seed the base prompt catalog with the default prompt set"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Allow seeding in production",
        )
        parser.add_argument(
            "--retire-missing",
            action="store_true",
            help="Mark prompts not in the default set as inactive",
        )

    def handle(self, *args, **options):
        environment = getattr(settings, "ENVIRONMENT", "development")

        # Prevent accidental overwrite of production prompts
        if environment == "production" and not options["force"]:
            raise CommandError(
                "Refusing to seed prompts in production without --force. "
                "Current ENVIRONMENT=production"
            )

        created_count = 0
        updated_count = 0

        with transaction.atomic():
            for position, data in enumerate(DEFAULT_PROMPTS):
                _, created = AiPrompt.objects.update_or_create(
                    id=data["id"],
                    defaults={
                        "description": data["description"],
                        "content": data["content"],
                        "model": data["model"],
                        "temperature": data["temperature"],
                        "position": position,
                        "is_active": True,
                    },
                )
                if created:
                    created_count += 1
                else:
                    updated_count += 1

            retired_count = 0
            if options["retire_missing"]:
                retired_count = (
                    AiPrompt.objects.filter(is_active=True)
                    .exclude(id__in=[p["id"] for p in DEFAULT_PROMPTS])
                    .update(is_active=False)
                )

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded prompts: {created_count} created, {updated_count} updated, "
                f"{retired_count} retired"
            )
        )
