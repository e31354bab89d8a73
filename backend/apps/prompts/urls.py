# backend/apps/prompts/urls.py

"""
Prompt app URLs
"""
from django.urls import path

from . import views

app_name = "prompts"

urlpatterns = [
    # Specific routes BEFORE generic ones
    path(
        "<slug:prompt_id>/instruction/",
        views.prompt_instruction,
        name="prompt-instruction",
    ),
    path("<slug:prompt_id>/", views.prompt_detail, name="prompt-detail"),
    path("", views.prompt_list, name="prompt-list"),
]
