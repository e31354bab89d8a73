# backend/config/urls.py
"""
URL configuration for the prompt customization backend.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/prompts/", include("apps.prompts.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
]
