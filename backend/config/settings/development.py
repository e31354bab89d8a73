# backend/config/settings/development.py
from .base import *

DEBUG = True

# Development-specific settings
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
