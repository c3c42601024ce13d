"""
Classifieds — Development Settings

DJANGO_SETTINGS_MODULE=config.settings.development (also what pytest uses).

@file config/settings/development.py
"""

from .base import *  # noqa: F401, F403

DEBUG = True
ALLOWED_HOSTS = ['*']

# Let the selector poll a local runserver without tripping the throttles.
REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405

LOGGING['loggers']['classifieds']['level'] = 'DEBUG'  # noqa: F405
