"""
Classifieds — Production Settings

DJANGO_SETTINGS_MODULE=config.settings.production

@file config/settings/production.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

SECURE_SSL_REDIRECT = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_HSTS_SECONDS = 31536000
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

DATABASES['default']['CONN_MAX_AGE'] = env.int('CONN_MAX_AGE', default=600)  # noqa: F405

# JSON only; no browsable API in production.
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = ('core.renderers.StandardJSONRenderer',)  # noqa: F405

LOGGING['loggers']['classifieds']['level'] = 'WARNING'  # noqa: F405
