"""
Production settings for the HouseHub messaging backend.

Extends the base settings by disabling debug mode, enforcing secure
cookies, and enabling HTTP Strict Transport Security.  Runs behind a TLS
terminating proxy.
"""
from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa

DEBUG = False

if SECRET_KEY == "dev-insecure":  # noqa: F405
    raise ImproperlyConfigured("DJANGO_SECRET_KEY must be set in production.")

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

# Keep connections to PostgreSQL healthy across idle periods
DATABASES["default"]["CONN_HEALTH_CHECKS"] = True  # noqa: F405
