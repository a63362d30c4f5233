"""
Test settings.

SQLite, an in-memory channel layer and a local-memory cache so the suite
runs without PostgreSQL or Redis.
"""
from .base import *  # noqa

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test.sqlite3",  # noqa: F405
        "TEST": {"NAME": ":memory:"},
    }
}

CACHES = {
    "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"},
}

CHANNEL_LAYERS = {
    "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_THROTTLE_CLASSES": [],
}

# Let pytest's caplog see the app loggers
for _name in ("channels", "messaging", "common"):
    LOGGING["loggers"][_name]["propagate"] = True  # noqa: F405
