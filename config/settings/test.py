# config/settings/test.py
from .base import *  # noqa

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

SIMPLE_JWT = {
    **SIMPLE_JWT,  # noqa: F405
    "SIGNING_KEY": "test-signing-key-0123456789abcdef0123456789abcdef",
}

REFERRAL_ROUTING = {
    "HUB_CAMPUS_ID": 1,
    "SECONDARY_CAMPUS_IDS": [2, 3],
    "HUB_CLINIC_TYPE": "General",
}

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["uicms"]["level"] = "WARNING"  # noqa: F405
