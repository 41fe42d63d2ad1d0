# config/settings/test.py
from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

HC_LOW_STOCK_THRESHOLD = 5
HC_LOW_STOCK_ALERTS_ENABLED = True

LOGGING["loggers"]["hc_core"]["level"] = "DEBUG"
