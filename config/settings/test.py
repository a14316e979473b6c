"""
Test Settings

Django settings for running tests.
"""

import tempfile

from .base import *

# Test mode
DEBUG = False
TESTING = True

# File-backed SQLite so that worker threads in concurrency tests share one database
_TEST_DB = str(Path(tempfile.gettempdir()) / 'room_reservation_test.sqlite3')
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': _TEST_DB,
        'TEST': {'NAME': _TEST_DB},
        'OPTIONS': {'timeout': 30},
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Disable migrations for faster tests
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None

MIGRATION_MODULES = DisableMigrations()

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
}

# JWT settings for testing
JWT_SECRET_KEY = 'test-secret-key-for-testing-only'
JWT_ALGORITHM = 'HS256'

RESERVATION_TIME_ZONE = 'America/Santiago'
TIME_ZONE = RESERVATION_TIME_ZONE
RESERVATION_LOCK_TIMEOUT_SECONDS = 5

GOOGLE_CLIENT_ID = 'test-client-id'
GOOGLE_CLIENT_SECRET = 'test-client-secret'
GOOGLE_CALENDAR_API_URL = 'https://calendar.test/calendar/v3'
GOOGLE_TOKEN_URL = 'https://oauth.test/token'

# Logging - minimal output during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'CRITICAL',
    },
    'loggers': {
        'django': {
            'handlers': ['null'],
            'level': 'CRITICAL',
            'propagate': False,
        },
        'apps': {
            'handlers': ['null'],
            'level': 'CRITICAL',
            'propagate': False,
        },
    },
}

CORS_ALLOW_ALL_ORIGINS = True
