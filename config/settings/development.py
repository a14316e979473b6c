"""
Development Settings

Local development against SQLite unless DB_ENGINE says otherwise.
"""

from .base import *

DEBUG = True

if os.environ.get('DB_ENGINE', 'sqlite') == 'sqlite':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

CORS_ALLOW_ALL_ORIGINS = True

LOGGING['root']['level'] = 'DEBUG'
