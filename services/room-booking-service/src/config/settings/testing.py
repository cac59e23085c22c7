"""
Testing settings for Room Booking Service.
"""

from .base import *

DEBUG = False
TESTING = True
TIME_ZONE = 'UTC'

# Use in-memory SQLite for tests
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Faster password hashing for tests
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

# Fixed business hours so tests do not depend on the environment
BOOKING_BUSINESS_START_HOUR = 8
BOOKING_BUSINESS_END_HOUR = 18
BOOKING_MIN_DURATION_MINUTES = 30
BOOKING_SLOT_MINUTES = 60

# Logging - minimal for tests
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
}
