# config/settings/production.py
"""
Production-specific settings.
"""
from .base import *

DEBUG = False

# A real key is mandatory outside development
SECRET_KEY = env('SECRET_KEY')

# Security settings
SECURE_SSL_REDIRECT = env.bool('SECURE_SSL_REDIRECT', default=True)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

# HSTS settings
SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

LOGGING['handlers']['file'] = {
    'level': 'ERROR',
    'class': 'logging.FileHandler',
    'filename': env('LOG_FILE', default=str(BASE_DIR / 'client_roster.log')),
    'formatter': 'verbose',
}
LOGGING['root']['handlers'] = ['console', 'file']
LOGGING['loggers']['django']['handlers'] = ['console', 'file']
