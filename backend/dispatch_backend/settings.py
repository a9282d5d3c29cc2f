"""
Django settings for the emergency dispatch API.

The API is a thin transport over the in-memory Dispatcher: there are no ORM
models, so no database is configured. Values come from dispatch.config
(environment / .env).
"""

from dispatch import config

SECRET_KEY = config.DJANGO_SECRET_KEY
DEBUG = config.DJANGO_DEBUG
ALLOWED_HOSTS = config.DJANGO_ALLOWED_HOSTS

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'backend.emergency',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'backend.dispatch_backend.urls'
WSGI_APPLICATION = 'backend.dispatch_backend.wsgi.application'

DATABASES = {}

TIME_ZONE = 'Asia/Kolkata'
USE_TZ = False

REST_FRAMEWORK = {
    # Authentication for upstream automations is handled outside this service
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'EXCEPTION_HANDLER': 'backend.emergency.exceptions.dispatch_exception_handler',
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}

HOSPITAL_DATA_PATH = config.HOSPITAL_DATA_PATH

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'loggers': {
        'dispatch': {'handlers': ['console'], 'level': config.LOG_LEVEL},
        'hospitals': {'handlers': ['console'], 'level': config.LOG_LEVEL},
        'backend': {'handlers': ['console'], 'level': config.LOG_LEVEL},
    },
}
