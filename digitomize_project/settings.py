from datetime import timedelta
from pathlib import Path

from decouple import config, Csv
from kombu import Queue
import dj_database_url

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config('SECRET_KEY', default='django-insecure-local-only')

DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())

# Application definition
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Local
    'core',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'digitomize_project.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'digitomize_project.wsgi.application'

# Database
# Uses DATABASE_URL from .env
DATABASES = {
    'default': dj_database_url.config(
        default=config('DATABASE_URL', default='sqlite:///db.sqlite3')
    )
}

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Logging
LOG_LEVEL = config('LOG_LEVEL', default='INFO')
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'plain',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'core': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

# Platform sync
PLATFORM_REFRESH_TTL_HOURS = config('PLATFORM_REFRESH_TTL_HOURS', default=12, cast=int)
PLATFORM_HTTP_TIMEOUT_SECONDS = config('PLATFORM_HTTP_TIMEOUT_SECONDS', default=10, cast=int)
PLATFORM_HTTP_MAX_RETRIES = config('PLATFORM_HTTP_MAX_RETRIES', default=3, cast=int)
PLATFORM_HTTP_USER_AGENT = config(
    'PLATFORM_HTTP_USER_AGENT',
    default='Mozilla/5.0 (compatible; digitomize-sync/1.0)',
)
LEADERBOARD_PAGE_SIZE = config('LEADERBOARD_PAGE_SIZE', default=5, cast=int)
CONTEST_SYNC_MINUTES = config('CONTEST_SYNC_MINUTES', default=90, cast=int)
HACKATHON_SYNC_MINUTES = config('HACKATHON_SYNC_MINUTES', default=90, cast=int)
UPCOMING_PURGE_MINUTES = config('UPCOMING_PURGE_MINUTES', default=60, cast=int)
PROFILE_REFRESH_SWEEP_HOURS = config('PROFILE_REFRESH_SWEEP_HOURS', default=12, cast=int)
SYNC_ON_WORKER_START = config('SYNC_ON_WORKER_START', default=True, cast=bool)

# Celery Configuration
CELERY_BROKER_URL = config('CELERY_BROKER_URL', default='redis://localhost:6379/0')
CELERY_RESULT_BACKEND = config('CELERY_RESULT_BACKEND', default='redis://localhost:6379/0')
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_DEFAULT_QUEUE = 'celery'
CELERY_TASK_QUEUES = (
    Queue('celery'),
    Queue('sync_fast'),
    Queue('profiles'),
)
CELERY_TASK_ROUTES = {
    'core.tasks.sync_contests_task': {'queue': 'sync_fast'},
    'core.tasks.sync_hackathons_task': {'queue': 'sync_fast'},
    'core.tasks.purge_upcoming_contests_task': {'queue': 'sync_fast'},
    'core.tasks.purge_upcoming_hackathons_task': {'queue': 'sync_fast'},
    'core.tasks.refresh_profile': {'queue': 'profiles'},
}
CELERY_TASK_ANNOTATIONS = {
    'core.tasks.refresh_profile': {'rate_limit': '30/m'},
}
CELERY_BEAT_SCHEDULE = {
    'sync-contests': {
        'task': 'core.tasks.sync_contests_task',
        'schedule': timedelta(minutes=CONTEST_SYNC_MINUTES),
    },
    'purge-upcoming-contests': {
        'task': 'core.tasks.purge_upcoming_contests_task',
        'schedule': timedelta(minutes=UPCOMING_PURGE_MINUTES),
    },
    'sync-hackathons': {
        'task': 'core.tasks.sync_hackathons_task',
        'schedule': timedelta(minutes=HACKATHON_SYNC_MINUTES),
    },
    'purge-upcoming-hackathons': {
        'task': 'core.tasks.purge_upcoming_hackathons_task',
        'schedule': timedelta(minutes=UPCOMING_PURGE_MINUTES),
    },
    'refresh-stale-profiles': {
        'task': 'core.tasks.refresh_all_profiles',
        'schedule': timedelta(hours=PROFILE_REFRESH_SWEEP_HOURS),
    },
}
