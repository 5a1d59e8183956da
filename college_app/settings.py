import os
from decimal import Decimal

from tasks.config import TASK_CONFIG

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-9v$k2m@x1t#college-portal-dev-key-change-me"
)


DEBUG = os.environ.get("DEBUG", "True") == "True"

ALLOWED_HOSTS = [h for h in os.environ.get("ALLOWED_HOSTS", "").split(",") if h]


# Application definition

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django.contrib.humanize",
    "widget_tweaks",
    "apps.corecode",
    "apps.teachers",
    "apps.students",
    "apps.lessons",
    "apps.attendance",
    "apps.enrollments",
    "apps.result",
    "apps.admissions",
    "apps.parent",
    "apps.announcements",
    "apps.assignments",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "apps.corecode.middleware.RoleMiddleware",
]

ROOT_URLCONF = "college_app.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [
            os.path.join(BASE_DIR, "templates"),
        ],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "apps.corecode.context_processors.site_defaults",
            ],
        },
    },
]

WSGI_APPLICATION = "college_app.wsgi.application"


# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DATABASE_NAME", os.path.join(BASE_DIR, "db.sqlite3")),
    }
}


# Password validation
# https://docs.djangoproject.com/en/4.2/ref/settings/#auth-password-validators

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]


# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = "en-us"

TIME_ZONE = TASK_CONFIG["TIMEZONE"]

USE_I18N = True

USE_TZ = True


# Static files (CSS, JavaScript, Images)

STATIC_URL = "/static/"

STATIC_ROOT = os.path.join(BASE_DIR, "staticfiles")

LOGIN_URL = "login"
LOGIN_REDIRECT_URL = "/"
LOGOUT_REDIRECT_URL = "login"

SESSION_COOKIE_AGE = 10800


# Email (SMTP)

EMAIL_BACKEND = os.environ.get(
    "EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend"
)
EMAIL_HOST = os.environ.get("EMAIL_HOST", "smtp.gmail.com")
EMAIL_PORT = int(os.environ.get("EMAIL_PORT", 587))
EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = os.environ.get("EMAIL_USE_TLS", "True") == "True"
EMAIL_TIMEOUT = 15
EMAIL_FROM_NAME = os.environ.get("EMAIL_FROM_NAME", "College Administration")
DEFAULT_FROM_EMAIL = os.environ.get(
    "DEFAULT_FROM_EMAIL",
    f"{EMAIL_FROM_NAME} <{EMAIL_HOST_USER or 'noreply@localhost'}>",
)


# Celery

CELERY_BROKER_URL = TASK_CONFIG["BROKER_URL"]
CELERY_RESULT_BACKEND = TASK_CONFIG["RESULT_BACKEND"]
CELERY_TASK_TRACK_STARTED = TASK_CONFIG["TASK_TRACK_STARTED"]
CELERY_TASK_TIME_LIMIT = TASK_CONFIG["TASK_TIME_LIMIT"]
CELERY_TASK_SERIALIZER = TASK_CONFIG["TASK_SERIALIZER"]
CELERY_RESULT_SERIALIZER = TASK_CONFIG["RESULT_SERIALIZER"]
CELERY_ACCEPT_CONTENT = TASK_CONFIG["ACCEPT_CONTENT"]
CELERY_TIMEZONE = TASK_CONFIG["TIMEZONE"]
CELERY_TASK_ALWAYS_EAGER = not TASK_CONFIG["USE_CELERY"]
CELERY_TASK_ROUTES = TASK_CONFIG["TASK_ROUTES"]
CELERY_BEAT_SCHEDULE = {
    "reset-lesson-statuses": {
        "task": "system.reset_lesson_statuses",
        "schedule": TASK_CONFIG["LESSON_RESET_INTERVAL"],
    },
}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "INFO",
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
        "file": {
            "level": "INFO",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "when": "W6",
            "interval": 4,
            "backupCount": 3,
            "encoding": "utf8",
            "filename": os.path.join(BASE_DIR, "debug.log"),
            "formatter": "verbose",
            "delay": True,
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": True,
        },
        "apps": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
        "tasks": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
    },
}

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

# Site Default values
SCHOOL_NAME = os.environ.get("SCHOOL_NAME", "College Portal")
SITE_URL = os.environ.get("SITE_URL", "http://localhost:8000").rstrip("/")
ADMISSION_FEE = Decimal(os.environ.get("ADMISSION_FEE", "100.00"))
ADMISSION_TOKEN_TTL_HOURS = 24
ITEM_PER_PAGE = 10
