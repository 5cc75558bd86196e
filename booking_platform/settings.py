import os
from datetime import timedelta
from pathlib import Path
import environ

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    MYSQL=(bool, False),
    NOTIFICATIONS_TIMEOUT=(float, 5.0),
)

# .env
environ.Env.read_env(os.path.join(BASE_DIR, ".env"))

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", default="django-insecure-booking-platform-dev-key")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG")

ALLOWED_HOSTS = [h.strip() for h in env("ALLOWED_HOSTS", default="127.0.0.1,localhost,testserver").split(",")]


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third-party
    "rest_framework",
    "django_filters",
    "drf_spectacular",
    "rest_framework_simplejwt.token_blacklist",

    # Local apps
    "accounts",
    "properties",
    "bookings",
    "reviews.apps.ReviewsConfig",
    "notifications",
]

AUTH_USER_MODEL = "accounts.User"

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    "booking_platform.middleware.RequestLogMiddleware",
]

ROOT_URLCONF = 'booking_platform.urls'

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = 'booking_platform.wsgi.application'


# Database
# https://docs.djangoproject.com/en/5.2/ref/settings/#databases

USE_MYSQL = env("MYSQL")

if USE_MYSQL:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.mysql",
            "NAME": env("MYSQL_NAME"),
            "USER": env("MYSQL_USER"),
            "PASSWORD": env("MYSQL_PASSWORD"),
            "HOST": env("MYSQL_HOST", default="localhost"),
            "PORT": env("MYSQL_PORT", default="3306"),
            # Review writes rely on READ COMMITTED, see reviews.store
            "OPTIONS": {"charset": "utf8mb4", "isolation_level": "read committed"},
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


# Password validation
# https://docs.djangoproject.com/en/5.2/ref/settings/#auth-password-validators

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 8}},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]


# Internationalization
# https://docs.djangoproject.com/en/5.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/5.2/howto/static-files/

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",  # for working with access/refresh tokens
        "rest_framework.authentication.SessionAuthentication",        # to work with sessions (usually a browser)
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.AllowAny",
    ),
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
        'rest_framework.renderers.BrowsableAPIRenderer',
    ),
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.OrderingFilter",
    ),
    "DEFAULT_PAGINATION_CLASS": "booking_platform.pagination.PagePagination",
    "PAGE_SIZE": 10,
    "EXCEPTION_HANDLER": "booking_platform.exceptions.envelope_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",  # for autogeneration of OpenAPI schema (Swagger).
}

SIMPLE_JWT = {
    'ROTATE_REFRESH_TOKENS': True,
    "BLACKLIST_AFTER_ROTATION": True,
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=60),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=7),
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Booking Platform Reviews API",
    "DESCRIPTION": "Guest reviews for completed bookings: photos, host responses, moderation and rating analytics.",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SECURITY": [{"BearerAuth": []}],
    "COMPONENTS": {
        "securitySchemes": {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
            }
        }
    },
}

# Review subsystem
REVIEWS = {
    "MAX_PHOTOS": 5,
    "MAX_COMMENT_LENGTH": 1000,
    "MAX_RESPONSE_LENGTH": 1000,
    "RECENT_REVIEWS_LIMIT": 5,
}

# Notifications are delivered after commit; the webhook push is optional
NOTIFICATIONS = {
    "EMITTER": "notifications.emitter.NotificationEmitter",
    "WEBHOOK_URL": env("NOTIFICATIONS_WEBHOOK_URL", default=""),
    "TIMEOUT": env("NOTIFICATIONS_TIMEOUT"),
}

MEDIA_STORE = {
    "BACKEND": "booking_platform.media.S3MediaStore",
    "BUCKET": env("MEDIA_STORE_BUCKET", default=""),
    "REGION": env("MEDIA_STORE_REGION", default="eu-central-1"),
    "ACCESS_KEY_ID": env("AWS_ACCESS_KEY_ID", default=None),
    "SECRET_ACCESS_KEY": env("AWS_SECRET_ACCESS_KEY", default=None),
}

# Logs: console + rotating files under logs/
LOG_DIR = BASE_DIR / "logs"
os.makedirs(LOG_DIR, exist_ok=True)


def _rotating_file(name, level="INFO", max_mb=5):
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "filename": str(LOG_DIR / name),
        "maxBytes": max_mb * 1024 * 1024,
        "backupCount": 5,
        "encoding": "utf-8",
        "formatter": "verbose",
    }


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,

    "formatters": {
        "simple": {
            "format": "[{levelname}] {asctime} {name}: {message}",
            "style": "{",
        },
        "verbose": {
            "format": "{asctime} | {levelname} | {name} | pid={process} tid={thread} | {message}",
            "style": "{",
        },
    },

    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG" if DEBUG else "INFO",
            "formatter": "simple",
        },
        "app_file": _rotating_file("app.log"),
        "requests_file": _rotating_file("requests.log", max_mb=10),
        # review writes, moderation and notification delivery
        "reviews_file": _rotating_file("reviews.log"),
        "security_file": _rotating_file("security.log", level="WARNING"),
    },

    "root": {
        "handlers": ["console", "app_file"],
        "level": "INFO",
    },

    "loggers": {
        # one line per API call, see RequestLogMiddleware; console output comes from root
        "requests": {
            "handlers": ["requests_file"],
            "level": "INFO",
            "propagate": True,
        },
        "django.request": {
            "handlers": ["console", "requests_file"],
            "level": "WARNING",
            "propagate": False,
        },
        "django.security": {
            "handlers": ["console", "security_file"],
            "level": "WARNING",
            "propagate": False,
        },
        "reviews": {"handlers": ["reviews_file"], "level": "INFO"},
        "notifications": {"handlers": ["reviews_file"], "level": "INFO"},
        "booking_platform": {"level": "INFO"},
        "bookings": {"level": "INFO"},
    },
}
