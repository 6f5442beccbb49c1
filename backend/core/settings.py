# backend/core/settings.py
import os
from pathlib import Path
import dj_database_url
from dotenv import load_dotenv

load_dotenv()

env = os.environ.get

BASE_DIR = Path(__file__).resolve().parent.parent

# ========== SUPABASE ==========
SUPABASE_URL = env("SUPABASE_URL", "").strip() or None
SUPABASE_KEY = (env("SUPABASE_KEY", "") or env("SUPABASE_ANON_KEY", "")).strip() or None
# session key holding the signed-in user's access token
SUPABASE_SESSION_KEY = env("SUPABASE_SESSION_KEY", "supabase_access_token")

# ========== DASHBOARD ==========
DASHBOARD_RECENT_LIMIT = int(env("DASHBOARD_RECENT_LIMIT", 5))
DASHBOARD_LIST_LIMIT = int(env("DASHBOARD_LIST_LIMIT", 50))

SECRET_KEY = env('SECRET_KEY', 'dev-secret-key-change-me')
DEBUG = env("DEBUG", "False") == "True"

ALLOWED_HOSTS = [h for h in env("ALLOWED_HOSTS", "").split(",") if h] + [
    "localhost", "127.0.0.1",
]

CSRF_TRUSTED_ORIGINS = [
    o for o in env("CSRF_TRUSTED_ORIGINS", "").split(",") if o
] + ["http://localhost:8000", "http://127.0.0.1:8000"]

CORS_ALLOWED_ORIGINS = [
    o for o in env("CORS_ALLOWED_ORIGINS", "").split(",") if o
] + ["http://localhost:3000", "http://127.0.0.1:3000"]

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOW_CREDENTIALS = True

SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_SAMESITE = 'Lax'
SESSION_COOKIE_SECURE = not DEBUG
CSRF_COOKIE_SECURE = not DEBUG
MESSAGE_STORAGE = "django.contrib.messages.storage.cookie.CookieStorage"

# ========== STATIC ==========
STATIC_URL = "/static/"
STATIC_ROOT = os.path.join(BASE_DIR, "staticfiles")
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedStaticFilesStorage"},
}

# ========== DATABASE ==========
# Content lives in Supabase; the local database only backs Django internals.
DATABASES = {
    'default': dj_database_url.config(
        default=env('DATABASE_URL', f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
        conn_max_age=600,
    )
}

# ========== MIDDLEWARE ==========
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "core.middleware.SupabaseSessionMiddleware",
]

# ========== APPS ==========
INSTALLED_APPS = [
    # Django core apps
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Local apps
    "dashboard.apps.DashboardConfig",

    # Third-party apps
    "rest_framework",
    "corsheaders",
    "whitenoise.runserver_nostatic",
]

ROOT_URLCONF = "core.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [os.path.join(BASE_DIR, "templates")],
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

WSGI_APPLICATION = "core.wsgi.application"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ========== REST FRAMEWORK ==========
# Identity is carried by the Supabase token, not by Django auth.
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
    'UNAUTHENTICATED_USER': None,
}

# ========== SECURITY ==========
if not DEBUG and env("SECURE_SSL_REDIRECT", "True") == "True":
    SECURE_SSL_REDIRECT = True
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True

# Logging
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
    },
    'handlers': {
        'console': {"class": 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'root': {'handlers': ['console'], 'level': 'INFO' if DEBUG else 'WARNING'},
    'loggers': {
        'dashboard': {'handlers': ['console'], 'level': 'INFO', 'propagate': False},
    },
}
