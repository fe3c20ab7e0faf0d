# flavorfeast/settings.py
"""
Flavor Feast Django settings

CHANGE LOG
----------
2026-10-12 • Token + notification settings for the storefront API
- STOREFRONT_TOKEN_SECRET / STOREFRONT_TOKEN_TTL_HOURS drive session tokens.
- STOREFRONT_BRAND_NAME / STOREFRONT_CURRENCY_LABEL used by status emails.
- Email provider resolved by storefront.email_config (env-only).

2026-10-05 • Logging encoding → settings-level (UTF-8)
- RotatingFileHandler writes UTF-8 so customer names with accents stay greppable.
"""

from pathlib import Path
import os
import sys

from dotenv import load_dotenv

from storefront.email_config import get_email_settings

# ========= Base / Env =========
BASE_DIR = Path(__file__).resolve().parent.parent

ENV_CANDIDATES = [
    Path(os.path.expanduser("~/flavorfeast/.env")),  # server: ~/flavorfeast/.env
    BASE_DIR / ".env",                               # local: project root
    BASE_DIR.parent / ".env",                        # local: repo root (if settings/ nested)
]
for _env in ENV_CANDIDATES:
    if _env.exists():
        load_dotenv(_env)
        print(f"[settings] Loaded env from: {_env}")
        break
else:
    load_dotenv()  # fallback (no-op if missing)


def _bool_env(name: str, default: str = "false") -> bool:
    return (os.getenv(name) or default).strip().lower() in ("1", "true", "yes", "on")


def _running_tests() -> bool:
    """Explicit markers only: DJANGO_TESTING=1, a loaded pytest, or `manage.py test`."""
    if os.getenv("DJANGO_TESTING") == "1" or "pytest" in sys.modules:
        return True
    return len(sys.argv) > 1 and sys.argv[1] == "test"


TESTING = _running_tests()
DEBUG = _bool_env("DEBUG")

# ========= Secret Key =========
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "")
if not SECRET_KEY:
    if not (DEBUG or TESTING):
        raise ValueError("DJANGO_SECRET_KEY must be set in .env file")
    SECRET_KEY = "flavorfeast-insecure-dev-key"

# ========= Hosts / Security =========
ALLOWED_HOSTS = [
    "127.0.0.1",
    "localhost",
    "testserver",
] + [h.strip() for h in os.getenv("ADDITIONAL_HOSTS", "").split(",") if h.strip()]

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
_ENFORCE_HTTPS = not (DEBUG or TESTING)
SESSION_COOKIE_SECURE = _ENFORCE_HTTPS
CSRF_COOKIE_SECURE = _ENFORCE_HTTPS
SECURE_SSL_REDIRECT = _bool_env("SECURE_SSL_REDIRECT", "true" if _ENFORCE_HTTPS else "false")
SECURE_CONTENT_TYPE_NOSNIFF = True

if _ENFORCE_HTTPS:
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True

# ========= Installed apps =========
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "corsheaders",
    "rest_framework",
    "anymail",

    "storefront",
    "storefront.accounts",
    "storefront.menu",
    "storefront.orders",
]

# ========= Middleware =========
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

# ========= URL / Templates / WSGI =========
ROOT_URLCONF = "flavorfeast.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "flavorfeast.wsgi.application"

# ========= Database =========
# Defaults to SQLite; point DATABASE_ENGINE at mysql/postgresql in production.
DATABASES = {
    "default": {
        "ENGINE": os.getenv("DATABASE_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.getenv("DATABASE_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.getenv("DATABASE_USER", ""),
        "PASSWORD": os.getenv("DATABASE_PASSWORD", ""),
        "HOST": os.getenv("DATABASE_HOST", ""),
        "PORT": os.getenv("DATABASE_PORT", ""),
    }
}
if DATABASES["default"]["ENGINE"].endswith("sqlite3"):
    DATABASES["default"]["OPTIONS"] = {"timeout": 30}

# ========= Password hashing =========
# make_password/check_password use the first hasher (PBKDF2 unless overridden).
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.PBKDF2PasswordHasher",
    "django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher",
    "django.contrib.auth.hashers.Argon2PasswordHasher",
    "django.contrib.auth.hashers.ScryptPasswordHasher",
]

# ========= I18N =========
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ========= Static =========
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": (
            "django.contrib.staticfiles.storage.StaticFilesStorage"
            if (DEBUG or TESTING)
            else "whitenoise.storage.CompressedManifestStaticFilesStorage"
        ),
    },
}

# ========= Defaults =========
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ========= REST framework =========
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "storefront.accounts.authentication.BearerTokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "EXCEPTION_HANDLER": "storefront.api.exception_handler",
    "UNAUTHENTICATED_USER": None,
    "COERCE_DECIMAL_TO_STRING": False,
}

# ========= CORS =========
CORS_ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]
CORS_ALLOW_HEADERS = list({
    "accept",
    "accept-encoding",
    "authorization",
    "content-type",
    "origin",
    "user-agent",
})

# ========= Storefront =========
STOREFRONT_TOKEN_SECRET = os.getenv("STOREFRONT_TOKEN_SECRET") or SECRET_KEY
STOREFRONT_TOKEN_TTL_HOURS = int(os.getenv("STOREFRONT_TOKEN_TTL_HOURS", "24"))
STOREFRONT_BRAND_NAME = os.getenv("STOREFRONT_BRAND_NAME", "Flavor Feast")
STOREFRONT_CURRENCY_LABEL = os.getenv("STOREFRONT_CURRENCY_LABEL", "Rs.")

# ========= Email =========
# Provider is infra-only (STOREFRONT_EMAIL_PROVIDER); see storefront/email_config.py.
globals().update(get_email_settings())
EMAIL_TIMEOUT = int(os.getenv("EMAIL_TIMEOUT", "10"))

# ========= Logging =========
LOG_DIR = BASE_DIR / "logs"
LOG_DIR.mkdir(exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "file": {
            "level": "INFO",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": LOG_DIR / "storefront.log",
            "maxBytes": 1024 * 1024 * 15,
            "backupCount": 10,
            "formatter": "verbose",
            "encoding": "utf-8",
        },
        "console": {
            "level": "INFO",
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "storefront": {
            "handlers": ["file", "console"],
            "level": "INFO",
            "propagate": True,
        },
        "django": {
            "handlers": ["file"],
            "level": "ERROR",
            "propagate": True,
        },
        "django.core.mail": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
