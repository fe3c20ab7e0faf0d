"""
storefront.email_config

Centralized, env-driven email configuration for order status notifications.
Provider choice is infra-only (env vars), not business logic.

SUPPORTED PROVIDERS (set STOREFRONT_EMAIL_PROVIDER)
- smtp       (default; e.g. Gmail app password)
- mailgun
- postmark
- sendgrid
- console    (local development: prints messages to stdout)

ENV VARS (common)
- STOREFRONT_EMAIL_PROVIDER     (default: "smtp")
- DEFAULT_FROM_EMAIL            (recommended; falls back to EMAIL_HOST_USER)

Provider-specific ENV
MAILGUN   - MAILGUN_API_KEY, MAILGUN_SENDER_DOMAIN
POSTMARK  - POSTMARK_SERVER_TOKEN
SENDGRID  - SENDGRID_API_KEY
SMTP      - EMAIL_HOST, EMAIL_PORT, EMAIL_HOST_USER, EMAIL_HOST_PASSWORD, EMAIL_USE_TLS/SSL

This module is imported by settings, so it must not touch django.conf.
"""

from __future__ import annotations

import os
from typing import Dict


def _env(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _bool_env(name: str, default: str = "0") -> bool:
    v = _env(name, default).lower()
    return v in ("1", "true", "yes", "on")


def get_email_settings() -> Dict[str, object]:
    """
    Returns a dict of Django settings to merge into the settings module:

        globals().update(get_email_settings())
    """
    provider = _env("STOREFRONT_EMAIL_PROVIDER", "smtp").lower()

    base: Dict[str, object] = {
        "DEFAULT_FROM_EMAIL": _env("DEFAULT_FROM_EMAIL") or _env("EMAIL_HOST_USER") or "no-reply@localhost",
    }

    if provider == "console":
        base["EMAIL_BACKEND"] = "django.core.mail.backends.console.EmailBackend"
        return base

    if provider == "mailgun":
        base.update(
            {
                "EMAIL_BACKEND": "anymail.backends.mailgun.EmailBackend",
                "ANYMAIL": {
                    "MAILGUN_API_KEY": _env("MAILGUN_API_KEY"),
                    "MAILGUN_SENDER_DOMAIN": _env("MAILGUN_SENDER_DOMAIN"),
                },
            }
        )
        return base

    if provider == "postmark":
        base.update(
            {
                "EMAIL_BACKEND": "anymail.backends.postmark.EmailBackend",
                "ANYMAIL": {
                    "POSTMARK_SERVER_TOKEN": _env("POSTMARK_SERVER_TOKEN"),
                },
            }
        )
        return base

    if provider == "sendgrid":
        base.update(
            {
                "EMAIL_BACKEND": "anymail.backends.sendgrid.EmailBackend",
                "ANYMAIL": {
                    "SENDGRID_API_KEY": _env("SENDGRID_API_KEY"),
                },
            }
        )
        return base

    # --- SMTP (default) ---
    base.update(
        {
            "EMAIL_BACKEND": "django.core.mail.backends.smtp.EmailBackend",
            "EMAIL_HOST": _env("EMAIL_HOST", "smtp.gmail.com"),
            "EMAIL_PORT": int(_env("EMAIL_PORT", "587") or "587"),
            "EMAIL_HOST_USER": _env("EMAIL_HOST_USER"),
            "EMAIL_HOST_PASSWORD": _env("EMAIL_HOST_PASSWORD"),
            "EMAIL_USE_TLS": _bool_env("EMAIL_USE_TLS", "1"),
            "EMAIL_USE_SSL": _bool_env("EMAIL_USE_SSL", "0"),
        }
    )
    return base
