"""
storefront.accounts.tokens

Session tokens: a signed, timestamped claim {userId, email, role} built on
django.core.signing. Stateless; the only state is one process-wide secret.

Token lifetime is absolute: issuance timestamp (inside the signature) plus ttl.
Claims are only read after loads() has verified the signature and the age.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Any, Optional

from django.conf import settings
from django.core import signing

from storefront.errors import ExpiredToken, InvalidToken, MissingToken

logger = logging.getLogger(__name__)

TOKEN_SALT = "storefront.accounts.session"
DEFAULT_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class Claims:
    user_id: int
    email: str
    role: str

    # DRF treats request.user as authenticated when this is truthy.
    is_authenticated = True

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def parse_bearer(header: Optional[str]) -> str:
    """
    Return the token from 'Bearer <token>'.

    Absent header or a bare 'Bearer' gives "" (treated as missing). Any other
    scheme or extra parts is a presented-but-unusable credential: InvalidToken.
    """
    parts = (header or "").split()
    if not parts:
        return ""
    if parts[0].lower() != "bearer" or len(parts) > 2:
        raise InvalidToken()
    return parts[1] if len(parts) == 2 else ""


class SessionTokenService:
    def __init__(self, secret: str, *, ttl: timedelta = DEFAULT_TTL):
        if not secret:
            raise ValueError("token secret is required")
        self._secret = secret
        self.ttl = ttl

    def issue(self, user_id: int, email: str, role: str) -> str:
        payload = {"userId": user_id, "email": email, "role": role}
        return signing.dumps(payload, key=self._secret, salt=TOKEN_SALT)

    def verify(self, token: Optional[str]) -> Claims:
        token = (token or "").strip()
        if not token:
            raise MissingToken()

        try:
            payload = signing.loads(token, key=self._secret, salt=TOKEN_SALT, max_age=self.ttl)
        except signing.SignatureExpired as e:
            raise ExpiredToken() from e
        except signing.BadSignature as e:
            raise InvalidToken() from e
        except (ValueError, TypeError) as e:
            # signature ok but body is not the JSON we wrote
            raise InvalidToken() from e

        return _claims_from(payload)


def _claims_from(payload: Any) -> Claims:
    if not isinstance(payload, dict):
        raise InvalidToken()
    user_id = payload.get("userId")
    email = payload.get("email")
    role = payload.get("role")
    if not isinstance(user_id, int) or not isinstance(email, str) or not isinstance(role, str):
        raise InvalidToken()
    return Claims(user_id=user_id, email=email, role=role)


@lru_cache(maxsize=1)
def default_token_service() -> SessionTokenService:
    """Process-wide token service, keyed once from settings."""
    ttl_hours = getattr(settings, "STOREFRONT_TOKEN_TTL_HOURS", 24)
    secret = getattr(settings, "STOREFRONT_TOKEN_SECRET", "") or settings.SECRET_KEY
    return SessionTokenService(secret, ttl=timedelta(hours=ttl_hours))
