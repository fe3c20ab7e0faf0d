"""
storefront.errors

Error taxonomy shared by accounts, orders, and the HTTP layer.

Every failure the API reports maps to one of these kinds; the DRF exception
handler in storefront.api turns them into {"error": <message>} responses.

    ValidationError     400  bad input, duplicate email, bad credentials
    AuthError           401  missing token / 403 invalid or expired token
    AuthorizationError  403  wrong role
    OrderNotFound       404  status update for an unknown order
    StoreError          500  any persistence failure
    NotificationError   --   logged only, never surfaced
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Base for every error that has a caller-visible shape."""

    http_status = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, *, fields: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.fields = fields
        super().__init__(self.message)


# ---- 400 ----

class ValidationError(StorefrontError):
    http_status = 400
    default_message = "Invalid input"


class InvalidInput(ValidationError):
    pass


class DuplicateEmail(ValidationError):
    default_message = "Email already exists"


class InvalidCredentials(ValidationError):
    # Same message for unknown email and wrong password.
    default_message = "Invalid credentials"


# ---- 401 / 403 ----

class AuthError(StorefrontError):
    http_status = 403
    default_message = "Invalid token"


class MissingToken(AuthError):
    http_status = 401
    default_message = "Access token required"


class InvalidToken(AuthError):
    pass


class ExpiredToken(AuthError):
    default_message = "Token expired"


class AuthorizationError(StorefrontError):
    http_status = 403
    default_message = "Forbidden"


class AdminRequired(AuthorizationError):
    default_message = "Admin access required"


# ---- 404 ----

class OrderNotFound(StorefrontError):
    http_status = 404
    default_message = "Order not found"


# ---- 500 ----

class StoreError(StorefrontError):
    http_status = 500
    default_message = "Database error"


class StoreUnavailable(StoreError):
    pass


# ---- never surfaced ----

class NotificationError(StorefrontError):
    default_message = "Notification failed"
