"""
storefront.accounts.authentication

DRF glue for bearer tokens. The actual check is the workflow's authenticate
step, so the HTTP path and direct workflow calls share one gate.
"""

from __future__ import annotations

from rest_framework.authentication import BaseAuthentication

from .tokens import parse_bearer


class BearerTokenAuthentication(BaseAuthentication):
    """
    Authorization: Bearer <token>

    Raises MissingToken / InvalidToken / ExpiredToken (rendered by
    storefront.api.exception_handler) instead of falling through to an
    anonymous user. Views that are public set authentication_classes = [].
    """

    keyword = "Bearer"

    def authenticate(self, request):
        from storefront.orders.workflow import default_workflow

        header = request.headers.get("Authorization")
        claims = default_workflow().authenticate(header)
        return claims, parse_bearer(header)

    def authenticate_header(self, request):
        return self.keyword
