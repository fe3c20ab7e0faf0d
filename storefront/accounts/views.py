"""
storefront.accounts.views

POST /api/register  → {message, token, user}
POST /api/login     → {message, token, user}

Both are public; every other API view requires a bearer token.
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .credentials import CredentialStore
from .serializers import AccountSerializer, LoginSerializer, RegisterSerializer
from .tokens import default_token_service

logger = logging.getLogger(__name__)


def _session_payload(account, message: str) -> dict:
    token = default_token_service().issue(account.id, account.email, account.role)
    return {
        "message": message,
        "token": token,
        "user": AccountSerializer(account).data,
    }


class RegisterView(APIView):
    authentication_classes = []
    credentials = CredentialStore()

    def post(self, request, *args, **kwargs):
        ser = RegisterSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        account = self.credentials.register(data["name"], data["email"], data["password"])
        return Response(_session_payload(account, "User registered successfully"), status=status.HTTP_200_OK)


class LoginView(APIView):
    authentication_classes = []
    credentials = CredentialStore()

    def post(self, request, *args, **kwargs):
        ser = LoginSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        account = self.credentials.verify(data["email"], data["password"])
        logger.info("[accounts][login] account_id=%s", account.id)
        return Response(_session_payload(account, "Login successful"), status=status.HTTP_200_OK)
