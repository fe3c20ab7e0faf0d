"""
storefront.accounts.credentials

Credential store: registration and password verification over the Account
table, using Django's password hashers (salted, slow, one-way).

LOCKED RULES
- Plaintext passwords are hashed before they reach the ORM and never logged.
- Unknown email and wrong password fail with the same InvalidCredentials.
"""

from __future__ import annotations

import logging

from django.contrib.auth.hashers import check_password, make_password
from django.db import DatabaseError, IntegrityError, transaction

from storefront.errors import DuplicateEmail, InvalidCredentials, InvalidInput, StoreUnavailable

from .models import Account

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class CredentialStore:
    """Account lookup + password hashing in one narrow interface."""

    def register(self, name: str, email: str, password: str) -> Account:
        email = normalize_email(email)
        name = (name or "").strip()
        if not (name and email and password):
            raise InvalidInput("Name, email and password are required")

        hashed = make_password(password)
        try:
            with transaction.atomic():
                account = Account.objects.create(name=name, email=email, password=hashed)
        except IntegrityError as e:
            # unique(email) is the only constraint a fresh insert can trip
            logger.info("[accounts][register] duplicate email rejected")
            raise DuplicateEmail() from e
        except DatabaseError as e:
            logger.exception("[accounts][register] store failure")
            raise StoreUnavailable() from e

        logger.info("[accounts][register] account_id=%s role=%s", account.id, account.role)
        return account

    def verify(self, email: str, password: str) -> Account:
        email = normalize_email(email)
        try:
            account = Account.objects.filter(email=email).first()
        except DatabaseError as e:
            logger.exception("[accounts][verify] store failure")
            raise StoreUnavailable() from e

        if account is None:
            # Burn one hash so a miss costs the same as a wrong password.
            make_password(password)
            raise InvalidCredentials()

        if not check_password(password, account.password):
            raise InvalidCredentials()
        return account

    def promote(self, email: str, role: str = Account.ROLE_ADMIN) -> Account:
        valid_roles = {value for value, _ in Account.ROLE_CHOICES}
        if role not in valid_roles:
            raise InvalidInput(f"Unknown role '{role}'")

        email = normalize_email(email)
        try:
            updated = Account.objects.filter(email=email).update(role=role)
            account = Account.objects.filter(email=email).first() if updated else None
        except DatabaseError as e:
            logger.exception("[accounts][promote] store failure")
            raise StoreUnavailable() from e

        if account is None:
            raise InvalidInput(f"No account with email {email}")
        logger.info("[accounts][promote] account_id=%s role=%s", account.id, role)
        return account
