"""
Register / login over HTTP, plus the promote_admin command.
"""

from __future__ import annotations

import json
from io import StringIO
from unittest import mock

from django.contrib.auth.hashers import check_password
from django.core.management import CommandError, call_command
from django.db import OperationalError
from django.test import Client, TestCase, override_settings

from storefront.accounts.models import Account
from storefront.accounts.tokens import default_token_service

FAST_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


def _post(client, path, payload):
    return client.post(path, data=json.dumps(payload), content_type="application/json")


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class RegisterTests(TestCase):
    def setUp(self):
        self.client = Client()

    def test_register_returns_token_and_customer_user(self):
        r = _post(self.client, "/api/register", {"name": "A", "email": "a@x.com", "password": "p1"})
        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertEqual(data["message"], "User registered successfully")
        self.assertEqual(data["user"]["name"], "A")
        self.assertEqual(data["user"]["email"], "a@x.com")
        self.assertEqual(data["user"]["role"], "customer")
        self.assertNotIn("password", data["user"])

        claims = default_token_service().verify(data["token"])
        self.assertEqual(claims.user_id, data["user"]["id"])
        self.assertEqual(claims.role, "customer")

    def test_password_is_stored_hashed(self):
        _post(self.client, "/api/register", {"name": "A", "email": "a@x.com", "password": "p1"})
        account = Account.objects.get(email="a@x.com")
        self.assertNotEqual(account.password, "p1")
        self.assertTrue(check_password("p1", account.password))

    def test_duplicate_email_is_rejected(self):
        _post(self.client, "/api/register", {"name": "A", "email": "a@x.com", "password": "p1"})
        r = _post(self.client, "/api/register", {"name": "B", "email": "a@x.com", "password": "p2"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"error": "Email already exists"})
        self.assertEqual(Account.objects.count(), 1)

    def test_duplicate_email_ignores_case(self):
        _post(self.client, "/api/register", {"name": "A", "email": "a@x.com", "password": "p1"})
        r = _post(self.client, "/api/register", {"name": "B", "email": "A@X.COM", "password": "p2"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "Email already exists")

    def test_role_in_body_is_ignored(self):
        r = _post(
            self.client,
            "/api/register",
            {"name": "A", "email": "a@x.com", "password": "p1", "role": "admin"},
        )
        self.assertEqual(r.json()["user"]["role"], "customer")

    def test_missing_fields_are_rejected(self):
        r = _post(self.client, "/api/register", {"email": "a@x.com"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("error", r.json())
        self.assertIn("name", r.json()["fields"])
        self.assertEqual(Account.objects.count(), 0)

    def test_store_failure_is_a_database_error(self):
        with mock.patch.object(Account.objects, "create", side_effect=OperationalError("db down")):
            r = _post(self.client, "/api/register", {"name": "A", "email": "a@x.com", "password": "p1"})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Database error"})


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class LoginTests(TestCase):
    def setUp(self):
        self.client = Client()
        registered = _post(self.client, "/api/register", {"name": "A", "email": "a@x.com", "password": "p1"})
        self.registered_id = registered.json()["user"]["id"]

    def test_login_with_correct_password(self):
        r = _post(self.client, "/api/login", {"email": "a@x.com", "password": "p1"})
        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertEqual(data["message"], "Login successful")
        self.assertEqual(data["user"]["id"], self.registered_id)
        self.assertEqual(data["user"]["role"], "customer")

        claims = default_token_service().verify(data["token"])
        self.assertEqual(claims.user_id, self.registered_id)
        self.assertEqual(claims.role, "customer")
        self.assertEqual(claims.email, "a@x.com")

    def test_login_email_is_case_insensitive(self):
        r = _post(self.client, "/api/login", {"email": "  A@X.com ", "password": "p1"})
        self.assertEqual(r.status_code, 200)

    def test_wrong_password_and_unknown_email_look_the_same(self):
        wrong = _post(self.client, "/api/login", {"email": "a@x.com", "password": "nope"})
        unknown = _post(self.client, "/api/login", {"email": "ghost@x.com", "password": "p1"})
        self.assertEqual(wrong.status_code, 400)
        self.assertEqual(unknown.status_code, 400)
        self.assertEqual(wrong.json(), {"error": "Invalid credentials"})
        self.assertEqual(wrong.json(), unknown.json())

    def test_admin_login_carries_admin_role(self):
        Account.objects.filter(email="a@x.com").update(role="admin")
        r = _post(self.client, "/api/login", {"email": "a@x.com", "password": "p1"})
        self.assertEqual(r.json()["user"]["role"], "admin")
        self.assertTrue(default_token_service().verify(r.json()["token"]).is_admin)


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class PromoteAdminCommandTests(TestCase):
    def setUp(self):
        Account.objects.create(name="Boss", email="boss@x.com", password="!")

    def test_promotes_existing_account(self):
        out = StringIO()
        call_command("promote_admin", "boss@x.com", stdout=out)
        self.assertEqual(Account.objects.get(email="boss@x.com").role, "admin")
        self.assertIn("boss@x.com is now admin", out.getvalue())

    def test_demote_back_to_customer(self):
        call_command("promote_admin", "boss@x.com", stdout=StringIO())
        call_command("promote_admin", "boss@x.com", "--role", "customer", stdout=StringIO())
        self.assertEqual(Account.objects.get(email="boss@x.com").role, "customer")

    def test_unknown_email_fails(self):
        with self.assertRaises(CommandError):
            call_command("promote_admin", "ghost@x.com", stdout=StringIO())

    def test_unknown_role_fails(self):
        with self.assertRaises(CommandError):
            call_command("promote_admin", "boss@x.com", "--role", "owner", stdout=StringIO())
        self.assertEqual(Account.objects.get(email="boss@x.com").role, "customer")
