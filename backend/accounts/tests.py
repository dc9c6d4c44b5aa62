from __future__ import annotations

from io import StringIO
from unittest import mock

from django.contrib.messages import get_messages
from django.core.management import call_command
from django.db import DatabaseError
from django.test import RequestFactory, SimpleTestCase, TestCase
from django.urls import reverse

from .identity import RequestIdentityProvider
from .models import User
from .roles import Role, normalize_role


class RoleNormalizationTests(SimpleTestCase):
    def test_known_roles_are_case_insensitive(self):
        self.assertEqual(normalize_role("HR"), Role.HR)
        self.assertEqual(normalize_role(" Admin "), Role.ADMIN)
        self.assertEqual(normalize_role("employee"), Role.EMPLOYEE)

    def test_unknown_roles_mean_no_role(self):
        for value in (None, "", "manager", 3):
            self.assertIsNone(normalize_role(value))


class LoginLogoutTests(TestCase):
    def setUp(self):
        self.employee = User.objects.create_user(
            username="employee_login",
            password="test12345",
            role=User.Role.EMPLOYEE,
        )

    def test_login_redirects_to_dashboard(self):
        response = self.client.post(
            reverse("accounts:login"),
            {"username": "employee_login", "password": "test12345"},
        )

        self.assertRedirects(response, reverse("dashboard:home"))

    def test_anonymous_user_is_sent_to_login(self):
        response = self.client.get(reverse("dashboard:home"))

        self.assertRedirects(response, f"{reverse('accounts:login')}?next={reverse('dashboard:home')}")

    def test_logout_redirects_to_login(self):
        self.client.force_login(self.employee)
        response = self.client.post(reverse("accounts:logout"), follow=True)

        self.assertRedirects(response, "/login")
        self.assertContains(response, "Logged out successfully.")
        self.assertNotIn("_auth_user_id", self.client.session)

    def test_failed_logout_still_redirects_to_login(self):
        self.client.force_login(self.employee)
        with mock.patch("accounts.identity.auth_logout", side_effect=DatabaseError("session store unavailable")):
            response = self.client.post(reverse("accounts:logout"))

        self.assertRedirects(response, "/login", fetch_redirect_response=False)
        messages = [str(message) for message in get_messages(response.wsgi_request)]
        self.assertIn("Signed out locally, but the server session could not be closed.", messages)

    def test_unexpected_logout_error_still_redirects_to_login(self):
        self.client.force_login(self.employee)
        with mock.patch("accounts.identity.auth_logout", side_effect=RuntimeError("cache backend unavailable")):
            response = self.client.post(reverse("accounts:logout"))

        self.assertRedirects(response, "/login", fetch_redirect_response=False)
        messages = [str(message) for message in get_messages(response.wsgi_request)]
        self.assertIn("Signed out locally, but the server session could not be closed.", messages)

    def test_logout_requires_post(self):
        self.client.force_login(self.employee)
        response = self.client.get(reverse("accounts:logout"))

        self.assertEqual(response.status_code, 405)


class RequestIdentityProviderTests(TestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_anonymous_request_has_no_role(self):
        request = self.factory.get("/dashboard")
        request.user = mock.Mock(is_authenticated=False)
        identity = RequestIdentityProvider(request)

        self.assertIsNone(identity.role)
        self.assertEqual(identity.display_name, "")

    def test_role_and_display_name_come_from_user(self):
        user = User.objects.create_user(
            username="hr_identity",
            password="test12345",
            first_name="Harper",
            last_name="Reyes",
            role=User.Role.HR,
        )
        request = self.factory.get("/dashboard")
        request.user = user
        identity = RequestIdentityProvider(request)

        self.assertEqual(identity.role, Role.HR)
        self.assertEqual(identity.display_name, "Harper Reyes")


class BootstrapConsoleCommandTests(TestCase):
    def test_creates_one_account_per_role_once(self):
        call_command("bootstrap_console", stdout=StringIO())
        output = StringIO()
        call_command("bootstrap_console", stdout=output)

        self.assertEqual(
            sorted(User.objects.values_list("role", flat=True)),
            sorted([User.Role.ADMIN, User.Role.EMPLOYEE, User.Role.HR]),
        )
        self.assertTrue(User.objects.get(username="admin").is_superuser)
        self.assertIn("already exists", output.getvalue())
