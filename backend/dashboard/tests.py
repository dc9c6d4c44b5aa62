from django.test import TestCase
from django.urls import reverse

from accounts.models import User


class DestinationPageTests(TestCase):
    def setUp(self):
        self.employee = User.objects.create_user(
            username="dashboard_employee",
            password="test12345",
            role=User.Role.EMPLOYEE,
        )
        self.hr = User.objects.create_user(
            username="dashboard_hr",
            password="test12345",
            role=User.Role.HR,
        )

    def test_index_redirects_to_root_destination(self):
        self.client.force_login(self.employee)
        response = self.client.get("/")

        self.assertRedirects(response, reverse("dashboard:home"))

    def test_dashboard_lists_quick_actions_for_role(self):
        self.client.force_login(self.employee)
        response = self.client.get(reverse("dashboard:home"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'href="/leave/history"')
        self.assertNotContains(response, 'href="/recruitment/ats"')
        self.assertNotContains(response, 'href="/leave/approval"')

    def test_destination_page_shows_label_and_breadcrumb(self):
        self.client.force_login(self.employee)
        response = self.client.get("/leave/history")

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "<h1 class=\"h3\">Leave Application History</h1>", html=False)
        self.assertContains(response, '<li class="breadcrumb-item">Leave</li>', html=True)

    def test_employee_is_denied_restricted_group(self):
        self.client.force_login(self.employee)
        response = self.client.get("/recruitment/ats", follow=True)

        self.assertRedirects(response, reverse("dashboard:home"))
        self.assertContains(response, "You do not have permission to access Recruitment.")

    def test_employee_is_denied_restricted_leaf_in_open_group(self):
        self.client.force_login(self.employee)
        response = self.client.get("/leave/approval", follow=True)

        self.assertRedirects(response, reverse("dashboard:home"))
        self.assertContains(response, "You do not have permission to access Leave Approval.")

    def test_hr_can_open_restricted_destination(self):
        self.client.force_login(self.hr)
        response = self.client.get("/recruitment/ats")

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Application Tracking System")

    def test_unknown_destination_is_not_found(self):
        self.client.force_login(self.employee)
        response = self.client.get("/leaves")

        self.assertEqual(response.status_code, 404)
