from __future__ import annotations

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from accounts.identity import LogoutError, LogoutResult
from accounts.models import User

from .catalog import MENU_CATALOG, Destination, find_destination, find_path_chain, iter_destinations, validate_catalog
from .checks import check_menu_catalog
from .conf import navigation_settings
from .controller import ClickKind, NavigationController
from .filtering import filter_destinations, navigable_destinations
from .matching import active_trail, has_active_descendant, is_active
from .session import EXPANDED_SESSION_KEY, LAYOUT_SESSION_KEY
from .state import ExpansionState, LayoutMode

HR_ONLY = frozenset({"admin", "hr"})

SAMPLE_CATALOG = (
    Destination(id="dashboard", label="Dashboard", icon="bi-house", path="/dashboard"),
    Destination(
        id="leave",
        label="Leave",
        icon="bi-x-circle",
        path="/leave",
        children=(
            Destination(id="leave-history", label="Leave Application History", icon="bi-clock", path="/leave/history"),
            Destination(
                id="leave-approval",
                label="Leave Approval",
                icon="bi-check-circle",
                path="/leave/approval",
                allowed_roles=HR_ONLY,
            ),
        ),
    ),
    Destination(
        id="payroll",
        label="Payroll",
        icon="bi-credit-card",
        path="/payroll",
        children=(
            Destination(
                id="payroll-reports",
                label="Payroll Reports",
                icon="bi-bar-chart",
                children=(
                    Destination(id="payroll-tax", label="Tax Reports", icon="bi-calculator", path="/payroll/reports/tax"),
                ),
            ),
            Destination(id="payslips", label="Payslips", icon="bi-file-text", path="/payroll/payslips"),
        ),
    ),
    Destination(
        id="recruitment",
        label="Recruitment",
        icon="bi-search",
        path="/recruitment",
        allowed_roles=HR_ONLY,
        children=(Destination(id="job-posting", label="Job Posting", icon="bi-plus-lg", path="/recruitment/job-posting"),),
    ),
    Destination(
        id="audit",
        label="Audit",
        icon="bi-shield",
        children=(
            Destination(id="audit-logs", label="Audit Logs", icon="bi-clipboard", path="/audit/logs", allowed_roles=HR_ONLY),
        ),
    ),
    Destination(id="inbox", label="Inbox", icon="bi-chat", path="/inbox", badge="2"),
)


def _ids(tree):
    return [node.id for node in iter_destinations(tree)]


class RoleFilterTests(SimpleTestCase):
    def test_node_is_kept_only_when_unrestricted_or_role_allowed(self):
        for role in ("admin", "hr", "employee", None):
            visible_ids = set(_ids(filter_destinations(SAMPLE_CATALOG, role)))
            for node in iter_destinations(SAMPLE_CATALOG):
                parent_hidden = node.id == "job-posting" and role not in HR_ONLY
                expected = (node.allowed_roles is None or role in node.allowed_roles) and not parent_hidden
                self.assertEqual(node.id in visible_ids, expected, f"{node.id} for role {role}")

    def test_filter_preserves_sibling_order_and_nesting(self):
        visible = filter_destinations(SAMPLE_CATALOG, "admin")
        self.assertEqual(_ids(visible), _ids(SAMPLE_CATALOG))
        payroll = find_destination(visible, "payroll")
        self.assertEqual([child.id for child in payroll.children], ["payroll-reports", "payslips"])

    def test_restricted_destination_hidden_from_employee(self):
        visible_ids = _ids(filter_destinations(SAMPLE_CATALOG, "employee"))
        self.assertNotIn("recruitment", visible_ids)
        self.assertNotIn("leave-approval", visible_ids)
        self.assertIn("leave-history", visible_ids)

    def test_unknown_or_missing_role_only_sees_unrestricted_destinations(self):
        for role in (None, "", "superuser"):
            visible_ids = _ids(filter_destinations(SAMPLE_CATALOG, role))
            self.assertNotIn("recruitment", visible_ids)
            self.assertNotIn("audit-logs", visible_ids)
            self.assertIn("inbox", visible_ids)

    def test_group_emptied_by_filter_is_kept_by_default(self):
        audit = find_destination(filter_destinations(SAMPLE_CATALOG, "employee"), "audit")
        self.assertIsNotNone(audit)
        self.assertEqual(audit.children, ())

    def test_group_emptied_by_filter_can_be_pruned(self):
        visible = filter_destinations(SAMPLE_CATALOG, "employee", prune_empty_groups=True)
        self.assertIsNone(find_destination(visible, "audit"))
        self.assertIsNotNone(find_destination(visible, "inbox"))

    def test_filter_does_not_mutate_catalog(self):
        filter_destinations(SAMPLE_CATALOG, "employee")
        leave = find_destination(SAMPLE_CATALOG, "leave")
        self.assertEqual(len(leave.children), 2)

    def test_navigable_destinations_lists_visible_leaves_in_order(self):
        paths = [node.path for node in navigable_destinations(SAMPLE_CATALOG, "employee")]
        self.assertEqual(
            paths,
            ["/dashboard", "/leave/history", "/payroll/reports/tax", "/payroll/payslips", "/inbox"],
        )


class RouteMatcherTests(SimpleTestCase):
    def test_exact_match_is_active(self):
        for path in ("/leave", "/leave/history", "/inbox"):
            self.assertTrue(is_active(path, path))

    def test_segment_aligned_prefix_match(self):
        self.assertTrue(is_active("/leave", "/leave/history"))
        self.assertFalse(is_active("/leave", "/leaves"))
        self.assertFalse(is_active("/leave/history", "/leave"))

    def test_root_path_only_matches_exactly(self):
        self.assertTrue(is_active("/dashboard", "/dashboard"))
        self.assertFalse(is_active("/dashboard", "/dashboard/x"))
        self.assertTrue(is_active("/dashboard", "/dashboard/x", root_path="/home"))

    def test_trailing_slashes_are_ignored(self):
        self.assertTrue(is_active("/leave", "/leave/"))
        self.assertTrue(is_active("/leave/", "/leave/history/"))
        self.assertTrue(is_active("/dashboard", "/dashboard/"))

    def test_empty_or_missing_inputs_are_never_active(self):
        self.assertFalse(is_active("", "/leave"))
        self.assertFalse(is_active(None, "/leave"))
        self.assertFalse(is_active("/leave", ""))
        self.assertFalse(is_active("/leave", None))

    def test_slash_path_matches_only_itself(self):
        self.assertTrue(is_active("/", "/"))
        self.assertFalse(is_active("/", "/leave"))

    def test_active_descendant_found_two_levels_deep(self):
        payroll = find_destination(SAMPLE_CATALOG, "payroll")
        self.assertTrue(has_active_descendant(payroll, "/payroll/reports/tax"))
        self.assertFalse(has_active_descendant(payroll, "/leave/history"))

    def test_active_descendant_ignores_node_itself_and_pathless_nodes(self):
        leaf = find_destination(SAMPLE_CATALOG, "inbox")
        self.assertFalse(has_active_descendant(leaf, "/inbox"))
        audit = find_destination(SAMPLE_CATALOG, "audit")
        self.assertFalse(has_active_descendant(audit, "/audit"))

    def test_active_trail_ends_at_most_specific_destination(self):
        trail = active_trail(SAMPLE_CATALOG, "/payroll/reports/tax")
        self.assertEqual([node.id for node in trail], ["payroll", "payroll-reports", "payroll-tax"])
        self.assertEqual(active_trail(SAMPLE_CATALOG, "/nowhere"), ())


class ExpansionStateTests(SimpleTestCase):
    def test_toggle_twice_restores_original(self):
        state = ExpansionState.of(["leave"])
        self.assertEqual(state.toggle("payroll").toggle("payroll"), state)
        self.assertEqual(state.toggle("leave").toggle("leave"), state)

    def test_toggles_are_independent(self):
        state = ExpansionState().toggle("leave").toggle("payroll")
        self.assertTrue(state.is_expanded("leave"))
        self.assertTrue(state.is_expanded("payroll"))
        state = state.toggle("leave")
        self.assertFalse(state.is_expanded("leave"))
        self.assertTrue(state.is_expanded("payroll"))

    def test_layout_mode_flips(self):
        self.assertEqual(LayoutMode.EXPANDED.toggle(), LayoutMode.COLLAPSED)
        self.assertEqual(LayoutMode.COLLAPSED.toggle(), LayoutMode.EXPANDED)


class CatalogValidationTests(SimpleTestCase):
    def test_shipped_catalog_is_valid(self):
        validate_catalog(MENU_CATALOG)
        self.assertEqual(check_menu_catalog(None), [])

    def test_shipped_catalog_has_root_destination(self):
        self.assertEqual(find_path_chain(MENU_CATALOG, "/dashboard")[0].id, "dashboard")

    def test_unknown_navigation_setting_is_reported(self):
        with self.settings(NAVIGATION={"ROOT_PATH": "/dashboard", "COLLAPSE_ON_LOAD": True}):
            with self.assertRaises(ImproperlyConfigured):
                navigation_settings()
            errors = check_menu_catalog(None)
        self.assertEqual([error.id for error in errors], ["navigation.E002"])
        self.assertIn("COLLAPSE_ON_LOAD", errors[0].msg)

    def test_duplicate_ids_are_rejected(self):
        tree = (
            Destination(id="inbox", label="Inbox", icon="bi-chat", path="/inbox"),
            Destination(id="inbox", label="Inbox again", icon="bi-chat", path="/inbox-2"),
        )
        with self.assertRaises(ImproperlyConfigured):
            validate_catalog(tree)

    def test_shared_child_is_rejected(self):
        shared = Destination(id="shared", label="Shared", icon="bi-box", path="/shared")
        tree = (
            Destination(id="a", label="A", icon="bi-box", children=(shared,)),
            Destination(id="b", label="B", icon="bi-box", children=(shared,)),
        )
        with self.assertRaises(ImproperlyConfigured):
            validate_catalog(tree)

    def test_empty_or_unknown_role_sets_are_rejected(self):
        for roles in (frozenset(), frozenset({"manager"})):
            tree = (Destination(id="x", label="X", icon="bi-box", path="/x", allowed_roles=roles),)
            with self.assertRaises(ImproperlyConfigured):
                validate_catalog(tree)


class FakeIdentity:
    def __init__(self, result: LogoutResult):
        self.result = result
        self.calls = 0

    def logout(self) -> LogoutResult:
        self.calls += 1
        return self.result


class RaisingIdentity:
    def logout(self) -> LogoutResult:
        raise RuntimeError("session backend unavailable")


class NavigationControllerTests(SimpleTestCase):
    def _controller(self, **kwargs):
        options = {"role": "employee", "location": "/dashboard"}
        options.update(kwargs)
        return NavigationController(SAMPLE_CATALOG, **options)

    def _rendered(self, items, destination_id):
        for item in items:
            if item.id == destination_id:
                return item
            found = self._rendered(item.children, destination_id)
            if found is not None:
                return found
        return None

    def test_child_active_propagates_to_group(self):
        controller = self._controller(location="/leave/history", expansion=ExpansionState.of(["leave"]))
        items = controller.render()
        leave = self._rendered(items, "leave")
        history = self._rendered(items, "leave-history")
        self.assertTrue(leave.child_active)
        self.assertTrue(history.active)
        self.assertTrue(leave.expanded)
        self.assertEqual([child.id for child in leave.children], ["leave-history"])

    def test_collapsed_group_still_reports_active_descendant(self):
        items = self._controller(location="/payroll/reports/tax").render()
        payroll = self._rendered(items, "payroll")
        self.assertFalse(payroll.expanded)
        self.assertTrue(payroll.child_active)
        self.assertEqual(payroll.children, ())

    def test_collapsed_layout_hides_children_and_labels(self):
        controller = self._controller(expansion=ExpansionState.of(["payroll"]), layout=LayoutMode.COLLAPSED)
        payroll = self._rendered(controller.render(), "payroll")
        self.assertTrue(payroll.expanded)
        self.assertFalse(payroll.show_children)
        self.assertFalse(payroll.show_label)
        self.assertEqual(payroll.children, ())

    def test_restricted_destination_absent_from_render(self):
        items = self._controller(expansion=ExpansionState.of(["leave"])).render()
        self.assertIsNone(self._rendered(items, "recruitment"))
        self.assertIsNone(self._rendered(items, "leave-approval"))

    def test_emptied_group_renders_as_group(self):
        audit = self._rendered(self._controller().render(), "audit")
        self.assertTrue(audit.is_group)
        self.assertEqual(audit.children, ())

    def test_clicking_group_toggles_instead_of_navigating(self):
        controller = self._controller()
        outcome = controller.on_navigate("leave")
        self.assertEqual(outcome.kind, ClickKind.TOGGLE)
        self.assertIsNone(outcome.path)
        self.assertTrue(outcome.expansion.is_expanded("leave"))
        self.assertFalse(controller.on_navigate("leave").expansion.is_expanded("leave"))

    def test_clicking_leaf_requests_navigation(self):
        outcome = self._controller().on_navigate("leave-history")
        self.assertEqual(outcome.kind, ClickKind.NAVIGATE)
        self.assertEqual(outcome.path, "/leave/history")

    def test_hidden_or_unknown_destinations_are_ignored(self):
        controller = self._controller()
        self.assertEqual(controller.on_navigate("recruitment").kind, ClickKind.IGNORED)
        self.assertEqual(controller.on_navigate("nope").kind, ClickKind.IGNORED)
        self.assertEqual(controller.on_toggle_group("recruitment"), ExpansionState())
        self.assertEqual(controller.on_toggle_group("inbox"), ExpansionState())

    def test_toggle_group_in_collapsed_layout_changes_membership_only(self):
        controller = self._controller(layout=LayoutMode.COLLAPSED)
        self.assertTrue(controller.on_toggle_group("leave").is_expanded("leave"))
        leave = self._rendered(controller.render(), "leave")
        self.assertTrue(leave.expanded)
        self.assertFalse(leave.show_children)

        controller.on_toggle_layout()
        leave = self._rendered(controller.render(), "leave")
        self.assertTrue(leave.show_children)
        self.assertEqual([child.id for child in leave.children], ["leave-history"])

    def test_toggle_layout_does_not_touch_expansion(self):
        controller = self._controller(expansion=ExpansionState.of(["leave"]))
        self.assertEqual(controller.on_toggle_layout(), LayoutMode.COLLAPSED)
        self.assertTrue(controller.expansion.is_expanded("leave"))

    def test_logout_failure_still_redirects_to_login(self):
        identity = FakeIdentity(LogoutResult.failure(LogoutError("server unreachable")))
        outcome = self._controller().on_logout(identity)
        self.assertEqual(identity.calls, 1)
        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.redirect_to, "/login")

    def test_logout_that_raises_still_redirects_to_login(self):
        with self.assertLogs("navigation.controller", level="ERROR"):
            outcome = self._controller().on_logout(RaisingIdentity())
        self.assertFalse(outcome.ok)
        self.assertIsInstance(outcome.result.error, LogoutError)
        self.assertIn("session backend unavailable", str(outcome.result.error))
        self.assertEqual(outcome.redirect_to, "/login")

    def test_logout_success_redirects_to_login(self):
        outcome = self._controller().on_logout(FakeIdentity(LogoutResult.success()))
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.redirect_to, "/login")

    def test_trail_uses_only_visible_destinations(self):
        controller = self._controller(location="/leave/approval")
        self.assertEqual([node.id for node in controller.trail()], ["leave"])


class SidebarInteractionTests(TestCase):
    def setUp(self):
        self.employee = User.objects.create_user(
            username="nav_employee",
            password="test12345",
            first_name="Eli",
            last_name="Mendes",
            role=User.Role.EMPLOYEE,
        )
        self.hr = User.objects.create_user(
            username="nav_hr",
            password="test12345",
            role=User.Role.HR,
        )

    def test_employee_sidebar_hides_restricted_groups(self):
        self.client.force_login(self.employee)
        response = self.client.get(reverse("dashboard:home"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'data-destination="leave"')
        self.assertContains(response, 'data-destination="payroll"')
        self.assertNotContains(response, 'data-destination="recruitment"')
        self.assertNotContains(response, 'data-destination="onboarding"')
        self.assertContains(response, "Eli Mendes")

    def test_hr_sidebar_shows_restricted_groups(self):
        self.client.force_login(self.hr)
        response = self.client.get(reverse("dashboard:home"))

        self.assertContains(response, 'data-destination="recruitment"')
        self.assertContains(response, 'data-destination="onboarding"')

    def test_toggling_group_expands_it_in_session(self):
        self.client.force_login(self.employee)
        response = self.client.post(
            reverse("navigation:toggle_group", args=["leave"]),
            {"next": "/leave/history"},
        )

        self.assertRedirects(response, "/leave/history")
        self.assertEqual(self.client.session[EXPANDED_SESSION_KEY], ["leave"])

        page = self.client.get("/leave/history")
        self.assertContains(page, 'data-destination="leave-history"')
        self.assertContains(page, 'href="/leave/history" aria-current="page"')
        self.assertNotContains(page, 'data-destination="leave-approval"')

    def test_toggling_group_twice_collapses_it(self):
        self.client.force_login(self.employee)
        url = reverse("navigation:toggle_group", args=["leave"])
        self.client.post(url)
        self.client.post(url)

        self.assertEqual(self.client.session[EXPANDED_SESSION_KEY], [])

    def test_collapsed_layout_hides_expanded_children(self):
        self.client.force_login(self.employee)
        self.client.post(reverse("navigation:toggle_group", args=["payroll"]))
        self.client.post(reverse("navigation:toggle_layout"))

        self.assertEqual(self.client.session[LAYOUT_SESSION_KEY], "collapsed")
        self.assertEqual(self.client.session[EXPANDED_SESSION_KEY], ["payroll"])
        page = self.client.get("/payroll/payslips")
        self.assertContains(page, 'data-destination="payroll"')
        self.assertNotContains(page, 'data-destination="payslip-generation"')

    def test_go_to_leaf_redirects_to_its_path(self):
        self.client.force_login(self.employee)
        response = self.client.get(reverse("navigation:go", args=["leave-history"]))

        self.assertRedirects(response, "/leave/history")

    def test_go_to_group_toggles_without_navigating(self):
        self.client.force_login(self.employee)
        response = self.client.get(reverse("navigation:go", args=["payroll"]))

        self.assertRedirects(response, reverse("dashboard:home"))
        self.assertEqual(self.client.session[EXPANDED_SESSION_KEY], ["payroll"])

    def test_toggle_ignores_external_next_url(self):
        self.client.force_login(self.employee)
        response = self.client.post(
            reverse("navigation:toggle_layout"),
            {"next": "https://example.com/phish"},
        )

        self.assertRedirects(response, reverse("dashboard:home"))

    def test_toggle_requires_post(self):
        self.client.force_login(self.employee)
        response = self.client.get(reverse("navigation:toggle_layout"))

        self.assertEqual(response.status_code, 405)
