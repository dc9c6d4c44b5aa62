from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from django.core.exceptions import ImproperlyConfigured

from accounts.roles import ALL_ROLES, PEOPLE_OPS_ROLES, Role


@dataclass(frozen=True)
class Destination:
    id: str
    label: str
    icon: str
    path: str | None = None
    allowed_roles: frozenset[str] | None = None
    children: tuple[Destination, ...] = ()
    badge: str | None = None

    @property
    def is_group(self) -> bool:
        return len(self.children) > 0

    def walk(self) -> Iterator[Destination]:
        """Yield this destination and every descendant, pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def descendants(self) -> Iterator[Destination]:
        for child in self.children:
            yield from child.walk()


def _group(id: str, label: str, icon: str, path: str, *children: Destination, allowed_roles=None) -> Destination:
    return Destination(id=id, label=label, icon=icon, path=path, allowed_roles=allowed_roles, children=children)


MENU_CATALOG: tuple[Destination, ...] = (
    Destination(id="dashboard", label="Dashboard", icon="bi-house", path="/dashboard"),
    _group(
        "organizations",
        "Organization",
        "bi-building",
        "/organizations",
        Destination(id="org-overview", label="Overview", icon="bi-bar-chart", path="/organizations/overview"),
        Destination(id="org-list", label="All Companies", icon="bi-building", path="/organizations"),
        Destination(id="domains", label="Domains", icon="bi-globe", path="/organizations/domains"),
    ),
    _group(
        "recruitment",
        "Recruitment",
        "bi-search",
        "/recruitment",
        Destination(id="job-requisition", label="Job Requisition Management", icon="bi-file-text", path="/recruitment/job-requisition"),
        Destination(id="job-posting", label="Job Posting & Advertisement", icon="bi-plus-lg", path="/recruitment/job-posting"),
        Destination(id="application-tracking", label="Application Tracking System", icon="bi-search", path="/recruitment/ats"),
        Destination(id="interview-management", label="Interview Management", icon="bi-calendar", path="/recruitment/interviews"),
        Destination(id="candidate-registration", label="Candidate Registration", icon="bi-person-plus", path="/recruitment/candidates"),
        Destination(id="hiring-analytics", label="Hiring Analytics Dashboard", icon="bi-bar-chart", path="/recruitment/analytics"),
        Destination(id="recruitment-budget", label="Recruitment Budget Tracker", icon="bi-currency-dollar", path="/recruitment/budget"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    _group(
        "onboarding",
        "Onboarding",
        "bi-person-plus",
        "/onboarding",
        Destination(id="offer-letter", label="Offer Letter Management", icon="bi-file-text", path="/onboarding/offer-letter"),
        Destination(id="pre-boarding", label="Pre-boarding Documentation", icon="bi-clipboard", path="/onboarding/pre-boarding"),
        Destination(
            id="background-verification",
            label="Background Verification",
            icon="bi-shield",
            path="/onboarding/background-verification",
        ),
        Destination(id="joining-formalities", label="Joining Formalities", icon="bi-check-circle", path="/onboarding/joining-formalities"),
        Destination(id="induction-orientation", label="Induction & Orientation", icon="bi-people", path="/onboarding/induction"),
        Destination(id="task-checklist", label="Task & Checklist Tracking", icon="bi-clipboard", path="/onboarding/tasks"),
        Destination(id="profile-creation", label="Employee Profile Creation", icon="bi-person", path="/onboarding/profile-creation"),
        Destination(id="asset-allocation", label="Asset Allocation", icon="bi-box", path="/onboarding/asset-allocation"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    _group(
        "employee",
        "Employee Management",
        "bi-people",
        "/employee-profile",
        Destination(id="employee-profiles", label="Employee Profiles", icon="bi-people", path="/employee-profile"),
        Destination(id="employee-directory", label="Employee Directory", icon="bi-people", path="/employee/directory"),
        Destination(id="profile-management", label="Profile Management", icon="bi-person", path="/employee/profile-management"),
        Destination(id="document-management", label="Document Management", icon="bi-file-text", path="/employee/documents"),
        Destination(
            id="access-control",
            label="Access Control",
            icon="bi-shield",
            path="/employee/access-control",
            allowed_roles=frozenset({Role.ADMIN}),
        ),
        Destination(
            id="audit-logs",
            label="Audit Logs",
            icon="bi-clipboard",
            path="/employee/audit-logs",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(id="employee-reports", label="Employee Reports", icon="bi-bar-chart", path="/employee/reports"),
    ),
    _group(
        "attendance",
        "Attendance",
        "bi-check-circle",
        "/attendance",
        Destination(id="daily-attendance", label="Daily Attendance View", icon="bi-calendar", path="/attendance/daily"),
        Destination(id="monthly-calendar", label="Monthly Attendance Calendar", icon="bi-calendar", path="/attendance/monthly"),
        Destination(id="attendance-summary", label="Attendance Summary Report", icon="bi-bar-chart", path="/attendance/summary"),
        Destination(
            id="manual-update",
            label="Manual Attendance Update",
            icon="bi-pencil",
            path="/attendance/manual-update",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(
            id="import-attendance",
            label="Import Attendance",
            icon="bi-upload",
            path="/attendance/import",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(id="holiday-calendar", label="Holiday Calendar", icon="bi-calendar", path="/attendance/holidays"),
        Destination(id="attendance-metrics", label="Attendance Metrics Dashboard", icon="bi-bar-chart", path="/attendance/metrics"),
    ),
    _group(
        "leave",
        "Leave",
        "bi-x-circle",
        "/leave",
        Destination(id="leave-application", label="Leave Application", icon="bi-plus-lg", path="/leave/application"),
        Destination(id="leave-history", label="Leave Application History", icon="bi-clock", path="/leave/history"),
        Destination(id="leave-balance", label="Current Leave Balance", icon="bi-bar-chart", path="/leave/balance"),
        Destination(
            id="leave-approval",
            label="Leave Approval",
            icon="bi-check-circle",
            path="/leave/approval",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(id="leave-requests", label="View Leave Requests", icon="bi-file-text", path="/leave/requests", badge="3"),
        Destination(id="leave-summary", label="Leave Summary Viewer", icon="bi-bar-chart", path="/leave/summary"),
    ),
    _group(
        "payroll",
        "Payroll",
        "bi-credit-card",
        "/payroll",
        Destination(
            id="salary-structure",
            label="Employee Salary Structure Setup",
            icon="bi-currency-dollar",
            path="/payroll/salary-structure",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(
            id="attendance-integration",
            label="Attendance & Time Integration",
            icon="bi-clock",
            path="/payroll/attendance-integration",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(
            id="payroll-run",
            label="Payroll Run (Monthly/Quarterly)",
            icon="bi-calendar",
            path="/payroll/run",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(id="payslip-generation", label="Payslip Generation & Distribution", icon="bi-file-text", path="/payroll/payslips"),
        Destination(id="tax-management", label="Income Tax Management (TDS)", icon="bi-calculator", path="/payroll/tax-management"),
        Destination(
            id="bank-processing",
            label="Bank & Payment Processing",
            icon="bi-credit-card",
            path="/payroll/bank-processing",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(
            id="statutory-compliance",
            label="Statutory Compliance",
            icon="bi-shield",
            path="/payroll/compliance",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(
            id="payroll-reports",
            label="Payroll Reports & Analytics",
            icon="bi-bar-chart",
            path="/payroll/reports",
            allowed_roles=PEOPLE_OPS_ROLES,
        ),
        Destination(
            id="audit-access",
            label="Audit & Access Control",
            icon="bi-shield",
            path="/payroll/audit",
            allowed_roles=frozenset({Role.ADMIN}),
        ),
        Destination(id="self-service", label="Self-Service Portal", icon="bi-person", path="/payroll/self-service"),
    ),
    _group(
        "performance",
        "Performance",
        "bi-graph-up",
        "/performance",
        Destination(id="performance-reviews", label="Schedule Performance Reviews", icon="bi-calendar", path="/performance/reviews"),
        Destination(id="evaluation-forms", label="Create Evaluation Forms", icon="bi-file-text", path="/performance/evaluation-forms"),
        Destination(id="self-assessment", label="Submit Self-Assessment", icon="bi-person", path="/performance/self-assessment"),
        Destination(id="performance-feedback", label="View Performance Feedback", icon="bi-chat", path="/performance/feedback"),
        Destination(id="performance-grades", label="Approve Performance Grades", icon="bi-award", path="/performance/grades"),
        Destination(id="performance-insights", label="Overview Performance Insights", icon="bi-bar-chart", path="/performance/insights"),
        Destination(id="final-ratings", label="Approve Final Ratings", icon="bi-star", path="/performance/final-ratings"),
        Destination(id="performance-reports", label="Export Performance Reports", icon="bi-download", path="/performance/reports"),
        Destination(id="performance-trends", label="View Performance Trends", icon="bi-graph-up", path="/performance/trends"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    _group(
        "offboarding",
        "Offboarding",
        "bi-file-text",
        "/offboarding",
        Destination(id="exit-initiation", label="Exit Initiation & Approval", icon="bi-person-x", path="/offboarding/exit-initiation"),
        Destination(id="exit-interview", label="Exit Interview & Feedback", icon="bi-chat", path="/offboarding/exit-interview"),
        Destination(id="final-settlement", label="Full & Final Settlement", icon="bi-currency-dollar", path="/offboarding/final-settlement"),
        Destination(
            id="documentation-handover",
            label="Final Documentation & Handover",
            icon="bi-file-text",
            path="/offboarding/documentation",
        ),
        Destination(id="asset-return", label="Asset Return & Clearance", icon="bi-box", path="/offboarding/asset-return"),
        Destination(id="access-deactivation", label="Access Deactivation", icon="bi-shield", path="/offboarding/access-deactivation"),
        Destination(id="resignation-tracking", label="Apply Resignation", icon="bi-file-text", path="/offboarding/resignation"),
        Destination(id="exit-status", label="Track Exit Status", icon="bi-clock", path="/offboarding/exit-status"),
        Destination(id="exit-letters", label="Download Exit Letters", icon="bi-download", path="/offboarding/exit-letters"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    _group(
        "assets",
        "Assets",
        "bi-display",
        "/assets",
        Destination(id="asset-request", label="Asset Request & Credential Access", icon="bi-plus-lg", path="/assets/request"),
        Destination(id="asset-template", label="Asset Template & Lifecycle Management", icon="bi-gear", path="/assets/template"),
        Destination(id="inventory-dispatch", label="Inventory & Dispatch Control", icon="bi-box", path="/assets/inventory"),
        Destination(id="asset-tracking", label="Asset Tracking", icon="bi-search", path="/assets/tracking"),
        Destination(id="asset-maintenance", label="Asset Maintenance", icon="bi-gear", path="/assets/maintenance"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    _group(
        "help-desk",
        "Help Desk",
        "bi-headset",
        "/help-desk",
        Destination(id="create-ticket", label="Create Support Ticket", icon="bi-plus-lg", path="/help-desk/create-ticket"),
        Destination(id="ticket-tracking", label="Ticket Tracking", icon="bi-search", path="/help-desk/tracking"),
        Destination(id="knowledge-base", label="Knowledge Base", icon="bi-book", path="/help-desk/knowledge-base"),
        Destination(id="faq", label="Frequently Asked Questions", icon="bi-question-circle", path="/help-desk/faq"),
        Destination(id="feedback-engagement", label="Feedback & Engagement", icon="bi-chat", path="/help-desk/feedback"),
    ),
    _group(
        "benefits",
        "Benefits & Compensation",
        "bi-award",
        "/benefits",
        Destination(id="benefits-enrollment", label="Benefits Enrollment", icon="bi-plus-lg", path="/benefits/enrollment"),
        Destination(id="health-insurance", label="Health Insurance", icon="bi-shield", path="/benefits/health-insurance"),
        Destination(id="retirement-plans", label="Retirement Plans", icon="bi-currency-dollar", path="/benefits/retirement"),
        Destination(id="compensation-analysis", label="Compensation Analysis", icon="bi-bar-chart", path="/benefits/compensation"),
        Destination(id="benefits-administration", label="Benefits Administration", icon="bi-gear", path="/benefits/administration"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    _group(
        "training",
        "Training & Development",
        "bi-book",
        "/training",
        Destination(id="training-programs", label="Training Programs", icon="bi-book", path="/training/programs"),
        Destination(id="skill-assessment", label="Skill Assessment", icon="bi-bullseye", path="/training/skill-assessment"),
        Destination(id="certification-tracking", label="Certification Tracking", icon="bi-award", path="/training/certifications"),
        Destination(id="learning-paths", label="Learning Paths", icon="bi-graph-up", path="/training/learning-paths"),
        Destination(id="training-calendar", label="Training Calendar", icon="bi-calendar", path="/training/calendar"),
        Destination(id="training-feedback", label="Training Feedback", icon="bi-chat", path="/training/feedback"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    _group(
        "reports",
        "Reports & Analytics",
        "bi-bar-chart",
        "/reports",
        Destination(id="employee-reports-summary", label="Employee Reports", icon="bi-people", path="/reports/employees"),
        Destination(id="attendance-reports", label="Attendance Reports", icon="bi-clock", path="/reports/attendance"),
        Destination(id="payroll-reports-summary", label="Payroll Reports", icon="bi-currency-dollar", path="/reports/payroll"),
        Destination(id="performance-reports-summary", label="Performance Reports", icon="bi-graph-up", path="/reports/performance"),
        Destination(id="recruitment-reports", label="Recruitment Reports", icon="bi-search", path="/reports/recruitment"),
        Destination(id="custom-reports", label="Custom Reports", icon="bi-file-text", path="/reports/custom"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    _group(
        "policies-docs",
        "Policies & Documents",
        "bi-file-text",
        "/policies",
        Destination(id="all-policies", label="Policies", icon="bi-file-text", path="/policies"),
        Destination(id="all-documents", label="Documents", icon="bi-folder", path="/policies/documents"),
        Destination(id="acknowledgements", label="Acknowledgements", icon="bi-check-circle", path="/policies/acknowledgements"),
        allowed_roles=PEOPLE_OPS_ROLES,
    ),
    Destination(id="announcements", label="Announcements", icon="bi-bell", path="/announcements"),
    Destination(id="inbox", label="Inbox", icon="bi-chat", path="/inbox"),
    _group(
        "settings",
        "Settings",
        "bi-gear",
        "/settings",
        Destination(id="general-settings", label="General Settings", icon="bi-gear", path="/settings/general"),
        Destination(id="theme-settings", label="Theme & Appearance", icon="bi-palette", path="/settings/theme"),
        Destination(id="notification-settings", label="Notifications", icon="bi-bell", path="/settings/notifications"),
        Destination(id="security-settings", label="Security & Privacy", icon="bi-shield", path="/settings/security"),
    ),
)


def iter_destinations(tree: Iterable[Destination]) -> Iterator[Destination]:
    for node in tree:
        yield from node.walk()


def find_destination(tree: Iterable[Destination], destination_id: str) -> Destination | None:
    for node in iter_destinations(tree):
        if node.id == destination_id:
            return node
    return None


def find_path_chain(tree: Iterable[Destination], path: str) -> tuple[Destination, ...]:
    """Return the root-to-node chain of the first destination whose path is ``path``."""
    for node in tree:
        if node.path == path:
            return (node,)
        chain = find_path_chain(node.children, path)
        if chain:
            return (node, *chain)
    return ()


def validate_catalog(tree: Iterable[Destination]) -> None:
    seen_ids: set[str] = set()
    seen_nodes: set[int] = set()

    def visit(node: Destination, ancestors: tuple[int, ...]) -> None:
        if id(node) in ancestors:
            raise ImproperlyConfigured(f"Destination '{node.id}' appears inside its own subtree.")
        if id(node) in seen_nodes:
            raise ImproperlyConfigured(f"Destination '{node.id}' is shared between several parents.")
        seen_nodes.add(id(node))
        if node.id in seen_ids:
            raise ImproperlyConfigured(f"Duplicate destination id '{node.id}'.")
        seen_ids.add(node.id)
        if node.allowed_roles is not None:
            if not node.allowed_roles:
                raise ImproperlyConfigured(f"Destination '{node.id}' has an empty allowed_roles set.")
            unknown = set(node.allowed_roles) - ALL_ROLES
            if unknown:
                raise ImproperlyConfigured(
                    f"Destination '{node.id}' references unknown roles: {', '.join(sorted(unknown))}."
                )
        for child in node.children:
            visit(child, (*ancestors, id(node)))

    for root in tree:
        visit(root, ())
