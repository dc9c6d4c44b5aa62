from __future__ import annotations

from django.core.management.base import BaseCommand

from accounts.models import User

DEMO_ACCOUNTS = (
    ("admin", "System", "Admin", User.Role.ADMIN, "Administration"),
    ("hr", "Harper", "Reyes", User.Role.HR, "People Operations"),
    ("employee", "Eli", "Mendes", User.Role.EMPLOYEE, "Engineering"),
)


class Command(BaseCommand):
    help = "Create one demo account per role (admin, hr, employee) if not present."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="admin123", help="Password for newly created accounts.")

    def handle(self, *args, **options):
        for username, first_name, last_name, role, department in DEMO_ACCOUNTS:
            is_admin = role == User.Role.ADMIN
            user, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "first_name": first_name,
                    "last_name": last_name,
                    "role": role,
                    "department": department,
                    "is_staff": is_admin,
                    "is_superuser": is_admin,
                    "is_active": True,
                },
            )

            if created:
                user.set_password(options["password"])
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Created {role} user: {username}"))
                continue

            self.stdout.write(self.style.WARNING(f"User {username} already exists. Skipped."))
