from django.contrib.auth.models import AbstractUser
from django.db import models

from .roles import Role


class User(AbstractUser):
    Role = Role

    role = models.CharField(max_length=16, choices=Role.choices, default=Role.EMPLOYEE)
    department = models.CharField(max_length=64, blank=True)

    @property
    def display_name(self) -> str:
        return self.get_full_name() or self.username
