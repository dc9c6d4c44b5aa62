from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    fieldsets = UserAdmin.fieldsets + (("Role", {"fields": ("role", "department")}),)
    add_fieldsets = UserAdmin.add_fieldsets + (("Role", {"fields": ("role", "department")}),)
    list_display = ("username", "first_name", "last_name", "role", "department", "is_active", "is_staff")
    list_filter = ("role", "is_active", "is_staff")
