from __future__ import annotations

from django.core.checks import Error, register
from django.core.exceptions import ImproperlyConfigured

from .catalog import MENU_CATALOG, validate_catalog
from .conf import navigation_settings


@register()
def check_menu_catalog(app_configs, **kwargs):
    errors = []
    try:
        validate_catalog(MENU_CATALOG)
    except ImproperlyConfigured as exc:
        errors.append(Error(str(exc), obj="navigation.catalog.MENU_CATALOG", id="navigation.E001"))
    try:
        navigation_settings()
    except ImproperlyConfigured as exc:
        errors.append(Error(str(exc), obj="settings.NAVIGATION", id="navigation.E002"))
    return errors
