"""
Development settings.
"""

from __future__ import annotations

from .env import env_list
from .settings_base import *  # noqa: F401,F403

DEBUG = True
ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS", default=["127.0.0.1", "localhost", "testserver"])
