from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.http import Http404
from django.shortcuts import redirect, render

from accounts.permissions import require_roles
from navigation.catalog import MENU_CATALOG, find_path_chain
from navigation.conf import navigation_settings


@login_required
def index(request):
    return redirect(navigation_settings()["ROOT_PATH"])


@login_required
def home(request):
    return render(request, "dashboard/home.html")


@login_required
def destination(request, page_path: str):
    location = "/" + page_path.strip("/")
    chain = find_path_chain(MENU_CATALOG, location)
    if not chain:
        raise Http404("Unknown destination.")

    for node in chain:
        if node.allowed_roles is None:
            continue
        denied = require_roles(request, node.allowed_roles, redirect_to="dashboard:home", area=node.label)
        if denied is not None:
            return denied

    return render(
        request,
        "dashboard/destination.html",
        {
            "destination": chain[-1],
            "destination_chain": chain,
        },
    )
