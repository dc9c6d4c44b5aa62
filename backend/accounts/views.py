from __future__ import annotations

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from navigation.session import controller_for_request

from .forms import LoginForm
from .identity import RequestIdentityProvider


@require_http_methods(["GET", "POST"])
def login_view(request):
    if request.user.is_authenticated:
        return redirect("dashboard:home")

    form = LoginForm(request, data=request.POST or None)
    if request.method == "POST" and form.is_valid():
        login(request, form.get_user())
        return redirect("dashboard:home")

    return render(request, "accounts/login.html", {"form": form})


@login_required
@require_http_methods(["POST"])
def logout_view(request):
    controller = controller_for_request(request)
    outcome = controller.on_logout(RequestIdentityProvider(request))
    if outcome.ok:
        messages.success(request, "Logged out successfully.")
    else:
        messages.warning(request, "Signed out locally, but the server session could not be closed.")
    return redirect(outcome.redirect_to)
