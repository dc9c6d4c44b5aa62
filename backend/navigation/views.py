from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from .controller import ClickKind
from .session import controller_for_request, save_expansion, save_layout


def _redirect_back(request, fallback: str):
    target = request.POST.get("next") or request.GET.get("next") or ""
    if target and url_has_allowed_host_and_scheme(
        target,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return redirect(target)
    return redirect(fallback)


@login_required
@require_http_methods(["POST"])
def toggle_group(request, destination_id: str):
    controller = controller_for_request(request)
    save_expansion(request.session, controller.on_toggle_group(destination_id))
    return _redirect_back(request, controller.root_path)


@login_required
@require_http_methods(["POST"])
def toggle_layout(request):
    controller = controller_for_request(request)
    save_layout(request.session, controller.on_toggle_layout())
    return _redirect_back(request, controller.root_path)


@login_required
@require_http_methods(["GET"])
def go(request, destination_id: str):
    controller = controller_for_request(request)
    outcome = controller.on_navigate(destination_id)
    if outcome.kind == ClickKind.NAVIGATE:
        return redirect(outcome.path)
    if outcome.kind == ClickKind.TOGGLE:
        save_expansion(request.session, outcome.expansion)
    return _redirect_back(request, controller.root_path)
