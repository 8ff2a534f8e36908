import logging

from django.contrib import messages
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.template.loader import render_to_string
from django.urls import reverse
from django.views.decorators.http import require_http_methods

from accounts.guards import role_required
from accounts.models import Profile
from core.feedback import run_mutation
from core.live import LiveQuery, fingerprint, partition_profiles
from core.snapshots import list_state, snapshot_payload, state_version
from notices.forms import ConfirmForm
from notices.reports import notice_history_pdf
from notices.services import all_notices
from .forms import AssignRoleForm

logger = logging.getLogger(__name__)

TABS = ("pendientes", "activos", "amonestaciones")

admin_only = role_required("admin", redirect_to="accounts:login")


def profiles_query() -> LiveQuery:
    return LiveQuery(Profile, "registered_at", error_message="Error al cargar la lista de usuarios.")


def _panel_context():
    users = list_state(profiles_query().fetch(), "registered_at")
    pending, active = partition_profiles(users.records)
    notices = list_state(all_notices().fetch())
    return {
        "users_error": users.error,
        "users_version": None if users.error else fingerprint(pending + active),
        "pending": pending,
        "active": active,
        "notices": notices,
        "notices_version": state_version(notices),
        "role_form": AssignRoleForm(),
    }


@admin_only
def panel_home(request):
    tab = request.GET.get("tab")
    ctx = _panel_context()
    ctx["tab"] = tab if tab in TABS else "pendientes"
    return render(request, "panel/home.html", ctx)


@admin_only
def panel_snapshot(request):
    ctx = _panel_context()
    users_version = ctx["users_version"]
    return JsonResponse({
        "pendientes": {
            "version": users_version,
            "count": len(ctx["pending"]),
            "error": ctx["users_error"],
            "html": render_to_string("panel/_pending.html", ctx, request=request),
        },
        "activos": {
            "version": users_version,
            "count": len(ctx["active"]),
            "error": ctx["users_error"],
            "html": render_to_string("panel/_active.html", ctx, request=request),
        },
        "amonestaciones": snapshot_payload(request, all_notices().fetch(), "panel/_notices.html"),
    })


@admin_only
@require_http_methods(["POST"])
def assign_role(request, user_id: int):
    profile = get_object_or_404(Profile, pk=user_id)
    form = AssignRoleForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Rol no válido.")
        return redirect("panel:home")

    role = form.cleaned_data["role"]

    def _write():
        profile.role = role
        profile.save(update_fields=["role"])
        logger.info("User %s set role of %s to %s", request.user.pk, profile.pk, role)

    run_mutation(
        request,
        _write,
        success=f"Rol de usuario actualizado a {role} con éxito.",
        failure="Error al actualizar el rol.",
    )
    return _back_to_tab(request)


def _back_to_tab(request):
    tab = request.POST.get("tab")
    url = reverse("panel:home")
    return redirect(f"{url}?tab={tab}" if tab in TABS else url)


@admin_only
@require_http_methods(["GET", "POST"])
def delete_profile(request, user_id: int):
    profile = get_object_or_404(Profile, pk=user_id)
    if request.method == "GET":
        return render(request, "panel/confirm_delete.html", {"target": profile})

    form = ConfirmForm(request.POST)
    if not form.is_valid():
        messages.info(request, "El usuario no fue eliminado.")
        return _back_to_tab(request)

    def _delete():
        # the sign-in account and the notices stay; only the profile goes
        profile.delete()
        logger.info("User %s deleted profile %s", request.user.pk, user_id)

    run_mutation(
        request,
        _delete,
        success="Usuario eliminado con éxito.",
        failure="Error al eliminar el usuario.",
    )
    return _back_to_tab(request)


@admin_only
def notices_pdf(request):
    snapshot = all_notices().fetch()
    if not snapshot.ok:
        messages.error(request, snapshot.error)
        return redirect("panel:home")
    pdf = notice_history_pdf("Todas las amonestaciones", snapshot.records, show_student=True)
    resp = HttpResponse(pdf, content_type="application/pdf")
    resp["Content-Disposition"] = 'attachment; filename="amonestaciones.pdf"'
    return resp
