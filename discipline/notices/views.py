import logging
from urllib.parse import urlencode

from django.contrib import messages
from django.db import DatabaseError
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_http_methods

from accounts.guards import role_required
from accounts.models import Profile
from core.feedback import run_mutation
from core.snapshots import list_state, snapshot_payload, state_version
from scanner.decoding import decode_image
from .forms import CardPhotoForm, CedulaSearchForm, ConfirmForm, NoticeForm
from .models import Notice
from .reports import notice_history_pdf
from .services import create_notice, delete_notice, find_student, student_notices, update_notice

logger = logging.getLogger(__name__)

NOT_FOUND_MSG = "No se encontró un estudiante con esa cédula."
SEARCH_ERROR_MSG = "Error al buscar estudiante."

teacher_only = role_required("profesor", redirect_to="accounts:profile")
student_only = role_required("estudiante", redirect_to="accounts:login")


def _carnet_url(cedula=""):
    url = reverse("notices:carnet")
    return f"{url}?{urlencode({'cedula': cedula})}" if cedula else url


def _student_profile(user_id):
    return Profile.objects.filter(pk=user_id, role="estudiante").first()


def _render_carnet(request, student=None, notice_form=None, editing=None, lookup_message="", cedula=""):
    ctx = {
        "search_form": CedulaSearchForm(initial={"cedula": cedula}),
        "photo_form": CardPhotoForm(),
        "student": student,
        "editing": editing,
        "lookup_message": lookup_message,
    }
    if student is not None:
        ctx["notice_form"] = notice_form or NoticeForm(initial={"reason": editing.reason} if editing else None)
        ctx["state"] = list_state(student_notices(student.pk).fetch())
        ctx["version"] = state_version(ctx["state"])
    return render(request, "notices/carnet.html", ctx)


@teacher_only
def carnet(request):
    cedula = (request.GET.get("cedula") or "").strip()
    if not cedula:
        return _render_carnet(request)

    try:
        student = find_student(cedula)
    except DatabaseError:
        logger.exception("Student lookup failed for %r", cedula)
        return _render_carnet(request, lookup_message=SEARCH_ERROR_MSG, cedula=cedula)
    if student is None:
        return _render_carnet(request, lookup_message=NOT_FOUND_MSG, cedula=cedula)
    return _render_carnet(request, student=student, cedula=cedula)


@teacher_only
@require_http_methods(["POST"])
def carnet_photo(request):
    form = CardPhotoForm(request.POST, request.FILES)
    if not form.is_valid():
        messages.error(request, "Selecciona una foto del carnet.")
        return redirect("notices:carnet")
    try:
        code = decode_image(form.cleaned_data["image"])
    except Exception:
        logger.exception("Card photo could not be decoded")
        code = None
    if not code:
        messages.error(request, "No se pudo leer el código de barra de la imagen.")
        return redirect("notices:carnet")
    return redirect(_carnet_url(code))


@teacher_only
@require_http_methods(["POST"])
def notice_create(request, student_id: int):
    student = _student_profile(student_id)
    if student is None:
        messages.error(request, NOT_FOUND_MSG)
        return redirect("notices:carnet")

    form = NoticeForm(request.POST)
    if not form.is_valid():
        return _render_carnet(request, student=student, notice_form=form, cedula=student.national_id)

    run_mutation(
        request,
        lambda: create_notice(student, request.profile, form.cleaned_data["reason"]),
        success="Amonestación registrada correctamente.",
        failure="Error al registrar la amonestación. Inténtalo de nuevo.",
    )
    return redirect(_carnet_url(student.national_id))


def _own_notice_or_redirect(request, notice_id):
    notice = get_object_or_404(Notice, id=notice_id)
    if not notice.issued_by(request.user):
        messages.error(request, "Solo el profesor que registró la amonestación puede modificarla.")
        return notice, redirect("notices:carnet")
    return notice, None


@teacher_only
@require_http_methods(["GET", "POST"])
def notice_edit(request, notice_id: int):
    notice, denied = _own_notice_or_redirect(request, notice_id)
    if denied:
        return denied
    student = _student_profile(notice.student_id)
    cedula = student.national_id if student else ""

    form = NoticeForm(request.POST or None, initial={"reason": notice.reason})
    if request.method == "POST" and form.is_valid():
        run_mutation(
            request,
            lambda: update_notice(notice, form.cleaned_data["reason"]),
            success="Amonestación actualizada correctamente.",
            failure="Error al registrar la amonestación. Inténtalo de nuevo.",
        )
        return redirect(_carnet_url(cedula))
    if student is None:
        return render(request, "notices/notice_edit.html", {"form": form, "notice": notice})
    return _render_carnet(request, student=student, notice_form=form, editing=notice, cedula=cedula)


@teacher_only
@require_http_methods(["GET", "POST"])
def notice_delete(request, notice_id: int):
    notice, denied = _own_notice_or_redirect(request, notice_id)
    if denied:
        return denied
    student = _student_profile(notice.student_id)
    back = _carnet_url(student.national_id if student else "")

    if request.method == "GET":
        return render(request, "notices/notice_confirm_delete.html", {"notice": notice, "back": back})

    form = ConfirmForm(request.POST)
    if not form.is_valid():
        messages.info(request, "La amonestación no fue eliminada.")
        return redirect(back)
    run_mutation(
        request,
        lambda: delete_notice(notice, confirmed=True),
        success="Amonestación eliminada.",
        failure="Error al eliminar la amonestación.",
    )
    return redirect(back)


@teacher_only
def student_snapshot(request, student_id: int):
    payload = snapshot_payload(
        request,
        student_notices(student_id).fetch(),
        "notices/_student_notices.html",
    )
    return JsonResponse(payload)


@student_only
def history(request):
    state = list_state(student_notices(request.user.pk).fetch())
    return render(request, "notices/history.html", {
        "state": state,
        "version": state_version(state),
        "profile": request.profile,
    })


@student_only
def history_snapshot(request):
    return JsonResponse(snapshot_payload(
        request,
        student_notices(request.user.pk).fetch(),
        "notices/_history_notices.html",
    ))


@student_only
def history_pdf(request):
    snapshot = student_notices(request.user.pk).fetch()
    if not snapshot.ok:
        messages.error(request, snapshot.error)
        return redirect("notices:history")
    pdf = notice_history_pdf(f"Estudiante: {request.profile.display_name}", snapshot.records)
    resp = HttpResponse(pdf, content_type="application/pdf")
    resp["Content-Disposition"] = 'attachment; filename="historial-amonestaciones.pdf"'
    return resp
