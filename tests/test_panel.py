from django.urls import reverse

from accounts.models import Profile, User
from core.live import Snapshot
from notices.models import Notice


def test_approve_pending_as_teacher(admin_profile, make_profile, login_as):
    pending = make_profile(role="pendiente", first_name="Pedro", last_name="Núñez")
    client = login_as(admin_profile)

    before = client.get(reverse("panel:snapshot")).json()
    assert before["pendientes"]["count"] == 1
    assert "Pedro Núñez" in before["pendientes"]["html"]

    resp = client.post(reverse("panel:assign_role", args=[pending.pk]), {"role": "profesor", "tab": "pendientes"}, follow=True)
    assert "Rol de usuario actualizado a profesor con éxito." in resp.content.decode()

    pending.refresh_from_db()
    assert pending.role == "profesor"

    after = client.get(reverse("panel:snapshot")).json()
    assert after["pendientes"]["count"] == 0
    assert "No hay usuarios pendientes." in after["pendientes"]["html"]
    assert "Pedro Núñez" in after["activos"]["html"]


def test_invalid_role_is_rejected(admin_profile, make_profile, login_as):
    pending = make_profile(role="pendiente")
    login_as(admin_profile).post(reverse("panel:assign_role", args=[pending.pk]), {"role": "root"})
    pending.refresh_from_db()
    assert pending.role == "pendiente"


def test_role_update_failure_message(admin_profile, make_profile, login_as, monkeypatch):
    pending = make_profile(role="pendiente")

    def broken(self, *args, **kwargs):
        raise RuntimeError("write failed")

    monkeypatch.setattr(Profile, "save", broken)
    resp = login_as(admin_profile).post(reverse("panel:assign_role", args=[pending.pk]), {"role": "profesor"}, follow=True)
    assert "Error al actualizar el rol." in resp.content.decode()


def test_delete_profile_requires_confirmation(admin_profile, make_profile, student, teacher, make_notice, login_as):
    make_notice(student, teacher)
    client = login_as(admin_profile)
    url = reverse("panel:delete_profile", args=[student.pk])

    assert "Esta acción es irreversible." in client.get(url).content.decode()
    client.post(url, {})
    assert Profile.objects.filter(pk=student.pk).exists()

    resp = client.post(url, {"confirm": "on", "tab": "activos"}, follow=True)
    assert "Usuario eliminado con éxito." in resp.content.decode()
    assert not Profile.objects.filter(pk=student.pk).exists()
    # sign-in identity and past notices are untouched
    assert User.objects.filter(pk=student.pk).exists()
    assert Notice.objects.filter(student_id=student.pk).count() == 1


def test_panel_tabs_and_empty_messages(admin_profile, login_as):
    client = login_as(admin_profile)
    assert "No hay usuarios pendientes." in client.get(reverse("panel:home")).content.decode()
    assert "No hay amonestaciones registradas." in client.get(reverse("panel:home"), {"tab": "amonestaciones"}).content.decode()


def test_panel_notices_newest_first(admin_profile, student, teacher, make_notice, login_as):
    make_notice(student, teacher, "vieja", minutes_ago=60)
    make_notice(student, teacher, "reciente", minutes_ago=2)
    body = login_as(admin_profile).get(reverse("panel:home"), {"tab": "amonestaciones"}).content.decode()
    assert body.index("reciente") < body.index("vieja")


def test_panel_pdf(admin_profile, student, teacher, make_notice, login_as):
    make_notice(student, teacher)
    resp = login_as(admin_profile).get(reverse("panel:notices_pdf"))
    assert resp.content.startswith(b"%PDF")


def test_user_list_error_hides_empty_messages(admin_profile, login_as, monkeypatch):
    class Broken:
        def fetch(self):
            return Snapshot(error="Error al cargar la lista de usuarios.")

    monkeypatch.setattr("panel.views.profiles_query", lambda: Broken())
    client = login_as(admin_profile)

    data = client.get(reverse("panel:snapshot")).json()
    for key in ("pendientes", "activos"):
        assert data[key]["error"] == "Error al cargar la lista de usuarios."
        assert data[key]["version"] is None
    assert "No hay usuarios pendientes." not in data["pendientes"]["html"]
    assert "No hay usuarios activos." not in data["activos"]["html"]

    body = client.get(reverse("panel:home")).content.decode()
    assert "Error al cargar la lista de usuarios." in body
    assert "No hay usuarios pendientes." not in body
    assert 'data-live-version=""' in body


def test_notice_list_error_hides_empty_message(admin_profile, login_as, monkeypatch):
    class Broken:
        def fetch(self):
            return Snapshot(error="Error al cargar las amonestaciones.")

    monkeypatch.setattr("panel.views.all_notices", lambda: Broken())
    data = login_as(admin_profile).get(reverse("panel:snapshot")).json()["amonestaciones"]
    assert data["error"] == "Error al cargar las amonestaciones."
    assert data["version"] is None
    assert "No hay amonestaciones registradas." not in data["html"]


def test_panel_page_carries_the_current_list_version(admin_profile, make_profile, login_as):
    make_profile(role="pendiente")
    client = login_as(admin_profile)
    body = client.get(reverse("panel:home")).content.decode()
    version = client.get(reverse("panel:snapshot")).json()["pendientes"]["version"]
    assert f'data-live-version="{version}"' in body
