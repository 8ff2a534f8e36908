import pytest
from django.db import DatabaseError
from django.urls import reverse

from accounts.guards import get_profile
from accounts.models import Profile

PAGES = {
    "panel:home": ({"admin"}, "accounts:login"),
    "notices:carnet": ({"profesor"}, "accounts:profile"),
    "notices:history": ({"estudiante"}, "accounts:login"),
}
ROLES = ["admin", "profesor", "estudiante", "pendiente"]


@pytest.mark.parametrize("page", list(PAGES))
@pytest.mark.parametrize("role", ROLES)
def test_roles_outside_the_page_set_are_redirected(make_profile, login_as, page, role):
    allowed, target = PAGES[page]
    resp = login_as(make_profile(role=role)).get(reverse(page))
    if role in allowed:
        assert resp.status_code == 200
    else:
        assert resp.status_code == 302
        assert resp["Location"] == reverse(target)


@pytest.mark.parametrize("page", list(PAGES) + ["accounts:profile"])
def test_anonymous_goes_to_sign_in(client, db, page):
    resp = client.get(reverse(page))
    assert resp.status_code == 302
    assert resp["Location"] == reverse("accounts:login")


def test_missing_profile_is_not_authorized(client, make_profile):
    profile = make_profile(role="admin")
    user = profile.user
    profile.delete()
    client.force_login(user)
    resp = client.get(reverse("panel:home"))
    assert resp.status_code == 302
    assert resp["Location"] == reverse("accounts:login")


def test_failed_profile_fetch_is_not_authorized(make_profile, login_as, monkeypatch):
    client = login_as(make_profile(role="admin"))

    def boom(**kwargs):
        raise DatabaseError("unreachable")

    monkeypatch.setattr(Profile.objects, "filter", boom)
    resp = client.get(reverse("panel:home"))
    assert resp.status_code == 302
    assert resp["Location"] == reverse("accounts:login")


def test_get_profile(make_profile):
    profile = make_profile(role="profesor")
    assert get_profile(profile.user).pk == profile.pk


def test_home_redirects_by_role(make_profile, login_as):
    expected = {
        "admin": "panel:home",
        "profesor": "notices:carnet",
        "estudiante": "notices:history",
        "pendiente": "accounts:profile",
    }
    for role, url_name in expected.items():
        resp = login_as(make_profile(role=role)).get(reverse("accounts:home"))
        assert resp["Location"] == reverse(url_name)
