import itertools
from datetime import timedelta

import pytest
from django.utils import timezone

from accounts.models import Profile, User
from notices.models import Notice

_seq = itertools.count(1)


@pytest.fixture
def make_profile(db):
    def _make(role="estudiante", first_name="Ana", last_name="Pérez", national_id=None, password="secreto1", **extra):
        n = next(_seq)
        email = extra.pop("email", f"user{n}@example.com")
        user = User.objects.create_user(username=email, email=email, password=password)
        return Profile.objects.create(
            user=user,
            first_name=first_name,
            last_name=last_name,
            national_id=national_id or f"001-{n:07d}-1",
            email=email,
            role=role,
            **extra,
        )

    return _make


@pytest.fixture
def make_notice(db):
    def _make(student, teacher, reason="Uso de celular en clase", minutes_ago=0):
        return Notice.objects.create(
            reason=reason,
            created_at=timezone.now() - timedelta(minutes=minutes_ago),
            student_id=student.pk,
            student_name=student.display_name,
            teacher_id=teacher.pk,
            teacher_name=teacher.display_name,
        )

    return _make


@pytest.fixture
def student(make_profile):
    return make_profile(role="estudiante", first_name="Luis", last_name="Gómez", national_id="402-1234567-8")


@pytest.fixture
def teacher(make_profile):
    return make_profile(role="profesor", first_name="Marta", last_name="Reyes")


@pytest.fixture
def admin_profile(make_profile):
    return make_profile(role="admin", first_name="Dirección", last_name="Escolar")


@pytest.fixture
def login_as(client):
    def _login(profile):
        client.force_login(profile.user)
        return client

    return _login


@pytest.fixture
def memory_storage(settings):
    settings.STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
        "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
    }
    from django.core.files.storage import default_storage

    return default_storage
