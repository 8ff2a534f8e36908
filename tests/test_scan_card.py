from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from scanner.management.commands import scan_card


class FakeCapture:
    code = None
    error = None

    def __init__(self, camera_index=0):
        self.camera_index = camera_index

    def run(self, max_frames=None):
        return self.code


@pytest.fixture
def fake_capture(monkeypatch):
    monkeypatch.setattr(scan_card, "BarcodeCapture", FakeCapture)
    monkeypatch.setattr(FakeCapture, "code", None)
    monkeypatch.setattr(FakeCapture, "error", None)
    return FakeCapture


def _run(*args):
    out = StringIO()
    call_command("scan_card", *args, stdout=out, stderr=StringIO())
    return out.getvalue()


def test_prints_notices_of_scanned_student(fake_capture, student, teacher, make_notice):
    make_notice(student, teacher, "Llegó tarde", minutes_ago=10)
    fake_capture.code = student.national_id
    out = _run()
    assert f"Código leído: {student.national_id}" in out
    assert "Estudiante: Luis Gómez" in out
    assert "Llegó tarde (Marta Reyes)" in out


def test_unknown_code(fake_capture, db):
    fake_capture.code = "999-99999-999"
    assert "No se encontró un estudiante con esa cédula." in _run()


def test_no_code(fake_capture, db):
    assert "No se detectó ningún código." in _run("--max-frames", "5")


def test_camera_error_fails_the_command(fake_capture, db):
    fake_capture.error = "Error: No se pudo acceder a la cámara. Revisa los permisos."
    with pytest.raises(CommandError, match="No se pudo acceder a la cámara"):
        _run()


def test_watch_prints_first_snapshot(fake_capture, student):
    fake_capture.code = student.national_id
    out = _run("--watch", "--rounds", "1", "--interval", "0")
    assert "No hay amonestaciones para este estudiante." in out
