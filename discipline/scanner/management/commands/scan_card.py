from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notices.services import find_student, student_notices
from scanner.capture import BarcodeCapture


class Command(BaseCommand):
    help = "Scan a student card with the local camera and list the student's amonestaciones."

    def add_arguments(self, parser):
        parser.add_argument("--camera", type=int, default=settings.SCANNER_CAMERA_INDEX)
        parser.add_argument("--max-frames", type=int, default=None)
        parser.add_argument("--watch", action="store_true", help="Keep printing the list when it changes.")
        parser.add_argument("--interval", type=float, default=float(settings.LIVE_POLL_SECONDS))
        parser.add_argument("--rounds", type=int, default=None, help="Stop watching after this many checks.")

    def handle(self, *args, **options):
        capture = BarcodeCapture(camera_index=options["camera"])
        code = capture.run(max_frames=options["max_frames"])
        if code is None:
            if capture.error:
                raise CommandError(capture.error)
            self.stdout.write("No se detectó ningún código.")
            return

        self.stdout.write(f"Código leído: {code}")
        student = find_student(code)
        if student is None:
            self.stdout.write("No se encontró un estudiante con esa cédula.")
            return
        self.stdout.write(f"Estudiante: {student.display_name} ({student.national_id})")

        query = student_notices(student.pk)
        if not options["watch"]:
            self._print(query.fetch())
            return
        try:
            query.follow(self._print, interval=options["interval"], rounds=options["rounds"])
        except KeyboardInterrupt:
            self.stdout.write("Detenido.")

    def _print(self, snapshot):
        if not snapshot.ok:
            self.stderr.write(snapshot.error)
            return
        if not snapshot.records:
            self.stdout.write("No hay amonestaciones para este estudiante.")
            return
        for n in snapshot.records:
            self.stdout.write(f"- {timezone.localtime(n.created_at):%d/%m/%Y} {n.reason} ({n.teacher_name})")
