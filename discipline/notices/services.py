import logging

from django.utils import timezone

from accounts.models import Profile
from core.live import LiveQuery
from .models import Notice

logger = logging.getLogger(__name__)

LOAD_ERROR = "Error al cargar las amonestaciones."


def find_student(national_id: str):
    """First student profile holding exactly ``national_id``, or None."""
    return (
        Profile.objects.select_related("user")
        .filter(national_id=national_id.strip(), role="estudiante")
        .first()
    )


def create_notice(student: Profile, teacher: Profile, reason: str) -> Notice:
    notice = Notice.objects.create(
        reason=reason.strip(),
        created_at=timezone.now(),
        student_id=student.pk,
        student_name=student.display_name,
        teacher_id=teacher.pk,
        teacher_name=teacher.display_name,
    )
    logger.info("Notice %s issued by %s to %s", notice.pk, teacher.pk, student.pk)
    return notice


def update_notice(notice: Notice, reason: str) -> Notice:
    notice.reason = reason.strip()
    notice.save(update_fields=["reason"])
    return notice


def delete_notice(notice: Notice, confirmed: bool = False) -> bool:
    """Remove ``notice``; nothing happens unless the caller confirmed."""
    if not confirmed:
        return False
    notice_id = notice.pk
    notice.delete()
    logger.info("Notice %s deleted", notice_id)
    return True


def student_notices(student_id) -> LiveQuery:
    return LiveQuery(Notice, "created_at", error_message=LOAD_ERROR, student_id=student_id)


def all_notices() -> LiveQuery:
    return LiveQuery(Notice, "created_at", error_message=LOAD_ERROR)
