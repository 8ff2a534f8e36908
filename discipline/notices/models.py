from django.conf import settings
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL

class Notice(models.Model):
    """
    An amonestación. Both names are copied when the notice is issued and are
    never refreshed from the profiles afterwards.
    """
    reason = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)

    student = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name="notices_received")
    student_name = models.CharField(max_length=200)

    teacher = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name="notices_issued")
    teacher_name = models.CharField(max_length=200)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.student_name}: {self.reason[:40]}"

    def issued_by(self, user) -> bool:
        return self.teacher_id is not None and self.teacher_id == user.pk
