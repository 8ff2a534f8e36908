from django.urls import path
from .views import (
    carnet, carnet_photo, student_snapshot,
    notice_create, notice_edit, notice_delete,
    history, history_snapshot, history_pdf,
)

app_name = "notices"

urlpatterns = [
    path("carnet/", carnet, name="carnet"),
    path("carnet/foto/", carnet_photo, name="carnet_photo"),
    path("carnet/<int:student_id>/amonestar/", notice_create, name="notice_create"),
    path("carnet/<int:student_id>/snapshot/", student_snapshot, name="student_snapshot"),

    path("amonestaciones/<int:notice_id>/editar/", notice_edit, name="notice_edit"),
    path("amonestaciones/<int:notice_id>/eliminar/", notice_delete, name="notice_delete"),

    path("historial/", history, name="history"),
    path("historial/snapshot/", history_snapshot, name="history_snapshot"),
    path("historial/pdf/", history_pdf, name="history_pdf"),
]
