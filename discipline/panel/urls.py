from django.urls import path
from .views import panel_home, panel_snapshot, assign_role, delete_profile, notices_pdf

app_name = "panel"

urlpatterns = [
    path("", panel_home, name="home"),
    path("snapshot/", panel_snapshot, name="snapshot"),
    path("usuarios/<int:user_id>/rol/", assign_role, name="assign_role"),
    path("usuarios/<int:user_id>/eliminar/", delete_profile, name="delete_profile"),
    path("amonestaciones/pdf/", notices_pdf, name="notices_pdf"),
]
