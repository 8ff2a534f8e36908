from django.urls import path
from .views import home, login_view, logout_view, signup, profile_view

app_name = "accounts"

urlpatterns = [
    path("", home, name="home"),
    path("login/", login_view, name="login"),
    path("logout/", logout_view, name="logout"),
    path("registro/", signup, name="signup"),
    path("perfil/", profile_view, name="profile"),
]
