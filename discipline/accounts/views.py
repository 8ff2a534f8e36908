import logging

from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from .forms import LoginForm, ProfileForm, SignUpForm
from .guards import get_profile, role_required
from .models import Profile

logger = logging.getLogger(__name__)


def home(request):
    profile = get_profile(request.user)
    if profile is None:
        return redirect("accounts:login")
    return redirect(profile.home_url_name())


@require_http_methods(["GET", "POST"])
def login_view(request):
    form = LoginForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        email = (form.cleaned_data.get("email") or "").strip().lower()
        password = form.cleaned_data.get("password") or ""
        if not email or not password:
            messages.error(request, "Por favor, completa todos los campos.")
            return render(request, "accounts/login.html", {"form": form})

        user = authenticate(request, username=email, password=password)
        if user is None:
            messages.error(request, "Correo electrónico o contraseña incorrectos.")
            return render(request, "accounts/login.html", {"form": form})

        login(request, user)
        profile = get_profile(user)
        if profile is None:
            logout(request)
            messages.error(request, "Error: No se encontró el perfil de usuario.")
            return render(request, "accounts/login.html", {"form": form})
        if profile.role == "pendiente":
            logout(request)
            messages.info(request, "Tu cuenta está pendiente de aprobación.")
            return redirect("accounts:login")

        logger.info("User %s signed in as %s", user.pk, profile.role)
        messages.success(request, "Inicio de sesión exitoso.")
        return redirect(profile.home_url_name())

    return render(request, "accounts/login.html", {"form": form})


def logout_view(request):
    logout(request)
    return redirect("accounts:login")


@require_http_methods(["GET", "POST"])
def signup(request):
    form = SignUpForm(request.POST or None, request.FILES or None)
    if request.method == "POST" and form.is_valid():
        try:
            form.save()
        except Exception:
            logger.exception("Sign-up failed for %s", form.cleaned_data.get("email"))
            messages.error(request, "Error al registrar. Intenta de nuevo.")
            return render(request, "accounts/signup.html", {"form": form})
        messages.success(request, "¡Registro exitoso! Ya puedes iniciar sesión.")
        return redirect("accounts:login")
    return render(request, "accounts/signup.html", {"form": form})


@role_required()
@require_http_methods(["GET", "POST"])
def profile_view(request):
    profile = request.profile
    # the form edits its own copy; the page header keeps the stored values
    form = ProfileForm(request.POST or None, request.FILES or None, instance=Profile.objects.get(pk=profile.pk))
    if request.method == "POST" and form.is_valid():
        try:
            form.save()
        except Exception:
            logger.exception("Profile update failed for user %s", request.user.pk)
            messages.error(request, "Error al actualizar el perfil. Inténtalo de nuevo.")
        else:
            messages.success(request, "Perfil actualizado correctamente.")
            return redirect("accounts:profile")
    return render(request, "accounts/profile.html", {"form": form, "profile": profile})
