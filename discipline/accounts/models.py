from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    # sign-in identity only; everything the school knows lives on Profile
    email = models.EmailField(unique=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]


class Profile(models.Model):
    ROLE_CHOICES = [
        ("admin", "Administrador"),
        ("profesor", "Profesor"),
        ("estudiante", "Estudiante"),
        ("pendiente", "Pendiente"),
    ]
    DOCUMENT_CHOICES = [
        ("cedula", "Cédula"),
        ("pasaporte", "Pasaporte"),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, primary_key=True, related_name="profile")
    first_name = models.CharField(max_length=60)
    middle_name = models.CharField(max_length=60, blank=True)
    last_name = models.CharField(max_length=60)
    document_type = models.CharField(max_length=20, choices=DOCUMENT_CHOICES, default="cedula")
    national_id = models.CharField(max_length=30, db_index=True)  # "001-12345-678" or passport
    email = models.EmailField()
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="pendiente")
    photo_url = models.CharField(max_length=500, blank=True)

    # students only
    grade = models.CharField(max_length=20, blank=True)
    classroom = models.CharField(max_length=20, blank=True)
    guardian_name = models.CharField(max_length=120, blank=True)
    guardian_phone = models.CharField(max_length=40, blank=True)

    registered_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.display_name} ({self.role})"

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_student(self) -> bool:
        return self.role == "estudiante"

    @property
    def national_id_parts(self):
        if self.document_type != "cedula" or not self.national_id:
            return ("", "", "")
        parts = self.national_id.split("-")
        parts += [""] * (3 - len(parts))
        return tuple(parts[:3])

    def home_url_name(self) -> str:
        return {
            "admin": "panel:home",
            "profesor": "notices:carnet",
            "estudiante": "notices:history",
        }.get(self.role, "accounts:profile")
