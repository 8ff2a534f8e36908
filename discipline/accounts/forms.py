import re

from django import forms
from django.db import transaction

from .models import Profile, User
from .photos import discard_profile_photo, upload_profile_photo

# (min, max) digits per cédula segment
CEDULA_PART_RANGES = ((1, 3), (3, 5), (3, 5))

REQUIRED_FIELDS_MSG = "Por favor, completa todos los campos obligatorios."
CEDULA_INVALID_MSG = "Por favor, ingresa una cédula válida en sus tres partes."
PASSPORT_REQUIRED_MSG = "Por favor, ingresa el número de pasaporte."
STUDENT_FIELDS_MSG = "Por favor, completa todos los campos para estudiantes."
EMAIL_IN_USE_MSG = "El correo electrónico ya está en uso."
WEAK_PASSWORD_MSG = "La contraseña debe tener al menos 6 caracteres."
CEDULA_LENGTH_MSG = "Cada parte de la cédula debe tener una longitud válida."
PASSPORT_MISSING_MSG = "Debe ingresar el número de pasaporte."

MIN_PASSWORD_LENGTH = 6


def valid_cedula_part(part: str, min_len: int, max_len: int) -> bool:
    return bool(re.fullmatch(rf"[0-9]{{{min_len},{max_len}}}", part or ""))


def join_cedula(parts) -> str:
    return "-".join(parts)


def _text(**attrs):
    return forms.TextInput(attrs={"class": "form-control", **attrs})


class DocumentFieldsMixin(forms.Form):
    document_type = forms.ChoiceField(
        choices=Profile.DOCUMENT_CHOICES,
        initial="cedula",
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    cedula_1 = forms.CharField(max_length=3, required=False, widget=_text(placeholder="001", inputmode="numeric"))
    cedula_2 = forms.CharField(max_length=5, required=False, widget=_text(placeholder="12345", inputmode="numeric"))
    cedula_3 = forms.CharField(max_length=5, required=False, widget=_text(placeholder="678", inputmode="numeric"))
    passport = forms.CharField(max_length=30, required=False, widget=_text())

    def cedula_parts(self):
        return tuple((self.cleaned_data.get(f"cedula_{i}") or "").strip() for i in (1, 2, 3))

    def national_id(self) -> str:
        if self.cleaned_data.get("document_type") == "cedula":
            return join_cedula(self.cedula_parts())
        return (self.cleaned_data.get("passport") or "").strip()


class LoginForm(forms.Form):
    email = forms.EmailField(required=False, widget=forms.EmailInput(attrs={"class": "form-control"}))
    password = forms.CharField(required=False, widget=forms.PasswordInput(attrs={"class": "form-control"}))


class SignUpForm(DocumentFieldsMixin):
    first_name = forms.CharField(max_length=60, required=False, widget=_text())
    middle_name = forms.CharField(max_length=60, required=False, widget=_text())
    last_name = forms.CharField(max_length=60, required=False, widget=_text())
    role = forms.ChoiceField(
        choices=[("estudiante", "Estudiante"), ("profesor", "Profesor")],
        initial="estudiante",
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    classroom = forms.CharField(max_length=20, required=False, widget=_text())
    grade = forms.CharField(max_length=20, required=False, widget=_text())
    guardian_name = forms.CharField(max_length=120, required=False, widget=_text())
    guardian_phone = forms.CharField(max_length=40, required=False, widget=_text())
    email = forms.EmailField(required=False, widget=forms.EmailInput(attrs={"class": "form-control"}))
    password = forms.CharField(required=False, widget=forms.PasswordInput(attrs={"class": "form-control"}))
    photo = forms.FileField(required=False, widget=forms.ClearableFileInput(attrs={"class": "form-control", "accept": "image/*"}))

    def clean(self):
        data = super().clean()
        if not all((data.get("first_name"), data.get("last_name"), data.get("email"), data.get("password"))):
            raise forms.ValidationError(REQUIRED_FIELDS_MSG)

        if data.get("document_type") == "cedula":
            parts = self.cedula_parts()
            if not all(valid_cedula_part(p, lo, hi) for p, (lo, hi) in zip(parts, CEDULA_PART_RANGES)):
                raise forms.ValidationError(CEDULA_INVALID_MSG)
        elif not (data.get("passport") or "").strip():
            raise forms.ValidationError(PASSPORT_REQUIRED_MSG)

        if data.get("role") == "estudiante":
            student_fields = ("classroom", "grade", "guardian_name", "guardian_phone")
            if not all(data.get(f) for f in student_fields):
                raise forms.ValidationError(STUDENT_FIELDS_MSG)

        if User.objects.filter(email__iexact=data["email"]).exists():
            raise forms.ValidationError(EMAIL_IN_USE_MSG)
        if len(data["password"]) < MIN_PASSWORD_LENGTH:
            raise forms.ValidationError(WEAK_PASSWORD_MSG)
        return data

    @transaction.atomic
    def save(self, storage=None) -> Profile:
        data = self.cleaned_data
        email = data["email"].strip().lower()
        user = User.objects.create_user(username=email, email=email, password=data["password"])

        photo_url = ""
        if data.get("photo"):
            photo_url = upload_profile_photo(user, data["photo"], storage=storage, suffix=data["photo"].name)

        is_student = data["role"] == "estudiante"
        profile = Profile(
            user=user,
            first_name=data["first_name"].strip(),
            middle_name=(data.get("middle_name") or "").strip(),
            last_name=data["last_name"].strip(),
            document_type=data["document_type"],
            national_id=self.national_id(),
            email=email,
            # teacher accounts wait for an administrator
            role="estudiante" if is_student else "pendiente",
            photo_url=photo_url,
        )
        if is_student:
            profile.classroom = data["classroom"]
            profile.grade = data["grade"]
            profile.guardian_name = data["guardian_name"]
            profile.guardian_phone = data["guardian_phone"]
        try:
            profile.save()
        except Exception:
            if photo_url:
                discard_profile_photo(user, storage=storage, suffix=data["photo"].name)
            raise
        return profile


class ProfileForm(DocumentFieldsMixin, forms.ModelForm):
    photo = forms.FileField(required=False, widget=forms.ClearableFileInput(attrs={"class": "form-control", "accept": "image/*"}))

    STUDENT_FIELDS = ("grade", "classroom", "guardian_name", "guardian_phone")

    class Meta:
        model = Profile
        fields = ["first_name", "middle_name", "last_name", "document_type", "grade", "classroom", "guardian_name", "guardian_phone"]
        widgets = {
            "first_name": forms.TextInput(attrs={"class": "form-control"}),
            "middle_name": forms.TextInput(attrs={"class": "form-control"}),
            "last_name": forms.TextInput(attrs={"class": "form-control"}),
            "document_type": forms.Select(attrs={"class": "form-select"}),
            "grade": forms.TextInput(attrs={"class": "form-control"}),
            "classroom": forms.TextInput(attrs={"class": "form-control"}),
            "guardian_name": forms.TextInput(attrs={"class": "form-control"}),
            "guardian_phone": forms.TextInput(attrs={"class": "form-control"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        profile = self.instance
        if not self.is_bound:
            if profile.document_type == "cedula":
                for i, part in enumerate(profile.national_id_parts, start=1):
                    self.initial[f"cedula_{i}"] = part
            else:
                self.initial["passport"] = profile.national_id
        if not profile.is_student:
            for name in self.STUDENT_FIELDS:
                del self.fields[name]

    def clean(self):
        data = super().clean()
        if data.get("document_type") == "cedula":
            parts = self.cedula_parts()
            if not all(lo <= len(p) <= hi for p, (lo, hi) in zip(parts, CEDULA_PART_RANGES)):
                raise forms.ValidationError(CEDULA_LENGTH_MSG)
        elif not (data.get("passport") or "").strip():
            raise forms.ValidationError(PASSPORT_MISSING_MSG)
        return data

    def save(self, storage=None) -> Profile:
        profile = super().save(commit=False)
        profile.national_id = self.national_id()
        photo = self.cleaned_data.get("photo")
        if photo:
            profile.photo_url = upload_profile_photo(profile.user, photo, storage=storage)
        # profile fields and the photo reference go out in one write
        profile.save()
        return profile
