from django import forms


class CedulaSearchForm(forms.Form):
    cedula = forms.CharField(
        max_length=30,
        widget=forms.TextInput(attrs={
            "class": "form-control",
            "placeholder": "Buscar por cédula de estudiante",
        }),
    )


class NoticeForm(forms.Form):
    reason = forms.CharField(
        max_length=5000,
        widget=forms.Textarea(attrs={
            "class": "form-control",
            "rows": 3,
            "placeholder": "Escribe el motivo...",
        }),
    )

    def clean_reason(self):
        reason = self.cleaned_data["reason"].strip()
        if not reason:
            raise forms.ValidationError("Escribe el motivo de la amonestación.")
        return reason


class ConfirmForm(forms.Form):
    confirm = forms.BooleanField(required=True)


class CardPhotoForm(forms.Form):
    image = forms.FileField(widget=forms.ClearableFileInput(attrs={
        "class": "form-control",
        "accept": "image/*",
        "capture": "environment",
    }))
