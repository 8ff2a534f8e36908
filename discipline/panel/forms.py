from django import forms

class AssignRoleForm(forms.Form):
    role = forms.ChoiceField(
        choices=[("profesor", "Profesor"), ("estudiante", "Estudiante"), ("admin", "Administrador")],
        widget=forms.Select(attrs={"class": "form-select"}),
    )
