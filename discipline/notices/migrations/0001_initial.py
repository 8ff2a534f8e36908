import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reason", models.TextField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("student_name", models.CharField(max_length=200)),
                ("teacher_name", models.CharField(max_length=200)),
                ("student", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="notices_received", to=settings.AUTH_USER_MODEL)),
                ("teacher", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="notices_issued", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
