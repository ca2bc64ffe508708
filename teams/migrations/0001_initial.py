import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, unique=True)),
                ("tag", models.CharField(max_length=8, unique=True)),
                ("slug", models.SlugField(blank=True, max_length=64, unique=True)),
                (
                    "kind",
                    models.CharField(
                        choices=[("team", "Team"), ("player", "Player")],
                        default="team",
                        max_length=8,
                    ),
                ),
                ("logo", models.ImageField(blank=True, null=True, upload_to="team_logos/")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "captain",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="captain_teams",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ("name",),
            },
        ),
    ]
