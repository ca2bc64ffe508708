import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("teams", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tournament",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=128)),
                ("description", models.TextField(blank=True)),
                ("logo", models.ImageField(blank=True, null=True, upload_to="tournaments/logos/")),
                ("poster", models.ImageField(blank=True, null=True, upload_to="tournaments/posters/")),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("upcoming", "Upcoming"), ("running", "Running"), ("finished", "Finished")],
                        default="upcoming",
                        max_length=16,
                    ),
                ),
                ("max_teams", models.PositiveIntegerField(default=16)),
                ("min_teams", models.PositiveIntegerField(default=2)),
                ("team_size", models.PositiveIntegerField(default=5)),
                (
                    "tournament_type",
                    models.CharField(
                        choices=[
                            ("SINGLE_ELIMINATION", "Single elimination"),
                            ("DOUBLE_ELIMINATION", "Double elimination"),
                            ("ROUND_ROBIN", "Round robin"),
                            ("SWISS", "Swiss"),
                        ],
                        default="SINGLE_ELIMINATION",
                        max_length=24,
                    ),
                ),
                (
                    "seeding_mode",
                    models.CharField(
                        choices=[("AUTO", "Auto"), ("MANUAL", "Manual"), ("RANDOM", "Random")],
                        default="AUTO",
                        max_length=8,
                    ),
                ),
                ("format_settings", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("registration_open", models.BooleanField(default=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "winner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="won_tournaments",
                        to="teams.team",
                    ),
                ),
                (
                    "admins",
                    models.ManyToManyField(
                        blank=True,
                        related_name="managed_tournaments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ("-start_date", "id"),
            },
        ),
        migrations.CreateModel(
            name="TournamentTeam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("seed", models.PositiveIntegerField(blank=True, null=True)),
                ("registered_at", models.DateTimeField(auto_now_add=True)),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tournaments",
                        to="teams.team",
                    ),
                ),
                (
                    "tournament",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="participants",
                        to="tournaments.tournament",
                    ),
                ),
            ],
            options={
                "ordering": ("registered_at", "id"),
                "unique_together": {("tournament", "team")},
            },
        ),
        migrations.AddConstraint(
            model_name="tournamentteam",
            constraint=models.UniqueConstraint(
                condition=models.Q(("seed__isnull", False)),
                fields=("tournament", "seed"),
                name="unique_seed_per_tournament",
            ),
        ),
    ]
