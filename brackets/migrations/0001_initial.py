import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("teams", "0001_initial"),
        ("tournaments", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Bracket",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("bracket_size", models.PositiveIntegerField()),
                ("total_rounds", models.PositiveIntegerField()),
                ("participants_count", models.PositiveIntegerField()),
                ("bronze_match", models.BooleanField(default=False)),
                ("number_of_groups", models.PositiveIntegerField(default=1)),
                (
                    "seeding_mode",
                    models.CharField(
                        choices=[("AUTO", "Auto"), ("MANUAL", "Manual"), ("RANDOM", "Random")],
                        max_length=8,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "generated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "tournament",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bracket",
                        to="tournaments.tournament",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="BracketGroup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("number", models.PositiveIntegerField()),
                ("name", models.CharField(max_length=32)),
                ("bracket_size", models.PositiveIntegerField()),
                ("total_rounds", models.PositiveIntegerField()),
                ("participants_count", models.PositiveIntegerField()),
                (
                    "bracket",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="groups",
                        to="brackets.bracket",
                    ),
                ),
            ],
            options={
                "ordering": ["number"],
                "constraints": [
                    models.UniqueConstraint(fields=("bracket", "number"), name="unique_group_number_per_bracket"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Match",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("group", models.PositiveIntegerField(default=1)),
                ("match_number", models.PositiveIntegerField()),
                ("round", models.PositiveIntegerField()),
                ("position_in_round", models.PositiveIntegerField()),
                ("is_bronze_match", models.BooleanField(default=False)),
                ("participant1_bye", models.BooleanField(default=False)),
                ("participant2_bye", models.BooleanField(default=False)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("SCHEDULED", "Scheduled"),
                            ("LIVE", "Live"),
                            ("COMPLETED", "Completed"),
                            ("CANCELLED", "Cancelled"),
                            ("WALKOVER", "Walkover"),
                            ("DISQUALIFIED", "Disqualified"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                ("is_finalized", models.BooleanField(default=False)),
                ("score1", models.PositiveIntegerField(blank=True, null=True)),
                ("score2", models.PositiveIntegerField(blank=True, null=True)),
                ("scheduled_at", models.DateTimeField(blank=True, null=True)),
                ("started_at", models.DateTimeField(blank=True, null=True)),
                ("finished_at", models.DateTimeField(blank=True, null=True)),
                ("version", models.PositiveIntegerField(default=1)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "bracket",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="matches",
                        to="brackets.bracket",
                    ),
                ),
                (
                    "participant1",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bracket_matches_as_p1",
                        to="teams.team",
                    ),
                ),
                (
                    "participant2",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bracket_matches_as_p2",
                        to="teams.team",
                    ),
                ),
                (
                    "winner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bracket_wins",
                        to="teams.team",
                    ),
                ),
                (
                    "disqualified_participant",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bracket_disqualifications",
                        to="teams.team",
                    ),
                ),
            ],
            options={
                "ordering": ["group", "round", "is_bronze_match", "position_in_round"],
                "indexes": [
                    models.Index(fields=["bracket", "group", "round"], name="match_bracket_group_round_idx"),
                    models.Index(fields=["bracket", "status"], name="match_bracket_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("bracket", "match_number"), name="unique_match_number_per_bracket"),
                    models.UniqueConstraint(
                        fields=("bracket", "group", "round", "position_in_round", "is_bronze_match"),
                        name="unique_match_slot_per_group",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("participant1", models.F("participant2")), _negated=True),
                        name="bracket_match_participants_distinct",
                    ),
                ],
            },
        ),
    ]
