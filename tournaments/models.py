from django.conf import settings
from django.db import models
from teams.models import Team

from .formats import parse_format_settings


class Tournament(models.Model):
    STATUS_CHOICES = [
        ("upcoming", "Upcoming"),
        ("running", "Running"),
        ("finished", "Finished"),
    ]

    class Type(models.TextChoices):
        SINGLE_ELIMINATION = "SINGLE_ELIMINATION", "Single elimination"
        DOUBLE_ELIMINATION = "DOUBLE_ELIMINATION", "Double elimination"
        ROUND_ROBIN = "ROUND_ROBIN", "Round robin"
        SWISS = "SWISS", "Swiss"

    class Seeding(models.TextChoices):
        AUTO = "AUTO", "Auto"
        MANUAL = "MANUAL", "Manual"
        RANDOM = "RANDOM", "Random"

    name = models.CharField(max_length=128)
    description = models.TextField(blank=True)
    logo = models.ImageField(upload_to="tournaments/logos/", blank=True, null=True)
    poster = models.ImageField(upload_to="tournaments/posters/", blank=True, null=True)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="upcoming")
    max_teams = models.PositiveIntegerField(default=16)
    min_teams = models.PositiveIntegerField(default=2)
    team_size = models.PositiveIntegerField(default=5)
    tournament_type = models.CharField(
        max_length=24, choices=Type.choices, default=Type.SINGLE_ELIMINATION
    )
    seeding_mode = models.CharField(
        max_length=8, choices=Seeding.choices, default=Seeding.AUTO
    )
    format_settings = models.JSONField(default=dict, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    registration_open = models.BooleanField(default=True)
    winner = models.ForeignKey(
        Team, null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name="won_tournaments"
    )
    admins = models.ManyToManyField(
        settings.AUTH_USER_MODEL, blank=True, related_name="managed_tournaments"
    )

    class Meta:
        ordering = ("-start_date", "id")

    def __str__(self):
        return self.name

    @property
    def settings_record(self):
        return parse_format_settings(self.tournament_type, self.format_settings)

    def is_managed_by(self, user) -> bool:
        return bool(user and user.is_authenticated) and (
            user.is_staff or self.admins.filter(id=user.id).exists()
        )


class TournamentTeam(models.Model):
    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE, related_name="participants")
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="tournaments")
    seed = models.PositiveIntegerField(null=True, blank=True)
    registered_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("tournament", "team")
        ordering = ("registered_at", "id")
        constraints = [
            models.UniqueConstraint(
                fields=["tournament", "seed"],
                condition=models.Q(seed__isnull=False),
                name="unique_seed_per_tournament",
            ),
        ]

    def __str__(self):
        return f"{self.team} → {self.tournament}"
