from django.conf import settings
from django.db import models
from django.utils.text import slugify


class Team(models.Model):
    class Kind(models.TextChoices):
        TEAM = "team", "Team"
        PLAYER = "player", "Player"

    name = models.CharField(max_length=50, unique=True)
    tag = models.CharField(max_length=8, unique=True)
    slug = models.SlugField(max_length=64, unique=True, blank=True)
    kind = models.CharField(max_length=8, choices=Kind.choices, default=Kind.TEAM)
    logo = models.ImageField(upload_to="team_logos/", blank=True, null=True)
    captain = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="captain_teams",
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("name",)

    def save(self, *args, **kwargs):
        if not self.slug:
            base = f"{self.tag}-{self.name}"
            self.slug = slugify(base)[:64]
        super().save(*args, **kwargs)

    def __str__(self):
        return f"[{self.tag}] {self.name}"

    @property
    def logo_url(self) -> str | None:
        return self.logo.url if self.logo else None

    @property
    def is_solo(self) -> bool:
        return self.kind == self.Kind.PLAYER
