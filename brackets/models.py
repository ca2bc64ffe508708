from django.conf import settings
from django.db import models
from teams.models import Team
from tournaments.models import Tournament


class Bracket(models.Model):
    tournament = models.OneToOneField(
        Tournament, on_delete=models.CASCADE, related_name="bracket"
    )
    bracket_size = models.PositiveIntegerField()
    total_rounds = models.PositiveIntegerField()
    participants_count = models.PositiveIntegerField()
    bronze_match = models.BooleanField(default=False)
    number_of_groups = models.PositiveIntegerField(default=1)
    seeding_mode = models.CharField(max_length=8, choices=Tournament.Seeding.choices)
    generated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Bracket of {self.tournament}"


class BracketGroup(models.Model):
    bracket = models.ForeignKey(Bracket, on_delete=models.CASCADE, related_name="groups")
    number = models.PositiveIntegerField()
    name = models.CharField(max_length=32)
    bracket_size = models.PositiveIntegerField()
    total_rounds = models.PositiveIntegerField()
    participants_count = models.PositiveIntegerField()

    class Meta:
        ordering = ["number"]
        constraints = [
            models.UniqueConstraint(fields=["bracket", "number"], name="unique_group_number_per_bracket"),
        ]

    def __str__(self):
        return f"{self.name} ({self.bracket})"


class Match(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        SCHEDULED = "SCHEDULED", "Scheduled"
        LIVE = "LIVE", "Live"
        COMPLETED = "COMPLETED", "Completed"
        CANCELLED = "CANCELLED", "Cancelled"
        WALKOVER = "WALKOVER", "Walkover"
        DISQUALIFIED = "DISQUALIFIED", "Disqualified"

    FINALIZED_STATUSES = (Status.COMPLETED, Status.WALKOVER, Status.DISQUALIFIED)
    TERMINAL_STATUSES = FINALIZED_STATUSES + (Status.CANCELLED,)

    bracket = models.ForeignKey(Bracket, on_delete=models.CASCADE, related_name="matches")
    group = models.PositiveIntegerField(default=1)
    match_number = models.PositiveIntegerField()
    round = models.PositiveIntegerField()
    position_in_round = models.PositiveIntegerField()
    is_bronze_match = models.BooleanField(default=False)

    participant1 = models.ForeignKey(
        Team, on_delete=models.PROTECT, null=True, blank=True, related_name="bracket_matches_as_p1"
    )
    participant2 = models.ForeignKey(
        Team, on_delete=models.PROTECT, null=True, blank=True, related_name="bracket_matches_as_p2"
    )
    participant1_bye = models.BooleanField(default=False)
    participant2_bye = models.BooleanField(default=False)

    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    winner = models.ForeignKey(
        Team, on_delete=models.PROTECT, null=True, blank=True, related_name="bracket_wins"
    )
    disqualified_participant = models.ForeignKey(
        Team, on_delete=models.PROTECT, null=True, blank=True, related_name="bracket_disqualifications"
    )
    is_finalized = models.BooleanField(default=False)
    score1 = models.PositiveIntegerField(null=True, blank=True)
    score2 = models.PositiveIntegerField(null=True, blank=True)

    scheduled_at = models.DateTimeField(null=True, blank=True)
    started_at = models.DateTimeField(null=True, blank=True)
    finished_at = models.DateTimeField(null=True, blank=True)

    version = models.PositiveIntegerField(default=1)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["group", "round", "is_bronze_match", "position_in_round"]
        indexes = [
            models.Index(fields=["bracket", "group", "round"], name="match_bracket_group_round_idx"),
            models.Index(fields=["bracket", "status"], name="match_bracket_status_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["bracket", "match_number"], name="unique_match_number_per_bracket"
            ),
            models.UniqueConstraint(
                fields=["bracket", "group", "round", "position_in_round", "is_bronze_match"],
                name="unique_match_slot_per_group",
            ),
            models.CheckConstraint(
                condition=~models.Q(participant1=models.F("participant2")),
                name="bracket_match_participants_distinct",
            ),
        ]

    def __str__(self):
        return f"#{self.match_number} {self.slot_label(0)} vs {self.slot_label(1)}"

    # ---- slots ----
    def slot(self, index: int) -> tuple[int | None, bool]:
        if index == 0:
            return self.participant1_id, self.participant1_bye
        return self.participant2_id, self.participant2_bye

    def set_slot(self, index: int, participant_id: int | None, bye: bool = False):
        if index == 0:
            self.participant1_id, self.participant1_bye = participant_id, bye
        else:
            self.participant2_id, self.participant2_bye = participant_id, bye

    def slot_label(self, index: int) -> str:
        participant_id, bye = self.slot(index)
        if bye:
            return "BYE"
        return str(participant_id) if participant_id else "TBD"

    @property
    def has_both_participants(self) -> bool:
        return bool(self.participant1_id and self.participant2_id)

    @property
    def is_bye_match(self) -> bool:
        return self.participant1_bye or self.participant2_bye

    @property
    def is_terminal(self) -> bool:
        return self.status in self.TERMINAL_STATUSES

    @property
    def is_ready(self) -> bool:
        return self.has_both_participants and not self.is_terminal

    def has_participant(self, participant_id) -> bool:
        return participant_id is not None and participant_id in (self.participant1_id, self.participant2_id)

    def opponent_of(self, participant_id) -> tuple[int | None, bool]:
        if participant_id == self.participant1_id:
            return self.slot(1)
        return self.slot(0)

    def loser(self) -> tuple[int | None, bool]:
        """(participant_id, is_bye) of the side that did not win."""
        if not self.is_finalized or not self.winner_id:
            return None, False
        return self.opponent_of(self.winner_id)
