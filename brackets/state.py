"""Match lifecycle transitions.

Each function checks the transition, mutates the in-memory ``Match`` and
returns it. Saving and propagation are the caller's job.
"""
from django.utils import timezone

from .exceptions import (
    AmbiguousResult,
    BracketIntegrityError,
    BracketValidationError,
    InvalidParticipant,
    InvalidTransition,
    MissingParticipant,
)
from .models import Match

Status = Match.Status

OPEN = (Status.PENDING, Status.SCHEDULED, Status.LIVE)

TRANSITIONS = {
    "schedule": (Status.PENDING,),
    "start": (Status.SCHEDULED, Status.LIVE),
    "complete": OPEN,
    "walkover": OPEN,
    "disqualify": OPEN,
    "cancel": OPEN,
    "reopen": Match.TERMINAL_STATUSES,
}


def _require(match, action):
    allowed = TRANSITIONS[action]
    if match.status not in allowed:
        raise InvalidTransition(
            f"Cannot {action} match #{match.match_number} in status {match.status}",
            match_id=match.pk,
            status=match.status,
        )


def _require_participants(match, action):
    if not match.has_both_participants:
        raise MissingParticipant(
            f"Cannot {action} match #{match.match_number} before both participants are known",
            match_id=match.pk,
        )


def _require_member(match, participant_id):
    if not match.has_participant(participant_id):
        raise InvalidParticipant(
            f"Participant {participant_id} does not play in match #{match.match_number}",
            match_id=match.pk,
            participant_id=participant_id,
        )


def _finalize(match, status, winner_id, now):
    match.status = status
    match.winner_id = winner_id
    match.is_finalized = True
    match.finished_at = now or timezone.now()
    return match


def schedule(match, scheduled_at):
    _require(match, "schedule")
    _require_participants(match, "schedule")
    if scheduled_at is None:
        raise BracketValidationError("scheduled_at is required", match_id=match.pk)
    match.scheduled_at = scheduled_at
    match.status = Status.SCHEDULED
    return match


def start(match, now=None):
    _require(match, "start")
    if match.status == Status.LIVE:
        return match
    match.status = Status.LIVE
    if match.started_at is None:
        match.started_at = now or timezone.now()
    return match


def complete(match, score1, score2, now=None):
    _require(match, "complete")
    _require_participants(match, "record a result for")
    if score1 is None or score2 is None:
        raise BracketValidationError("Both scores are required", match_id=match.pk)
    if score1 < 0 or score2 < 0:
        raise BracketValidationError("Scores cannot be negative", match_id=match.pk)
    if score1 == score2:
        raise AmbiguousResult(
            f"Match #{match.match_number} cannot end in a draw ({score1}:{score2})",
            match_id=match.pk,
        )
    match.score1, match.score2 = score1, score2
    winner_id = match.participant1_id if score1 > score2 else match.participant2_id
    return _finalize(match, Status.COMPLETED, winner_id, now)


def walkover(match, participant_id, now=None):
    """``participant_id`` advances without playing."""
    _require(match, "walkover")
    _require_participants(match, "award a walkover in")
    _require_member(match, participant_id)
    return _finalize(match, Status.WALKOVER, participant_id, now)


def disqualify(match, participant_id, now=None):
    """``participant_id`` is disqualified, the opponent advances."""
    _require(match, "disqualify")
    _require_participants(match, "disqualify in")
    _require_member(match, participant_id)
    winner_id, _ = match.opponent_of(participant_id)
    match.disqualified_participant_id = participant_id
    return _finalize(match, Status.DISQUALIFIED, winner_id, now)


def cancel(match, now=None):
    _require(match, "cancel")
    match.status = Status.CANCELLED
    match.finished_at = now or timezone.now()
    return match


def resolve_bye(match, now=None):
    """Advance the lone participant of a match that has a bye slot."""
    (p1, bye1), (p2, bye2) = match.slot(0), match.slot(1)
    if bye1 and bye2:
        raise BracketIntegrityError(
            f"Match #{match.match_number} has byes in both slots", match_id=match.pk
        )
    winner_id = p1 if bye2 else p2
    if not winner_id:
        return None
    return _finalize(match, Status.WALKOVER, winner_id, now)


def is_bye_resolved(match) -> bool:
    return match.is_finalized and match.is_bye_match


def ensure_reopenable(match):
    _require(match, "reopen")
    if match.is_bye_match:
        raise InvalidTransition(
            f"Match #{match.match_number} was decided by a bye and cannot be re-opened",
            match_id=match.pk,
        )


def reset(match):
    """Back to PENDING with no result. ``scheduled_at`` survives."""
    match.status = Status.PENDING
    match.winner_id = None
    match.disqualified_participant_id = None
    match.is_finalized = False
    match.score1 = None
    match.score2 = None
    match.started_at = None
    match.finished_at = None
    return match


def reopen(match):
    ensure_reopenable(match)
    return reset(match)
