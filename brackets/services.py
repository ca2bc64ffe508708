import inspect
import logging
from dataclasses import dataclass, field, replace

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import ValidationError
from tournaments.models import Tournament, TournamentTeam

from . import propagation, state
from .builder import build_bracket
from .exceptions import (
    BracketAlreadyExists,
    BracketValidationError,
    ConcurrentModification,
    InvalidFormatSettings,
    InvalidGroupCount,
    UnsupportedFormat,
)
from .models import Bracket, BracketGroup, Match
from .propagation import BracketTree
from .seeding import MIN_PARTICIPANTS, Participant, seed_participants
from .signals import bracket_completed, bracket_reopened

log = logging.getLogger(__name__)

STATE_FIELDS = (
    "participant1_id",
    "participant2_id",
    "participant1_bye",
    "participant2_bye",
    "status",
    "winner_id",
    "disqualified_participant_id",
    "is_finalized",
    "score1",
    "score2",
    "scheduled_at",
    "started_at",
    "finished_at",
)


@dataclass
class MatchOutcome:
    match: Match
    touched: list = field(default_factory=list)


# ---------- generation ----------

def participants_for(tournament) -> list[Participant]:
    registrations = tournament.participants.select_related("team").order_by("registered_at", "id")
    return [
        Participant(
            id=r.team_id,
            name=r.team.name,
            type=r.team.kind,
            logo_url=r.team.logo_url,
            seed=r.seed,
        )
        for r in registrations
    ]


def resolve_format_settings(tournament, bronze_match=None, number_of_groups=None):
    if tournament.tournament_type != Tournament.Type.SINGLE_ELIMINATION:
        raise UnsupportedFormat(
            f"{tournament.get_tournament_type_display()} brackets are not supported",
            tournament_type=tournament.tournament_type,
        )
    try:
        record = tournament.settings_record
    except ValidationError as exc:
        raise InvalidFormatSettings("Tournament format settings are invalid", errors=exc.detail) from exc

    overrides = {}
    if bronze_match is not None:
        overrides["bronze_match"] = bronze_match
    if number_of_groups is not None:
        overrides["number_of_groups"] = number_of_groups
    record = replace(record, **overrides)

    if not 1 <= record.number_of_groups <= settings.BRACKET_MAX_GROUPS:
        raise InvalidGroupCount(
            f"Number of groups must be between 1 and {settings.BRACKET_MAX_GROUPS}",
            number_of_groups=record.number_of_groups,
        )
    return record


def _store_seeds(tournament, seeded):
    seeds = {p.id: p.seed for p in seeded}
    registrations = list(tournament.participants.all())
    tournament.participants.update(seed=None)
    for registration in registrations:
        registration.seed = seeds.get(registration.team_id)
    TournamentTeam.objects.bulk_update(registrations, ["seed"])


def generate_bracket(tournament_id, actor=None, *, max_participants=None, bronze_match=None,
                     number_of_groups=None, force=False, rng=None, now=None) -> Bracket:
    """Create the full match skeleton for a tournament in one transaction.

    Options left as ``None`` fall back to the tournament's ``format_settings``
    and ``max_teams``. An existing bracket is only replaced with ``force``.
    """
    with transaction.atomic():
        tournament = Tournament.objects.select_for_update().get(pk=tournament_id)

        existing = Bracket.objects.filter(tournament=tournament).first()
        if existing is not None and existing.matches.exists():
            if not force:
                raise BracketAlreadyExists(
                    f"Tournament {tournament.pk} already has a bracket",
                    tournament_id=tournament.pk,
                )
            log.info("Regenerating bracket for tournament %s by %s", tournament.pk, actor)
        if existing is not None:
            existing.delete()

        record = resolve_format_settings(tournament, bronze_match, number_of_groups)
        seeded = seed_participants(
            participants_for(tournament),
            tournament.seeding_mode,
            max_teams=max_participants if max_participants is not None else tournament.max_teams,
            rng=rng,
            min_count=max(MIN_PARTICIPANTS, settings.TOURNAMENT_MIN_TEAMS, tournament.min_teams),
        )
        plan = build_bracket(seeded, record.number_of_groups, record.bronze_match, now=now)

        try:
            with transaction.atomic():
                bracket = Bracket.objects.create(
                    tournament=tournament,
                    bracket_size=plan.bracket_size,
                    total_rounds=plan.total_rounds,
                    participants_count=plan.participants_count,
                    bronze_match=record.bronze_match,
                    number_of_groups=record.number_of_groups,
                    seeding_mode=tournament.seeding_mode,
                    generated_by=actor if actor is not None and actor.is_authenticated else None,
                )
        except IntegrityError as exc:
            raise BracketAlreadyExists(
                f"Tournament {tournament.pk} already has a bracket",
                tournament_id=tournament.pk,
            ) from exc

        BracketGroup.objects.bulk_create([
            BracketGroup(
                bracket=bracket,
                number=g.number,
                name=g.name,
                bracket_size=g.bracket_size,
                total_rounds=g.total_rounds,
                participants_count=len(g.participants),
            )
            for g in plan.groups
        ])
        matches = plan.matches
        for match in matches:
            match.bracket = bracket
        Match.objects.bulk_create(matches)
        _store_seeds(tournament, seeded)

        transaction.on_commit(lambda: send_ws_update(tournament.pk, {
            "type": "bracket_generated",
            "tournament_id": tournament.pk,
            "bracket_id": bracket.pk,
        }))

    log.info(
        "Generated bracket %s for tournament %s: %s participants, %s matches, by %s",
        bracket.pk, tournament.pk, plan.participants_count, len(matches), actor,
    )
    return bracket


# ---------- match mutations ----------

def _read_match(match_id):
    return Match.objects.select_related("bracket").get(pk=match_id)


def _lock_group(base):
    """Lock every match of ``base``'s group and index them as a tree."""
    group = list(
        Match.objects.select_for_update()
        .filter(bracket_id=base.bracket_id, group=base.group)
        .order_by("round", "is_bronze_match", "position_in_round")
    )
    match = next(m for m in group if m.pk == base.pk)
    return base.bracket, BracketTree(group), match


def _check_version(match, version):
    if version is not None and version != match.version:
        log.warning("Stale version %s for match #%s (current %s)", version, match.match_number, match.version)
        raise ConcurrentModification(
            f"Match #{match.match_number} was modified (version {match.version}, got {version})",
            match_id=match.pk,
            version=match.version,
        )


def _write(matches, now):
    seen = set()
    for match in matches:
        if match.pk in seen:
            continue
        seen.add(match.pk)
        values = {name: getattr(match, name) for name in STATE_FIELDS}
        updated = Match.objects.filter(pk=match.pk, version=match.version).update(
            version=F("version") + 1, updated_at=now, **values
        )
        if not updated:
            log.warning("Lost write race on match #%s", match.match_number)
            raise ConcurrentModification(
                f"Match #{match.match_number} was modified concurrently",
                match_id=match.pk,
            )
        match.version += 1


def _notify(bracket, group, matches, champion_before, champion_after):
    ids = list(dict.fromkeys(m.pk for m in matches))

    def send():
        if champion_after and champion_after != champion_before:
            bracket_completed.send(sender=Bracket, bracket=bracket, group=group, champion_id=champion_after)
        elif champion_before and not champion_after:
            bracket_reopened.send(sender=Bracket, bracket=bracket, group=group)
        broadcast_matches(bracket, ids)

    transaction.on_commit(send)


def _mutate(match_id, actor, version, apply, now=None, action="update"):
    now = now or timezone.now()
    with transaction.atomic():
        base = _read_match(match_id)
        bracket, tree, match = _lock_group(base)
        # the locked row must still be the one that was read
        _check_version(match, version if version is not None else base.version)
        champion_before = tree.champion_id()
        touched = apply(tree, match, now) or []
        _write([match, *touched], now)
        Bracket.objects.filter(pk=bracket.pk).update(updated_at=now)
        _notify(bracket, match.group, [match, *touched], champion_before, tree.champion_id())
    log.info("Match #%s %s by %s (%s downstream)", match.match_number, action, actor, len(touched))
    return MatchOutcome(match=match, touched=touched)


def record_result(match_id, actor=None, *, score1=None, score2=None, walkover_for=None,
                  disqualify=None, version=None, now=None) -> MatchOutcome:
    """Finalize a match by score, walkover or disqualification and propagate it."""
    given = [walkover_for is not None, disqualify is not None, score1 is not None or score2 is not None]
    if sum(given) != 1:
        raise BracketValidationError(
            "Provide either both scores, walkover_for or disqualify", match_id=match_id
        )

    def apply(tree, match, now):
        if walkover_for is not None:
            state.walkover(match, walkover_for, now)
        elif disqualify is not None:
            state.disqualify(match, disqualify, now)
        else:
            state.complete(match, score1, score2, now)
        return propagation.advance(tree, match, now)

    return _mutate(match_id, actor, version, apply, now, action="finalized")


def schedule_match(match_id, scheduled_at, actor=None, *, version=None, now=None) -> MatchOutcome:
    def apply(tree, match, now):
        state.schedule(match, scheduled_at)

    return _mutate(match_id, actor, version, apply, now, action="scheduled")


def start_match(match_id, actor=None, *, version=None, now=None) -> MatchOutcome:
    def apply(tree, match, now):
        state.start(match, now)

    return _mutate(match_id, actor, version, apply, now, action="started")


def cancel_match(match_id, actor=None, *, version=None, now=None) -> MatchOutcome:
    def apply(tree, match, now):
        state.cancel(match, now)

    return _mutate(match_id, actor, version, apply, now, action="cancelled")


def reopen_match(match_id, actor=None, *, cascade=False, version=None, now=None) -> MatchOutcome:
    """Clear a finalized or cancelled match, pulling its result back out of the tree."""

    def apply(tree, match, now):
        state.ensure_reopenable(match)
        retracted = propagation.retract(tree, match, cascade=cascade)
        state.reset(match)
        return retracted

    return _mutate(match_id, actor, version, apply, now, action="re-opened")


# ---------- realtime ----------

def send_ws_update(tournament_id, payload):
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    group = f"tournament_{tournament_id}"

    if inspect.iscoroutinefunction(channel_layer.group_send):
        async_to_sync(channel_layer.group_send)(group, payload)
    else:
        channel_layer.group_send(group, payload)


def broadcast_matches(bracket, match_ids):
    for match_id in match_ids:
        send_ws_update(bracket.tournament_id, {"type": "bracket_update", "match_id": match_id})
