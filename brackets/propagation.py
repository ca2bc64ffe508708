"""Moving winners (and bronze-feed losers) through one group's tree.

``BracketTree`` indexes the matches of a single group. ``advance`` pushes a
finalized match's outcome downstream, ``retract`` pulls it back out before a
re-open. Both mutate matches in memory and return the ones they touched.
"""
import logging

from . import state
from .exceptions import BracketIntegrityError, DownstreamAlreadyFinalized
from .models import Match

log = logging.getLogger(__name__)


class BracketTree:
    def __init__(self, matches):
        self.matches = list(matches)
        self.regular = {}
        self.bronze = None
        for m in self.matches:
            if m.is_bronze_match:
                self.bronze = m
            else:
                self.regular[(m.round, m.position_in_round)] = m
        self.total_rounds = max((r for r, _ in self.regular), default=0)

    @property
    def final(self):
        return self.regular.get((self.total_rounds, 0))

    def is_final(self, match) -> bool:
        return not match.is_bronze_match and match.round == self.total_rounds

    def round_matches(self, round_number):
        return sorted(
            (m for (r, _), m in self.regular.items() if r == round_number),
            key=lambda m: m.position_in_round,
        )

    def winner_link(self, match):
        """(target, slot) the winner of ``match`` moves into, or None."""
        if match.is_bronze_match or match.round >= self.total_rounds:
            return None
        target = self.regular.get((match.round + 1, match.position_in_round // 2))
        if target is None:
            raise BracketIntegrityError(
                f"Match #{match.match_number} has no parent match", match_id=match.pk
            )
        return target, match.position_in_round % 2

    def loser_link(self, match):
        if (
            self.bronze is None
            or match.is_bronze_match
            or match.round != self.total_rounds - 1
        ):
            return None
        return self.bronze, match.position_in_round

    def links(self, match):
        return [link for link in (self.winner_link(match), self.loser_link(match)) if link]

    def champion_id(self):
        final = self.final
        if final is not None and final.is_finalized:
            return final.winner_id
        return None


def _remember(touched, match):
    if all(m is not match for m in touched):
        touched.append(match)


def _fill(tree, target, slot, participant_id, bye, touched, now):
    current_id, current_bye = target.slot(slot)
    if (current_id, current_bye) == (participant_id, bye):
        return
    if target.is_finalized:
        raise BracketIntegrityError(
            f"Match #{target.match_number} is already finalized", match_id=target.pk
        )
    if current_id is not None or current_bye:
        raise BracketIntegrityError(
            f"Slot {slot + 1} of match #{target.match_number} is already taken",
            match_id=target.pk,
        )
    target.set_slot(slot, participant_id, bye)
    if target.has_participant(participant_id) and target.participant1_id == target.participant2_id:
        raise BracketIntegrityError(
            f"Participant {participant_id} would meet itself in match #{target.match_number}",
            match_id=target.pk,
        )
    _remember(touched, target)
    if target.is_bye_match and target.status in state.OPEN:
        if state.resolve_bye(target, now) is not None:
            log.debug("Match #%s resolved by bye", target.match_number)
            _advance(tree, target, touched, now)


def _advance(tree, match, touched, now):
    if not match.is_finalized:
        return
    link = tree.winner_link(match)
    if link:
        _fill(tree, *link, match.winner_id, False, touched, now)
    link = tree.loser_link(match)
    if link:
        loser_id, loser_bye = match.loser()
        _fill(tree, *link, loser_id, loser_bye, touched, now)


def advance(tree, match, now=None) -> list[Match]:
    """Propagate the outcome of a finalized ``match``; returns downstream matches written."""
    touched = []
    _advance(tree, match, touched, now)
    return touched


def _check_retractable(tree, match, cascade):
    for target, slot in tree.links(match):
        participant_id, bye = target.slot(slot)
        if participant_id is None and not bye:
            continue
        if not target.is_finalized:
            continue
        if not cascade and not state.is_bye_resolved(target):
            raise DownstreamAlreadyFinalized(
                f"Match #{target.match_number} already has a result; re-open it first "
                f"or retry with cascade",
                match_id=target.pk,
            )
        _check_retractable(tree, target, cascade)


def _retract(tree, match, touched):
    for target, slot in tree.links(match):
        participant_id, bye = target.slot(slot)
        if participant_id is None and not bye:
            continue
        if target.is_finalized:
            _retract(tree, target, touched)
            state.reset(target)
        elif target.status in (Match.Status.SCHEDULED, Match.Status.LIVE):
            target.status = Match.Status.PENDING
            target.started_at = None
        target.set_slot(slot, None, False)
        _remember(touched, target)


def retract(tree, match, cascade=False) -> list[Match]:
    """Clear everything ``match`` put downstream so it can be re-opened.

    Raises ``DownstreamAlreadyFinalized`` before touching anything when a
    downstream result would be lost and ``cascade`` is off.
    """
    _check_retractable(tree, match, cascade)
    touched = []
    _retract(tree, match, touched)
    return touched


def resolve_initial_byes(tree, now=None) -> list[Match]:
    touched = []
    for match in tree.round_matches(1):
        if match.is_bye_match and not match.is_finalized:
            state.resolve_bye(match, now)
            _remember(touched, match)
            _advance(tree, match, touched, now)
    return touched
