"""Turns a seeded participant list into unsaved ``Match`` rows."""
import itertools
import logging
from dataclasses import dataclass, field

from .models import Match
from .propagation import BracketTree, resolve_initial_byes
from .seeding import BYE, distribute_into_groups, group_name, pad_with_byes, slot_order

log = logging.getLogger(__name__)


@dataclass
class GroupPlan:
    number: int
    name: str
    participants: list
    bracket_size: int
    total_rounds: int
    matches: list = field(default_factory=list)

    @property
    def tree(self):
        return BracketTree(self.matches)


@dataclass
class BracketPlan:
    groups: list
    bronze_match: bool

    @property
    def matches(self):
        return [m for g in self.groups for m in g.matches]

    @property
    def participants_count(self):
        return sum(len(g.participants) for g in self.groups)

    @property
    def bracket_size(self):
        return max(g.bracket_size for g in self.groups)

    @property
    def total_rounds(self):
        return max(g.total_rounds for g in self.groups)


def _new_match(counter, group, round_number, position, bronze=False):
    return Match(
        group=group,
        match_number=next(counter),
        round=round_number,
        position_in_round=position,
        is_bronze_match=bronze,
        status=Match.Status.PENDING,
    )


def _place(match, index, entrant):
    if entrant is BYE:
        match.set_slot(index, None, bye=True)
    else:
        match.set_slot(index, entrant.id)


def build_group(number, seeded, counter, bronze_match=False, now=None) -> GroupPlan:
    padded = pad_with_byes(seeded)
    size = len(padded)
    total_rounds = size.bit_length() - 1
    plan = GroupPlan(
        number=number,
        name=group_name(number),
        participants=list(seeded),
        bracket_size=size,
        total_rounds=total_rounds,
    )

    slots = slot_order(padded)
    for position in range(size // 2):
        match = _new_match(counter, number, 1, position)
        _place(match, 0, slots[2 * position])
        _place(match, 1, slots[2 * position + 1])
        plan.matches.append(match)

    for round_number in range(2, total_rounds + 1):
        for position in range(size >> round_number):
            plan.matches.append(_new_match(counter, number, round_number, position))

    if bronze_match and total_rounds >= 2:
        plan.matches.append(_new_match(counter, number, total_rounds, 0, bronze=True))

    resolve_initial_byes(plan.tree, now)
    return plan


def build_bracket(seeded, number_of_groups=1, bronze_match=False, now=None) -> BracketPlan:
    """Build every group of the bracket.

    ``seeded`` is the output of ``seeding.seed_participants``: real
    participants only, ordered by seed. Groups play independent trees and
    each crowns its own champion.
    """
    groups = distribute_into_groups(seeded, number_of_groups)
    counter = itertools.count(1)
    plan = BracketPlan(
        groups=[
            build_group(number, members, counter, bronze_match=bronze_match, now=now)
            for number, members in enumerate(groups, start=1)
        ],
        bronze_match=bronze_match,
    )
    log.debug(
        "Built %s matches for %s participants in %s group(s)",
        len(plan.matches), plan.participants_count, len(plan.groups),
    )
    return plan
