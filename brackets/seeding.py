"""Seed ordering, the standard draw and group distribution.

Nothing here touches the database: callers hand in ``Participant`` records
and get ordered lists back.
"""
import random
from dataclasses import dataclass, replace

from .exceptions import (
    DuplicateSeed,
    InvalidGroupCount,
    InvalidParticipantCount,
    SeedOutOfRange,
)

AUTO = "AUTO"
MANUAL = "MANUAL"
RANDOM = "RANDOM"
SEEDING_MODES = (AUTO, MANUAL, RANDOM)

MIN_PARTICIPANTS = 2


@dataclass(frozen=True)
class Participant:
    id: int
    name: str
    type: str = "team"
    logo_url: str | None = None
    seed: int | None = None


class _Bye:
    def __repr__(self):
        return "BYE"

    def __bool__(self):
        return False


BYE = _Bye()


def next_power_of_two(n: int) -> int:
    return 1 << max(0, (n - 1).bit_length())


def draw_order(size: int) -> list[int]:
    """Seeds in bracket-slot order, e.g. 8 -> [1, 8, 4, 5, 2, 7, 3, 6]."""
    if size < 1 or size & (size - 1):
        raise ValueError(f"Draw size must be a power of two, got {size}")
    order = [1]
    while len(order) < size:
        n = len(order) * 2
        order = [x for s in order for x in (s, n + 1 - s)]
    return order


def _check_count(participants, max_teams, min_count):
    n = len(participants)
    if n < min_count:
        raise InvalidParticipantCount(
            f"At least {min_count} participants are required, got {n}",
            participants=n,
        )
    if max_teams is not None and n > max_teams:
        raise InvalidParticipantCount(
            f"Too many participants: {n} registered, limit is {max_teams}",
            participants=n,
        )


def _check_manual_seeds(participants):
    n = len(participants)
    seen = {}
    for p in participants:
        if p.seed is None or not 1 <= p.seed <= n:
            raise SeedOutOfRange(
                f"{p.name} needs a seed between 1 and {n}",
                participant_id=p.id,
            )
        if p.seed in seen:
            raise DuplicateSeed(
                f"Seed {p.seed} is assigned to both {seen[p.seed].name} and {p.name}",
                seed=p.seed,
            )
        seen[p.seed] = p


def seed_participants(participants, mode=AUTO, max_teams=None, rng=None,
                      min_count=MIN_PARTICIPANTS) -> list[Participant]:
    """Return participants ordered by their final seed, seeds set to 1..N.

    ``participants`` must already be in registration order; AUTO keeps it for
    the unseeded ones.
    """
    if mode not in SEEDING_MODES:
        raise ValueError(f"Unknown seeding mode: {mode}")
    participants = list(participants)
    _check_count(participants, max_teams, min_count)

    if mode == RANDOM:
        ordered = list(participants)
        (rng or random.Random()).shuffle(ordered)
    elif mode == MANUAL:
        _check_manual_seeds(participants)
        ordered = sorted(participants, key=lambda p: p.seed)
    else:
        seeded = sorted((p for p in participants if p.seed is not None), key=lambda p: p.seed)
        ordered = seeded + [p for p in participants if p.seed is None]

    return [replace(p, seed=i) for i, p in enumerate(ordered, start=1)]


def pad_with_byes(seeded) -> list:
    """Seed-ordered list of length S; seeds N+1..S are ``BYE``."""
    size = next_power_of_two(len(seeded))
    return list(seeded) + [BYE] * (size - len(seeded))


def slot_order(padded) -> list:
    """Lay a padded seed list out in bracket-slot order."""
    return [padded[s - 1] for s in draw_order(len(padded))]


def group_name(number: int) -> str:
    return f"Group {chr(ord('A') + number - 1)}"


def distribute_into_groups(seeded, number_of_groups: int) -> list[list[Participant]]:
    """Deal seeds over groups in serpentine order: A B C C B A A B C ..."""
    if number_of_groups < 1:
        raise InvalidGroupCount("Number of groups must be at least 1", number_of_groups=number_of_groups)
    if len(seeded) < MIN_PARTICIPANTS * number_of_groups:
        raise InvalidGroupCount(
            f"{len(seeded)} participants cannot fill {number_of_groups} groups "
            f"of at least {MIN_PARTICIPANTS}",
            number_of_groups=number_of_groups,
        )
    groups = [[] for _ in range(number_of_groups)]
    for i, participant in enumerate(seeded):
        lap, offset = divmod(i, number_of_groups)
        index = offset if lap % 2 == 0 else number_of_groups - 1 - offset
        groups[index].append(participant)
    return groups
