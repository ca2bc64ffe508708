"""Read-side views of a bracket: rounds, groups, standings."""
from collections import Counter
from dataclasses import dataclass, field

from django.shortcuts import get_object_or_404
from tournaments.models import TournamentTeam

from . import state
from .models import BracketGroup, Match
from .propagation import BracketTree

MATCH_RELATED = ("participant1", "participant2", "winner", "disqualified_participant")


@dataclass
class RoundView:
    round: int
    name: str
    matches: list


@dataclass
class GroupView:
    group_id: int
    group_name: str
    bracket_size: int
    total_rounds: int
    participants_count: int
    rounds: list = field(default_factory=list)
    bronze_match: Match | None = None
    champion: object = None


@dataclass
class BracketView:
    bracket: object
    groups: list
    context: dict

    @property
    def tournament_id(self):
        return self.bracket.tournament_id

    @property
    def rounds(self):
        return self.groups[0].rounds if len(self.groups) == 1 else []


@dataclass
class Placement:
    participant: object
    place: int
    group: int
    dsq: bool = False
    ex_aequo: bool = False


@dataclass
class BracketSummary:
    tournament_id: int
    group_id: int
    group_name: str
    rounds: int
    current_round: int
    completed: int
    pending: int
    final_status: str | None
    bronze_enabled: bool
    bronze_status: str | None
    dq_list: list
    champion: object
    is_bracket_complete: bool


def round_name(round_number: int, total_rounds: int, bronze: bool = False) -> str:
    if bronze:
        return "Bronze Match"
    remaining = total_rounds - round_number
    if remaining == 0:
        return "Final"
    if remaining == 1:
        return "Semifinals"
    if remaining == 2:
        return "Quarterfinals"
    return f"Round of {2 ** (remaining + 1)}"


def load_matches(bracket, group=None):
    qs = bracket.matches.select_related(*MATCH_RELATED)
    if group is not None:
        qs = qs.filter(group=group)
    return list(qs.order_by("group", "round", "is_bronze_match", "position_in_round"))


def _by_group(matches):
    grouped = {}
    for m in matches:
        grouped.setdefault(m.group, []).append(m)
    return grouped


def match_links(matches) -> dict:
    links = {}
    for group_matches in _by_group(matches).values():
        tree = BracketTree(group_matches)
        for m in group_matches:
            winner_link = tree.winner_link(m)
            loser_link = tree.loser_link(m)
            links[m.pk] = {
                "next_match_id": winner_link[0].pk if winner_link else None,
                "next_match_slot": winner_link[1] if winner_link else None,
                "loser_match_id": loser_link[0].pk if loser_link else None,
            }
    return links


def seed_map(bracket) -> dict:
    return dict(
        TournamentTeam.objects.filter(tournament_id=bracket.tournament_id, seed__isnull=False)
        .values_list("team_id", "seed")
    )


def serializer_context(bracket) -> dict:
    return {"seeds": seed_map(bracket), "links": match_links(load_matches(bracket))}


def _group_view(group, matches):
    tree = BracketTree(matches)
    view = GroupView(
        group_id=group.number,
        group_name=group.name,
        bracket_size=group.bracket_size,
        total_rounds=group.total_rounds,
        participants_count=group.participants_count,
        bronze_match=tree.bronze,
    )
    for r in range(1, tree.total_rounds + 1):
        view.rounds.append(RoundView(r, round_name(r, tree.total_rounds), tree.round_matches(r)))
    final = tree.final
    if final is not None and final.is_finalized:
        view.champion = final.winner
    return view


def project_bracket(bracket, group=None) -> BracketView | None:
    """Rounds and bronze match per group; ``None`` when nothing was generated."""
    if bracket is None:
        return None
    groups = bracket.groups.all()
    if group is not None:
        groups = [get_object_or_404(BracketGroup, bracket=bracket, number=group)]
    matches = load_matches(bracket)
    grouped = _by_group(matches)
    return BracketView(
        bracket=bracket,
        groups=[_group_view(g, grouped.get(g.number, [])) for g in groups],
        context={"seeds": seed_map(bracket), "links": match_links(matches)},
    )


def list_groups(bracket) -> list[dict]:
    return [
        {"group_id": g.number, "group_name": g.name, "total_rounds": g.total_rounds}
        for g in bracket.groups.all()
    ]


def get_match(bracket, match_id):
    return get_object_or_404(Match.objects.select_related(*MATCH_RELATED), bracket=bracket, pk=match_id)


def _dq_entries(matches):
    entries = []
    for m in matches:
        if m.disqualified_participant_id:
            entries.append({
                "match_id": m.pk,
                "participant_id": m.disqualified_participant_id,
                "name": m.disqualified_participant.name,
            })
    return entries


def summary(bracket, group=1) -> BracketSummary:
    """Progress of one group: current round, open and finished counts, final and bronze state.

    ``current_round`` is the earliest round that still has an open match, or
    the last round once every regular match is done. Cancelled matches count
    as neither completed nor pending.
    """
    g = get_object_or_404(BracketGroup, bracket=bracket, number=group)
    matches = load_matches(bracket, group)
    tree = BracketTree(matches)
    open_rounds = [m.round for m in tree.regular.values() if m.status in state.OPEN]
    final = tree.final
    bronze = tree.bronze
    champion = final.winner if final is not None and final.is_finalized else None
    return BracketSummary(
        tournament_id=bracket.tournament_id,
        group_id=g.number,
        group_name=g.name,
        rounds=g.total_rounds,
        current_round=min(open_rounds, default=g.total_rounds),
        completed=sum(1 for m in matches if m.is_finalized),
        pending=sum(1 for m in matches if m.status in state.OPEN),
        final_status=final.status if final is not None else None,
        bronze_enabled=bronze is not None,
        bronze_status=bronze.status if bronze is not None else None,
        dq_list=_dq_entries(matches),
        champion=champion,
        is_bracket_complete=champion is not None and (bronze is None or bronze.is_finalized),
    )


def _group_placements(group_number, matches):
    tree = BracketTree(matches)
    teams = {}
    for m in matches:
        for team in (m.participant1, m.participant2):
            if team is not None:
                teams[team.pk] = team
    disqualified = {m.disqualified_participant_id for m in matches if m.disqualified_participant_id}

    places = {}

    def place(participant_id, value):
        if participant_id and participant_id not in places:
            places[participant_id] = value

    final = tree.final
    if final is not None and final.is_finalized:
        place(final.winner_id, 1)
        place(final.loser()[0], 2)

    bronze = tree.bronze
    if bronze is not None and bronze.is_finalized:
        place(bronze.winner_id, 3)
        place(bronze.loser()[0], 4)

    size = 2 ** tree.total_rounds
    for r in range(tree.total_rounds - 1, 0, -1):
        if bronze is not None and r == tree.total_rounds - 1:
            continue
        for m in tree.round_matches(r):
            place(m.loser()[0], (size >> r) + 1)

    shared = Counter(places.values())
    rows = [
        Placement(
            participant=teams[pid],
            place=value,
            group=group_number,
            dsq=pid in disqualified,
            ex_aequo=shared[value] > 1,
        )
        for pid, value in places.items()
    ]
    rows.sort(key=lambda p: (p.place, p.participant.name))
    return rows


def placements(bracket, group=None) -> list[Placement]:
    """Standings from finalized results. Byes are never placed."""
    if group is not None:
        get_object_or_404(BracketGroup, bracket=bracket, number=group)
    rows = []
    for number, group_matches in sorted(_by_group(load_matches(bracket, group)).items()):
        rows.extend(_group_placements(number, group_matches))
    return rows
