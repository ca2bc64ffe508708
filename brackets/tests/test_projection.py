import pytest
from django.http import Http404

from brackets import projection, services
from brackets.tests.utils import match_at, play

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize("round_number, total, name", [
    (3, 3, "Final"),
    (2, 3, "Semifinals"),
    (1, 3, "Quarterfinals"),
    (1, 4, "Round of 16"),
    (1, 5, "Round of 32"),
])
def test_round_name(round_number, total, name):
    assert projection.round_name(round_number, total) == name


def test_round_name_bronze():
    assert projection.round_name(3, 3, bronze=True) == "Bronze Match"


def test_ungenerated_bracket_is_none():
    assert projection.project_bracket(None) is None


def test_rounds_and_bronze(generated):
    bracket, _ = generated(8, bronze_match=True)
    view = projection.project_bracket(bracket)
    assert len(view.groups) == 1
    group = view.groups[0]
    assert [r.name for r in group.rounds] == ["Quarterfinals", "Semifinals", "Final"]
    assert [len(r.matches) for r in group.rounds] == [4, 2, 1]
    for r in group.rounds:
        assert [m.position_in_round for m in r.matches] == list(range(len(r.matches)))
        assert not any(m.is_bronze_match for m in r.matches)
    assert group.bronze_match.is_bronze_match
    assert group.champion is None
    assert view.rounds == group.rounds


def test_links(generated):
    bracket, _ = generated(4, bronze_match=True)
    links = projection.match_links(projection.load_matches(bracket))
    semi = match_at(bracket, 1, 1)
    final = match_at(bracket, 2, 0)
    bronze = match_at(bracket, 2, 0, bronze=True)
    assert links[semi.pk] == {"next_match_id": final.pk, "next_match_slot": 1, "loser_match_id": bronze.pk}
    assert links[final.pk] == {"next_match_id": None, "next_match_slot": None, "loser_match_id": None}


def test_single_group_view(generated):
    bracket, _ = generated(8, number_of_groups=2)
    view = projection.project_bracket(bracket, group=2)
    assert [g.group_name for g in view.groups] == ["Group B"]
    assert all(m.group == 2 for r in view.groups[0].rounds for m in r.matches)
    with pytest.raises(Http404):
        projection.project_bracket(bracket, group=3)


def test_list_groups(generated):
    bracket, _ = generated(12, number_of_groups=3)
    assert projection.list_groups(bracket) == [
        {"group_id": 1, "group_name": "Group A", "total_rounds": 2},
        {"group_id": 2, "group_name": "Group B", "total_rounds": 2},
        {"group_id": 3, "group_name": "Group C", "total_rounds": 2},
    ]


def test_get_match(generated, make_tournament, register_teams):
    bracket, _ = generated(4)
    m = match_at(bracket, 1, 0)
    assert projection.get_match(bracket, m.pk) == m

    other = make_tournament(name="Other")
    register_teams(other, 2)
    other_bracket = services.generate_bracket(other.pk)
    with pytest.raises(Http404):
        projection.get_match(other_bracket, m.pk)


def test_summary_tracks_progress(generated):
    bracket, _ = generated(4, bronze_match=True)
    s = projection.summary(bracket)
    assert (s.rounds, s.current_round, s.completed, s.pending) == (2, 1, 0, 4)
    assert s.final_status == "PENDING"
    assert s.bronze_enabled and s.bronze_status == "PENDING"
    assert s.dq_list == [] and s.champion is None
    assert not s.is_bracket_complete

    semi = match_at(bracket, 1, 0)
    services.record_result(semi.pk, disqualify=semi.participant2_id)
    play(match_at(bracket, 1, 1))
    s = projection.summary(bracket)
    assert (s.current_round, s.completed, s.pending) == (2, 2, 2)
    assert s.dq_list == [{
        "match_id": semi.pk,
        "participant_id": semi.participant2_id,
        "name": semi.participant2.name,
    }]

    play(match_at(bracket, 2, 0), winner_slot=1)
    s = projection.summary(bracket)
    final = match_at(bracket, 2, 0)
    assert s.final_status == "COMPLETED"
    assert s.champion == final.winner
    assert projection.project_bracket(bracket).groups[0].champion == final.winner
    # bronze still open
    assert s.current_round == 2 and s.pending == 1
    assert not s.is_bracket_complete

    play(match_at(bracket, 2, 0, bronze=True))
    s = projection.summary(bracket)
    assert s.bronze_status == "COMPLETED"
    assert (s.completed, s.pending) == (4, 0)
    assert s.is_bracket_complete


def test_summary_without_bronze(generated):
    bracket, teams = generated(2)
    assert not projection.summary(bracket).bronze_enabled
    play(match_at(bracket, 1, 0), winner_slot=1)
    s = projection.summary(bracket)
    assert s.champion == teams[1]
    assert s.bronze_status is None
    assert s.is_bracket_complete


def test_summary_per_group(generated):
    bracket, _ = generated(8, number_of_groups=2)
    s = projection.summary(bracket, group=2)
    assert (s.group_id, s.group_name, s.rounds) == (2, "Group B", 2)
    assert s.pending == 3
    with pytest.raises(Http404):
        projection.summary(bracket, group=3)


def _places(rows):
    return [(r.participant.pk, r.place, r.ex_aequo) for r in rows]


def test_placements_with_bronze(generated):
    bracket, t = generated(4, bronze_match=True)
    play(match_at(bracket, 1, 0))
    play(match_at(bracket, 1, 1))
    play(match_at(bracket, 2, 0, bronze=True), winner_slot=1)
    play(match_at(bracket, 2, 0), winner_slot=1)
    # final: t1 v t2, bronze: t4 v t3
    assert _places(projection.placements(bracket)) == [
        (t[1].pk, 1, False),
        (t[0].pk, 2, False),
        (t[2].pk, 3, False),
        (t[3].pk, 4, False),
    ]


def test_placements_without_bronze(generated):
    bracket, t = generated(8)
    for pos in range(4):
        play(match_at(bracket, 1, pos))
    play(match_at(bracket, 2, 0))
    play(match_at(bracket, 2, 1))
    play(match_at(bracket, 3, 0))
    rows = projection.placements(bracket)
    by_team = {r.participant.pk: (r.place, r.ex_aequo) for r in rows}
    assert by_team[t[0].pk] == (1, False)
    assert by_team[t[1].pk] == (2, False)
    assert by_team[t[3].pk] == (3, True)
    assert by_team[t[2].pk] == (3, True)
    for i in (4, 5, 6, 7):
        assert by_team[t[i].pk] == (5, True)
    assert [r.place for r in rows] == sorted(r.place for r in rows)


def test_placements_skip_byes_and_flag_dsq(generated):
    bracket, t = generated(3)
    services.record_result(match_at(bracket, 1, 1).pk, disqualify=t[2].pk)
    play(match_at(bracket, 2, 0))
    rows = projection.placements(bracket)
    assert [(r.participant.pk, r.place, r.dsq) for r in rows] == [
        (t[0].pk, 1, False),
        (t[1].pk, 2, False),
        (t[2].pk, 3, True),
    ]


def test_placements_per_group(generated):
    bracket, _ = generated(4, number_of_groups=2)
    play(match_at(bracket, 1, 0, group=2))
    rows = projection.placements(bracket, group=2)
    assert [(r.group, r.place) for r in rows] == [(2, 1), (2, 2)]
    assert projection.placements(bracket, group=1) == []
