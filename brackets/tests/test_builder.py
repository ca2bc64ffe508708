import pytest

from brackets.builder import build_bracket
from brackets.exceptions import InvalidGroupCount
from brackets.models import Match
from brackets.seeding import next_power_of_two, seed_participants
from brackets.tests.utils import participants


def build(n, **kwargs):
    return build_bracket(seed_participants(participants(n)), **kwargs)


def regular(plan):
    return [m for m in plan.matches if not m.is_bronze_match]


@pytest.mark.parametrize("n", range(2, 34))
@pytest.mark.parametrize("bronze", [False, True])
def test_match_count(n, bronze):
    plan = build(n, bronze_match=bronze)
    size = next_power_of_two(n)
    assert len(regular(plan)) == size - 1
    bronzes = [m for m in plan.matches if m.is_bronze_match]
    assert len(bronzes) == (1 if bronze and size >= 4 else 0)


@pytest.mark.parametrize("n", [2, 5, 8, 13, 16])
def test_round_sizes(n):
    plan = build(n)
    size = next_power_of_two(n)
    assert plan.total_rounds == size.bit_length() - 1
    for r in range(1, plan.total_rounds + 1):
        assert len([m for m in regular(plan) if m.round == r]) == size >> r


def test_standard_draw_for_eight():
    plan = build(8)
    first = sorted((m for m in plan.matches if m.round == 1), key=lambda m: m.position_in_round)
    assert [(m.participant1_id, m.participant2_id) for m in first] == [(1, 8), (4, 5), (2, 7), (3, 6)]


def test_later_rounds_are_placeholders():
    plan = build(8)
    for m in plan.matches:
        if m.round > 1:
            assert m.participant1_id is None and m.participant2_id is None
            assert not m.is_bye_match
            assert m.status == Match.Status.PENDING


def test_match_numbers_follow_creation_order():
    plan = build(8, bronze_match=True)
    assert [m.match_number for m in plan.matches] == list(range(1, 9))
    assert plan.matches[-1].is_bronze_match
    bronze = plan.matches[-1]
    assert (bronze.round, bronze.position_in_round) == (3, 0)


def test_byes_resolve_and_advance():
    plan = build(5)
    first = {m.position_in_round: m for m in plan.matches if m.round == 1}
    # seeds 6, 7 and 8 are byes: 1v8, 2v7, 3v6 resolve, 4v5 is played
    for pos, winner in [(0, 1), (2, 2), (3, 3)]:
        assert first[pos].status == Match.Status.WALKOVER
        assert first[pos].is_finalized
        assert first[pos].winner_id == winner
    assert first[1].status == Match.Status.PENDING
    assert (first[1].participant1_id, first[1].participant2_id) == (4, 5)

    second = {m.position_in_round: m for m in plan.matches if m.round == 2}
    assert (second[0].participant1_id, second[0].participant2_id) == (1, None)
    assert (second[1].participant1_id, second[1].participant2_id) == (2, 3)
    assert second[1].is_ready


def test_no_match_has_two_byes():
    for n in range(2, 33):
        for m in build(n).matches:
            assert not (m.participant1_bye and m.participant2_bye)


def test_bye_loser_feeds_bronze_as_bye():
    plan = build(3, bronze_match=True)
    bronze = next(m for m in plan.matches if m.is_bronze_match)
    assert bronze.participant1_bye is True
    assert bronze.participant2_id is None
    assert bronze.status == Match.Status.PENDING
    final = next(m for m in plan.matches if m.round == 2 and not m.is_bronze_match)
    assert final.participant1_id == 1


def test_two_participants_single_final():
    plan = build(2, bronze_match=True)
    assert len(plan.matches) == 1
    final = plan.matches[0]
    assert (final.round, final.participant1_id, final.participant2_id) == (1, 1, 2)


def test_groups_build_independent_trees():
    plan = build(10, number_of_groups=2, bronze_match=True)
    assert [g.name for g in plan.groups] == ["Group A", "Group B"]
    assert [len(g.participants) for g in plan.groups] == [5, 5]
    for g in plan.groups:
        assert g.bracket_size == 8
        assert {m.group for m in g.matches} == {g.number}
        assert len([m for m in g.matches if not m.is_bronze_match]) == 7
    numbers = [m.match_number for m in plan.matches]
    assert numbers == list(range(1, len(numbers) + 1))
    assert plan.participants_count == 10


def test_uneven_groups():
    plan = build(9, number_of_groups=2)
    assert [g.bracket_size for g in plan.groups] == [8, 4]
    assert plan.bracket_size == 8
    assert plan.total_rounds == 3


def test_too_many_groups():
    with pytest.raises(InvalidGroupCount):
        build(5, number_of_groups=3)
