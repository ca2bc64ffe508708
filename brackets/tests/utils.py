from brackets import services
from brackets.models import Match
from brackets.seeding import Participant


def participants(n, **kwargs):
    return [Participant(id=i, name=f"P{i}", **kwargs) for i in range(1, n + 1)]


def match_at(bracket, round_number, position, group=1, bronze=False):
    return Match.objects.get(
        bracket=bracket, group=group, round=round_number,
        position_in_round=position, is_bronze_match=bronze,
    )


def play(match, winner_slot=0, **kwargs):
    """Finish ``match`` with the participant in ``winner_slot`` winning 2:0."""
    score1, score2 = (2, 0) if winner_slot == 0 else (0, 2)
    return services.record_result(match.pk, score1=score1, score2=score2, **kwargs)
