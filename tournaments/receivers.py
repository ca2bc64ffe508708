import logging

from brackets.signals import bracket_completed, bracket_reopened
from django.dispatch import receiver
from django.utils import timezone

from .models import Tournament

log = logging.getLogger(__name__)


@receiver(bracket_completed)
def record_tournament_winner(sender, bracket, group, champion_id, **kwargs):
    # group champions of a split bracket are not tournament winners
    if bracket.number_of_groups != 1:
        return
    Tournament.objects.filter(pk=bracket.tournament_id).update(
        winner_id=champion_id, status="finished", end_date=timezone.now()
    )
    log.info("Tournament %s won by team %s", bracket.tournament_id, champion_id)


@receiver(bracket_reopened)
def clear_tournament_winner(sender, bracket, group, **kwargs):
    if bracket.number_of_groups != 1:
        return
    Tournament.objects.filter(pk=bracket.tournament_id).update(
        winner=None, status="running", end_date=None
    )
    log.info("Tournament %s final re-opened, winner cleared", bracket.tournament_id)
