from django.dispatch import Signal

# sender=Bracket; kwargs: bracket, group, champion_id
bracket_completed = Signal()

# sender=Bracket; kwargs: bracket, group
bracket_reopened = Signal()
