from django.urls import path

from .api_views import (
    ParticipantSeedAPIView,
    TournamentDetailAPIView,
    TournamentListAPIView,
    TournamentSettingsAPIView,
)

app_name = "tournaments"

urlpatterns = [
    path("", TournamentListAPIView.as_view(), name="api_tournament_list"),
    path("<int:pk>/", TournamentDetailAPIView.as_view(), name="api_tournament_detail"),
    path("<int:pk>/settings/", TournamentSettingsAPIView.as_view(), name="api_tournament_settings"),
    path(
        "<int:pk>/participants/<int:team_id>/seed/",
        ParticipantSeedAPIView.as_view(),
        name="api_participant_seed",
    ),
]
