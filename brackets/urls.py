from django.urls import path

from . import api_views

app_name = "brackets"

urlpatterns = [
    path("single-elimination/generate/", api_views.GenerateBracketAPIView.as_view(), name="generate"),
    path("single-elimination/<int:tournament_id>/", api_views.BracketDetailAPIView.as_view(), name="detail"),
    path(
        "single-elimination/<int:tournament_id>/matches/",
        api_views.BracketMatchListAPIView.as_view(),
        name="matches",
    ),
    path(
        "single-elimination/<int:tournament_id>/matches/<int:match_id>/",
        api_views.BracketMatchDetailAPIView.as_view(),
        name="match_detail",
    ),
    path(
        "single-elimination/<int:tournament_id>/groups/",
        api_views.BracketGroupListAPIView.as_view(),
        name="groups",
    ),
    path(
        "single-elimination/<int:tournament_id>/placements/",
        api_views.PlacementListAPIView.as_view(),
        name="placements",
    ),
    path(
        "single-elimination/<int:tournament_id>/summary/",
        api_views.BracketSummaryAPIView.as_view(),
        name="summary",
    ),
    path("matches/<int:match_id>/result/", api_views.MatchResultAPIView.as_view(), name="match_result"),
    path("matches/<int:match_id>/schedule/", api_views.MatchScheduleAPIView.as_view(), name="match_schedule"),
    path("matches/<int:match_id>/start/", api_views.MatchStartAPIView.as_view(), name="match_start"),
    path("matches/<int:match_id>/cancel/", api_views.MatchCancelAPIView.as_view(), name="match_cancel"),
    path("matches/<int:match_id>/reopen/", api_views.MatchReopenAPIView.as_view(), name="match_reopen"),
]
