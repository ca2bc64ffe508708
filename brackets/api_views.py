from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from tournaments.models import Tournament
from tournaments.permissions import IsTournamentManager

from . import projection, services
from .models import Bracket, Match
from .serializers import (
    BracketSerializer,
    GenerateBracketSerializer,
    GroupQuerySerializer,
    MatchSerializer,
    PlacementSerializer,
    RecordResultSerializer,
    ReopenMatchSerializer,
    ScheduleMatchSerializer,
    SummarySerializer,
    VersionSerializer,
)


def _bracket_or_none(tournament_id):
    get_object_or_404(Tournament, pk=tournament_id)
    return Bracket.objects.filter(tournament_id=tournament_id).first()


def _group_param(request):
    serializer = GroupQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data.get("group")


def _bracket_response(bracket, group=None, status_code=status.HTTP_200_OK):
    view = projection.project_bracket(bracket, group)
    if view is None:
        return Response({"bracket": None}, status=status_code)
    return Response(BracketSerializer(view, context=view.context).data, status=status_code)


class GenerateBracketAPIView(APIView):
    permission_classes = [IsTournamentManager]

    def post(self, request):
        serializer = GenerateBracketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        tournament = get_object_or_404(Tournament, pk=data["tournament_id"])
        self.check_object_permissions(request, tournament)

        bracket = services.generate_bracket(
            tournament.pk,
            actor=request.user,
            max_participants=data.get("max_participants"),
            bronze_match=data.get("bronze_match"),
            number_of_groups=data.get("number_of_groups"),
            force=data["force"],
        )
        return _bracket_response(bracket, status_code=status.HTTP_201_CREATED)


class BracketDetailAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, tournament_id):
        bracket = _bracket_or_none(tournament_id)
        return _bracket_response(bracket, _group_param(request))


class BracketMatchListAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, tournament_id):
        bracket = _bracket_or_none(tournament_id)
        if bracket is None:
            return Response([])
        group = _group_param(request)
        matches = projection.load_matches(bracket, group)
        context = projection.serializer_context(bracket)
        return Response(MatchSerializer(matches, many=True, context=context).data)


class BracketMatchDetailAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, tournament_id, match_id):
        bracket = get_object_or_404(Bracket, tournament_id=tournament_id)
        match = projection.get_match(bracket, match_id)
        return Response(MatchSerializer(match, context=projection.serializer_context(bracket)).data)


class BracketGroupListAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, tournament_id):
        bracket = _bracket_or_none(tournament_id)
        if bracket is None:
            return Response([])
        return Response(projection.list_groups(bracket))


class PlacementListAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, tournament_id):
        bracket = _bracket_or_none(tournament_id)
        if bracket is None:
            return Response([])
        rows = projection.placements(bracket, _group_param(request))
        context = {"seeds": projection.seed_map(bracket)}
        return Response(PlacementSerializer(rows, many=True, context=context).data)


class BracketSummaryAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, tournament_id):
        bracket = _bracket_or_none(tournament_id)
        if bracket is None:
            return Response({"bracket": None})
        data = projection.summary(bracket, _group_param(request) or 1)
        context = {"seeds": projection.seed_map(bracket)}
        return Response(SummarySerializer(data, context=context).data)


class MatchActionAPIView(APIView):
    """Base for the match mutation endpoints."""

    permission_classes = [IsTournamentManager]
    serializer_class = VersionSerializer
    result_key = "touched"

    def get_match(self, request, match_id):
        match = get_object_or_404(Match.objects.select_related("bracket__tournament"), pk=match_id)
        self.check_object_permissions(request, match.bracket.tournament)
        return match

    def perform(self, match, data):
        raise NotImplementedError

    def post(self, request, match_id):
        match = self.get_match(request, match_id)
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = self.perform(match, serializer.validated_data)
        return Response(self.render(match.bracket, outcome))

    def render(self, bracket, outcome):
        context = projection.serializer_context(bracket)
        ids = [outcome.match.pk] + [m.pk for m in outcome.touched]
        fresh = {m.pk: m for m in projection.load_matches(bracket) if m.pk in ids}
        return {
            "match": MatchSerializer(fresh[outcome.match.pk], context=context).data,
            self.result_key: MatchSerializer([fresh[m.pk] for m in outcome.touched], many=True, context=context).data,
        }


class MatchResultAPIView(MatchActionAPIView):
    serializer_class = RecordResultSerializer

    def perform(self, match, data):
        return services.record_result(
            match.pk,
            actor=self.request.user,
            score1=data.get("score1"),
            score2=data.get("score2"),
            walkover_for=data.get("walkover_for"),
            disqualify=data.get("disqualify"),
            version=data.get("version"),
        )


class MatchScheduleAPIView(MatchActionAPIView):
    serializer_class = ScheduleMatchSerializer

    def perform(self, match, data):
        return services.schedule_match(
            match.pk, data["scheduled_at"], actor=self.request.user, version=data.get("version")
        )


class MatchStartAPIView(MatchActionAPIView):
    def perform(self, match, data):
        return services.start_match(match.pk, actor=self.request.user, version=data.get("version"))


class MatchCancelAPIView(MatchActionAPIView):
    def perform(self, match, data):
        return services.cancel_match(match.pk, actor=self.request.user, version=data.get("version"))


class MatchReopenAPIView(MatchActionAPIView):
    serializer_class = ReopenMatchSerializer
    result_key = "retracted"

    def perform(self, match, data):
        return services.reopen_match(
            match.pk,
            actor=self.request.user,
            cascade=data["cascade"],
            version=data.get("version"),
        )
