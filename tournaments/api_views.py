from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, serializers
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Tournament, TournamentTeam
from .permissions import IsTournamentManager
from .serializers import (
    SeedSerializer,
    TournamentSerializer,
    TournamentSettingsSerializer,
    TournamentTeamSerializer,
)


class TournamentListAPIView(generics.ListAPIView):
    queryset = Tournament.objects.prefetch_related("participants__team").select_related("winner")
    serializer_class = TournamentSerializer
    permission_classes = [permissions.AllowAny]


class TournamentDetailAPIView(generics.RetrieveAPIView):
    queryset = Tournament.objects.prefetch_related("participants__team").select_related("winner")
    serializer_class = TournamentSerializer
    permission_classes = [permissions.AllowAny]


class TournamentSettingsAPIView(generics.UpdateAPIView):
    queryset = Tournament.objects.all()
    serializer_class = TournamentSettingsSerializer
    permission_classes = [IsTournamentManager]
    http_method_names = ["patch", "options"]

    def perform_update(self, serializer):
        if hasattr(serializer.instance, "bracket"):
            raise serializers.ValidationError(
                {"detail": "Format settings are locked once the bracket is generated."}
            )
        serializer.save()


class ParticipantSeedAPIView(APIView):
    permission_classes = [IsTournamentManager]

    def patch(self, request, pk, team_id):
        registration = get_object_or_404(
            TournamentTeam.objects.select_related("tournament", "team"), tournament_id=pk, team_id=team_id
        )
        self.check_object_permissions(request, registration.tournament)
        if hasattr(registration.tournament, "bracket"):
            raise serializers.ValidationError(
                {"seed": "Seeds are locked once the bracket is generated."}
            )

        serializer = SeedSerializer(data=request.data, context={"registration": registration})
        serializer.is_valid(raise_exception=True)
        registration.seed = serializer.validated_data["seed"]
        registration.save(update_fields=["seed"])
        return Response(TournamentTeamSerializer(registration).data)
