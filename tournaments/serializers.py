from rest_framework import serializers
from teams.models import Team

from .formats import dump_format_settings, parse_format_settings
from .models import Tournament, TournamentTeam


class TeamSerializer(serializers.ModelSerializer):
    logo_url = serializers.ReadOnlyField()

    class Meta:
        model = Team
        fields = ['id', 'name', 'tag', 'kind', 'logo_url']


class TournamentTeamSerializer(serializers.ModelSerializer):
    team = TeamSerializer(read_only=True)

    class Meta:
        model = TournamentTeam
        fields = ['team', 'seed', 'registered_at']


class TournamentSerializer(serializers.ModelSerializer):
    participants = TournamentTeamSerializer(many=True, read_only=True)
    winner = TeamSerializer(read_only=True)
    has_bracket = serializers.SerializerMethodField()

    class Meta:
        model = Tournament
        fields = [
            'id', 'name', 'description', 'status', 'start_date', 'end_date',
            'max_teams', 'min_teams', 'team_size', 'tournament_type', 'seeding_mode',
            'format_settings', 'registration_open', 'winner', 'participants', 'has_bracket',
        ]

    def get_has_bracket(self, obj):
        return hasattr(obj, "bracket")


class TournamentSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tournament
        fields = ['tournament_type', 'seeding_mode', 'format_settings', 'max_teams', 'min_teams', 'team_size']

    def validate(self, attrs):
        instance = self.instance
        tournament_type = attrs.get("tournament_type", getattr(instance, "tournament_type", None))
        raw = attrs.get("format_settings", getattr(instance, "format_settings", None))
        if "tournament_type" in attrs and "format_settings" not in attrs:
            raw = {}
        try:
            record = parse_format_settings(tournament_type, raw)
        except serializers.ValidationError as exc:
            raise serializers.ValidationError({"format_settings": exc.detail})
        attrs["format_settings"] = dump_format_settings(record)

        min_teams = attrs.get("min_teams", getattr(instance, "min_teams", 2))
        max_teams = attrs.get("max_teams", getattr(instance, "max_teams", 16))
        if min_teams < 2:
            raise serializers.ValidationError({"min_teams": "At least two teams are required."})
        if min_teams > max_teams:
            raise serializers.ValidationError({"min_teams": "Cannot exceed max_teams."})
        return attrs


class SeedSerializer(serializers.Serializer):
    seed = serializers.IntegerField(min_value=1, allow_null=True)

    def validate_seed(self, value):
        registration = self.context["registration"]
        if value is None:
            return value
        taken = (
            TournamentTeam.objects.filter(tournament_id=registration.tournament_id, seed=value)
            .exclude(pk=registration.pk)
            .exists()
        )
        if taken:
            raise serializers.ValidationError(f"Seed {value} is already assigned to another team.")
        return value
