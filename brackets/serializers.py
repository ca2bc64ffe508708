from rest_framework import serializers
from teams.models import Team

from .models import Match
from .projection import MATCH_RELATED

BYE_SLOT = {"id": None, "name": "BYE", "type": "bye"}
TBD_SLOT = {"id": None, "name": "TBD", "type": "tbd"}


class ParticipantSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="kind")
    logo_url = serializers.ReadOnlyField()
    seed = serializers.SerializerMethodField()

    class Meta:
        model = Team
        fields = ["id", "name", "tag", "type", "logo_url", "seed"]

    def get_seed(self, obj):
        return self.context.get("seeds", {}).get(obj.pk)


class MatchSerializer(serializers.ModelSerializer):
    related = MATCH_RELATED

    participant1 = serializers.SerializerMethodField()
    participant2 = serializers.SerializerMethodField()
    winner = ParticipantSerializer(read_only=True)
    next_match_id = serializers.SerializerMethodField()
    next_match_slot = serializers.SerializerMethodField()
    loser_match_id = serializers.SerializerMethodField()
    ready = serializers.BooleanField(source="is_ready", read_only=True)

    class Meta:
        model = Match
        fields = [
            "id", "match_number", "group", "round", "position_in_round", "is_bronze_match",
            "participant1", "participant2", "winner", "status", "is_finalized",
            "score1", "score2", "disqualified_participant",
            "scheduled_at", "started_at", "finished_at", "version",
            "next_match_id", "next_match_slot", "loser_match_id", "ready",
        ]
        read_only_fields = fields

    def _slot(self, obj, index):
        _, bye = obj.slot(index)
        if bye:
            return dict(BYE_SLOT)
        team = obj.participant1 if index == 0 else obj.participant2
        if team is None:
            return dict(TBD_SLOT)
        return ParticipantSerializer(team, context=self.context).data

    def _link(self, obj, key):
        return self.context.get("links", {}).get(obj.pk, {}).get(key)

    def get_participant1(self, obj):
        return self._slot(obj, 0)

    def get_participant2(self, obj):
        return self._slot(obj, 1)

    def get_next_match_id(self, obj):
        return self._link(obj, "next_match_id")

    def get_next_match_slot(self, obj):
        return self._link(obj, "next_match_slot")

    def get_loser_match_id(self, obj):
        return self._link(obj, "loser_match_id")


class RoundSerializer(serializers.Serializer):
    round = serializers.IntegerField()
    name = serializers.CharField()
    matches = MatchSerializer(many=True)


class GroupSerializer(serializers.Serializer):
    group_id = serializers.IntegerField()
    group_name = serializers.CharField()
    bracket_size = serializers.IntegerField()
    total_rounds = serializers.IntegerField()
    participants_count = serializers.IntegerField()
    rounds = RoundSerializer(many=True)
    bronze_match = MatchSerializer(allow_null=True)
    champion = ParticipantSerializer(allow_null=True)


class BracketSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="bracket.pk")
    tournament_id = serializers.IntegerField()
    type = serializers.SerializerMethodField()
    bracket_size = serializers.IntegerField(source="bracket.bracket_size")
    total_rounds = serializers.IntegerField(source="bracket.total_rounds")
    total_participants = serializers.IntegerField(source="bracket.participants_count")
    bronze_match = serializers.BooleanField(source="bracket.bronze_match")
    number_of_groups = serializers.IntegerField(source="bracket.number_of_groups")
    seeding_mode = serializers.CharField(source="bracket.seeding_mode")
    created_at = serializers.DateTimeField(source="bracket.created_at")
    updated_at = serializers.DateTimeField(source="bracket.updated_at")
    groups = GroupSerializer(many=True)

    def get_type(self, obj):
        return "SINGLE_ELIMINATION"


class PlacementSerializer(serializers.Serializer):
    participant = ParticipantSerializer()
    place = serializers.IntegerField()
    group = serializers.IntegerField()
    dsq = serializers.BooleanField()
    ex_aequo = serializers.BooleanField()


class DisqualificationSerializer(serializers.Serializer):
    match_id = serializers.IntegerField()
    participant_id = serializers.IntegerField()
    name = serializers.CharField()


class SummarySerializer(serializers.Serializer):
    tournament_id = serializers.IntegerField()
    group_id = serializers.IntegerField()
    group_name = serializers.CharField()
    rounds = serializers.IntegerField()
    current_round = serializers.IntegerField()
    completed = serializers.IntegerField()
    pending = serializers.IntegerField()
    final_status = serializers.CharField(allow_null=True)
    bronze_enabled = serializers.BooleanField()
    bronze_status = serializers.CharField(allow_null=True)
    dq_list = DisqualificationSerializer(many=True)
    champion = ParticipantSerializer(allow_null=True)
    is_bracket_complete = serializers.BooleanField()


# ---------- input ----------

class GenerateBracketSerializer(serializers.Serializer):
    tournament_id = serializers.IntegerField(min_value=1)
    max_participants = serializers.IntegerField(min_value=2, required=False)
    bronze_match = serializers.BooleanField(required=False)
    number_of_groups = serializers.IntegerField(min_value=1, required=False)
    force = serializers.BooleanField(default=False)


class GroupQuerySerializer(serializers.Serializer):
    group = serializers.IntegerField(min_value=1, required=False)


class VersionSerializer(serializers.Serializer):
    version = serializers.IntegerField(min_value=1, required=False)


class RecordResultSerializer(VersionSerializer):
    score1 = serializers.IntegerField(min_value=0, required=False)
    score2 = serializers.IntegerField(min_value=0, required=False)
    walkover_for = serializers.IntegerField(required=False)
    disqualify = serializers.IntegerField(required=False)

    def validate(self, attrs):
        has_scores = "score1" in attrs or "score2" in attrs
        modes = has_scores + ("walkover_for" in attrs) + ("disqualify" in attrs)
        if modes != 1:
            raise serializers.ValidationError(
                "Send either score1 and score2, walkover_for or disqualify."
            )
        if has_scores and not ("score1" in attrs and "score2" in attrs):
            raise serializers.ValidationError("Both score1 and score2 are required.")
        return attrs


class ScheduleMatchSerializer(VersionSerializer):
    scheduled_at = serializers.DateTimeField()


class ReopenMatchSerializer(VersionSerializer):
    cascade = serializers.BooleanField(default=False)
