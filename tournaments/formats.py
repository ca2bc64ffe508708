"""Per-format settings records for ``Tournament.format_settings``.

The JSON column is loosely typed; everything past the API boundary works with
one of the dataclasses below, picked by ``tournament_type``.
"""
from dataclasses import asdict, dataclass

from rest_framework import serializers


@dataclass(frozen=True)
class SingleEliminationSettings:
    bronze_match: bool = False
    number_of_groups: int = 1


@dataclass(frozen=True)
class DoubleEliminationSettings:
    grand_final_reset: bool = True


@dataclass(frozen=True)
class RoundRobinSettings:
    number_of_groups: int = 1
    points_win: int = 3
    points_loss: int = 0


@dataclass(frozen=True)
class SwissSettings:
    rounds: int = 5


class SingleEliminationSettingsSerializer(serializers.Serializer):
    bronze_match = serializers.BooleanField(default=False)
    number_of_groups = serializers.IntegerField(default=1, min_value=1)


class DoubleEliminationSettingsSerializer(serializers.Serializer):
    grand_final_reset = serializers.BooleanField(default=True)


class RoundRobinSettingsSerializer(serializers.Serializer):
    number_of_groups = serializers.IntegerField(default=1, min_value=1)
    points_win = serializers.IntegerField(default=3, min_value=0)
    points_loss = serializers.IntegerField(default=0, min_value=0)


class SwissSettingsSerializer(serializers.Serializer):
    rounds = serializers.IntegerField(default=5, min_value=1)


FORMATS = {
    "SINGLE_ELIMINATION": (SingleEliminationSettings, SingleEliminationSettingsSerializer),
    "DOUBLE_ELIMINATION": (DoubleEliminationSettings, DoubleEliminationSettingsSerializer),
    "ROUND_ROBIN": (RoundRobinSettings, RoundRobinSettingsSerializer),
    "SWISS": (SwissSettings, SwissSettingsSerializer),
}


def parse_format_settings(tournament_type: str, raw):
    """Validate ``raw`` against the record of ``tournament_type``.

    Raises ``rest_framework.exceptions.ValidationError`` for malformed payloads
    and ``KeyError`` for an unknown type.
    """
    record_cls, serializer_cls = FORMATS[tournament_type]
    serializer = serializer_cls(data=raw or {})
    serializer.is_valid(raise_exception=True)
    return record_cls(**serializer.validated_data)


def dump_format_settings(record) -> dict:
    return asdict(record)
