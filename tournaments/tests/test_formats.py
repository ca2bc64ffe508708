import pytest
from rest_framework.exceptions import ValidationError

from tournaments.formats import (
    RoundRobinSettings,
    SingleEliminationSettings,
    dump_format_settings,
    parse_format_settings,
)


def test_defaults_for_empty_payload():
    assert parse_format_settings("SINGLE_ELIMINATION", None) == SingleEliminationSettings()
    assert parse_format_settings("SINGLE_ELIMINATION", {}) == SingleEliminationSettings(
        bronze_match=False, number_of_groups=1
    )


def test_parse_single_elimination():
    record = parse_format_settings("SINGLE_ELIMINATION", {"bronze_match": True, "number_of_groups": 4})
    assert record.bronze_match is True
    assert record.number_of_groups == 4


def test_parse_other_format():
    record = parse_format_settings("ROUND_ROBIN", {"points_win": 2})
    assert record == RoundRobinSettings(number_of_groups=1, points_win=2, points_loss=0)


@pytest.mark.parametrize("raw", [
    {"number_of_groups": 0},
    {"number_of_groups": "many"},
    {"bronze_match": "perhaps"},
])
def test_invalid_payload(raw):
    with pytest.raises(ValidationError):
        parse_format_settings("SINGLE_ELIMINATION", raw)


def test_unknown_type():
    with pytest.raises(KeyError):
        parse_format_settings("LADDER", {})


def test_dump_round_trip():
    record = SingleEliminationSettings(bronze_match=True, number_of_groups=2)
    assert dump_format_settings(record) == {"bronze_match": True, "number_of_groups": 2}
