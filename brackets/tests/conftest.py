import random

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from teams.models import Team
from tournaments.models import Tournament, TournamentTeam

from brackets import services

User = get_user_model()


@pytest.fixture
def user(db):
    return User.objects.create_user("user", password="x", email="u@u.u")


@pytest.fixture
def staff(db):
    return User.objects.create_user("admin", password="x", is_staff=True, email="a@a.a")


@pytest.fixture
def make_team(db):
    counter = {"n": 0}

    def _make(name=None, kind=Team.Kind.TEAM):
        counter["n"] += 1
        name = name or f"Team {counter['n']:02d}"
        return Team.objects.create(name=name, tag=f"T{counter['n']:02d}", kind=kind)
    return _make


@pytest.fixture
def make_tournament(db):
    def _make(**kwargs):
        kwargs.setdefault("name", "Cup")
        kwargs.setdefault("start_date", timezone.now())
        return Tournament.objects.create(**kwargs)
    return _make


@pytest.fixture
def tournament(make_tournament):
    return make_tournament()


@pytest.fixture
def register_teams(make_team):
    """Register ``n`` fresh teams, in order; returns the teams."""
    def _register(tournament, n, seeds=None):
        teams = []
        for i in range(n):
            team = make_team()
            seed = seeds[i] if seeds else None
            TournamentTeam.objects.create(tournament=tournament, team=team, seed=seed)
            teams.append(team)
        return teams
    return _register


@pytest.fixture
def generated(tournament, register_teams):
    """Build a bracket for ``n`` registered teams and return (bracket, teams)."""
    def _generate(n, **options):
        teams = register_teams(tournament, n)
        bracket = services.generate_bracket(tournament.pk, rng=random.Random(7), **options)
        return bracket, teams
    return _generate

