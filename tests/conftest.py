"""
Shared pytest fixtures for the tournament tests.

``FixedDraw`` keeps the team order at setup, so Group A holds teams 1-3,
Group B teams 4-6, and so on. Group matches are numbered per group as
(t1 v t2), (t1 v t3), (t2 v t3).
"""

import random

import pytest

from engine.actions import GeneratePlayoffs, SetupTournament, UpdateMatchScore, dispatch
from engine.state import MatchScore, Sport, TournamentState
from models.base import configure_database, reset_db


class FixedDraw(random.Random):
    """Random source whose shuffle leaves the list untouched."""

    def shuffle(self, x):
        pass


def play_group_stage(state: TournamentState) -> TournamentState:
    """
    Play every group match with a known outcome.

    In group k (0-based) the first team wins both games, by 6-k and by 1,
    and the second team beats the third 10-0. Group winners therefore rank
    A, B, C, D, E, F and the best runners-up are F's (team 17), then E's
    (team 14).
    """
    for k, group in enumerate(state.groups):
        first, second, third = (m.id for m in group.matches)
        for match_id, score in [
            (first, MatchScore.from_goals(6 - k, 0)),
            (second, MatchScore.from_goals(1, 0)),
            (third, MatchScore.from_goals(10, 0)),
        ]:
            state = dispatch(state, UpdateMatchScore(match_id, score)).state
    return state


@pytest.fixture
def team_names():
    return [f"Equipo {i}" for i in range(1, 19)]


@pytest.fixture
def fixed_draw():
    return FixedDraw()


@pytest.fixture
def group_stage_state(team_names, fixed_draw):
    """A general-sport tournament right after setup."""
    result = dispatch(
        TournamentState(id="t1"),
        SetupTournament(tuple(team_names), Sport.GENERAL, name="Copa"),
        rng=fixed_draw,
    )
    return result.state


@pytest.fixture
def volleyball_state(team_names, fixed_draw):
    result = dispatch(
        TournamentState(id="v1"),
        SetupTournament(tuple(team_names), Sport.VOLLEYBALL, name="Liga"),
        rng=fixed_draw,
    )
    return result.state


@pytest.fixture
def completed_groups_state(group_stage_state):
    return play_group_stage(group_stage_state)


@pytest.fixture
def playoff_state(completed_groups_state):
    return dispatch(completed_groups_state, GeneratePlayoffs()).state


@pytest.fixture
def database():
    """Fresh in-memory database bound to the session factory."""
    engine = configure_database("sqlite://")
    reset_db()
    yield engine
    engine.dispose()
