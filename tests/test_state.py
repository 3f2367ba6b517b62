"""
Tests for the state model and its plain-record export.
"""

import json

from engine.state import (
    Match,
    MatchScore,
    Team,
    TournamentState,
    state_from_dict,
    state_to_dict,
)
from engine.playoff import apply_playoff_result


class TestMatchScore:
    """Tests for building results."""

    def test_from_sets_counts_sets(self):
        score = MatchScore.from_sets([25, 23, 15], [20, 25, 10], 1, 0)

        assert (score.team1_score, score.team2_score) == (2, 1)
        assert score.team1_set_scores == (25, 23, 15)
        assert score.team1_green_cards == 1

    def test_from_sets_ignores_unpaired_sets(self):
        score = MatchScore.from_sets([25, 25, 15], [20, 22])

        assert (score.team1_score, score.team2_score) == (2, 0)

    def test_from_sets_level_set_goes_to_team2(self):
        score = MatchScore.from_sets([25], [25])

        assert (score.team1_score, score.team2_score) == (0, 1)


class TestModel:
    """Tests for helpers on the frozen records."""

    def test_team_reset_keeps_identity_and_cards(self):
        team = Team(id=3, name="C", played=2, points=6, goals_for=4, green_cards=2)

        assert team.reset() == Team(id=3, name="C", green_cards=2)

    def test_match_helpers(self):
        match = Match(id=104, team1_id=1, team2_id=None)

        assert not match.is_ready
        assert match.involves(1)
        assert not match.involves(2)

    def test_team_name_default(self, group_stage_state):
        assert group_stage_state.team_name(1) == "Equipo 1"
        assert group_stage_state.team_name(None, "TBD") == "TBD"

    def test_group_of(self, group_stage_state):
        assert group_stage_state.group_of(8).id == "Group C"
        assert group_stage_state.group_of(99) is None

    def test_iter_matches_includes_playoff(self, playoff_state):
        assert len(list(playoff_state.iter_matches())) == 18 + 8


class TestSerialization:
    """Tests for state_to_dict / state_from_dict."""

    def test_round_trip_through_json(self, playoff_state):
        state = apply_playoff_result(playoff_state, 100, MatchScore.from_goals(2, 1, 1, 0))

        data = json.loads(json.dumps(state_to_dict(state)))

        assert state_from_dict(data) == state

    def test_export_includes_derived_differences(self, completed_groups_state):
        data = state_to_dict(completed_groups_state)

        team1 = next(t for t in data["teams"] if t["id"] == 1)
        assert team1["goal_difference"] == 7
        assert team1["set_difference"] == 0
        assert data["status"] == "group_stage"
        assert data["playoff"] is None

    def test_empty_state(self):
        assert state_from_dict(state_to_dict(TournamentState())) == TournamentState()
