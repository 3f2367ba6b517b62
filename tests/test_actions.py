"""
Tests for action dispatch.

Every engine rejection must come back as a notice with the state unchanged.
"""

import pytest

from engine.actions import (
    EditTeamName,
    EditTournamentDetails,
    GeneratePlayoffs,
    OverridePlayoffWinner,
    SetupTournament,
    UpdateMatchScore,
    dispatch,
)
from engine.errors import ErrorKind
from engine.state import MatchScore, MatchType, Sport, TournamentState, TournamentStatus


class TestDispatch:
    """Tests for the happy path of each action."""

    def test_setup(self, team_names, fixed_draw):
        result = dispatch(TournamentState(), SetupTournament(tuple(team_names), Sport.GENERAL, "Copa"),
                          rng=fixed_draw)

        assert result.ok
        assert result.notice is None
        assert result.state.status == TournamentStatus.GROUP_STAGE
        assert result.state.name == "Copa"

    def test_group_score(self, group_stage_state):
        result = dispatch(group_stage_state, UpdateMatchScore(1, MatchScore.from_goals(2, 0)))

        assert result.ok
        assert result.state.get_team(1).points == 3

    def test_playoff_score(self, playoff_state):
        action = UpdateMatchScore(100, MatchScore.from_goals(2, 0), MatchType.PLAYOFF)

        result = dispatch(playoff_state, action)

        assert result.ok
        assert result.state.playoff.semifinals[0].team1_id == 1

    def test_group_match_type_ignores_playoff_ids(self, playoff_state):
        """A playoff id sent as a group result matches nothing."""
        result = dispatch(playoff_state, UpdateMatchScore(100, MatchScore.from_goals(2, 0)))

        assert result.ok
        assert result.state is playoff_state

    def test_generate_playoffs(self, completed_groups_state):
        result = dispatch(completed_groups_state, GeneratePlayoffs())

        assert result.ok
        assert result.state.status == TournamentStatus.PLAYOFFS

    def test_rename(self, group_stage_state):
        result = dispatch(group_stage_state, EditTeamName(2, "Rayos"))

        assert result.state.get_team(2).name == "Rayos"

    def test_edit_details(self, group_stage_state):
        result = dispatch(group_stage_state, EditTournamentDetails("Liga", Sport.VOLLEYBALL))

        assert result.state.name == "Liga"
        assert result.state.sport == Sport.VOLLEYBALL

    def test_override(self, playoff_state):
        result = dispatch(playoff_state, OverridePlayoffWinner(100, 14))

        assert result.ok
        assert result.state.playoff.semifinals[0].team1_id == 14

    def test_full_tournament(self, playoff_state):
        """Quarterfinals through final, ending with an override."""
        state = playoff_state
        for match_id, goals in [
            (100, (2, 1)), (101, (0, 1)), (102, (3, 0)), (103, (1, 2)),
            (104, (1, 0)), (105, (0, 2)), (106, (2, 1)),
        ]:
            action = UpdateMatchScore(match_id, MatchScore.from_goals(*goals), MatchType.PLAYOFF)
            state = dispatch(state, action).state

        assert state.status == TournamentStatus.PLAYOFFS
        assert state.playoff.third_place_id == 13

        state = dispatch(state, OverridePlayoffWinner(107, 16)).state

        assert state.playoff.champion_id == 16
        assert state.status == TournamentStatus.FINISHED

    def test_unknown_action(self, group_stage_state):
        with pytest.raises(TypeError):
            dispatch(group_stage_state, object())


class TestNotices:
    """Tests for rejected actions."""

    def test_wrong_team_count(self, team_names):
        state = TournamentState()

        result = dispatch(state, SetupTournament(tuple(team_names[:10])))

        assert not result.ok
        assert result.state is state
        assert result.notice.kind == ErrorKind.WRONG_TEAM_COUNT
        assert result.notice.level == "warning"

    def test_empty_team_name(self, team_names):
        team_names[0] = ""

        result = dispatch(TournamentState(), SetupTournament(tuple(team_names)))

        assert result.notice.kind == ErrorKind.EMPTY_NAME

    def test_playoffs_twice(self, playoff_state):
        result = dispatch(playoff_state, GeneratePlayoffs())

        assert result.state is playoff_state
        assert result.notice.kind == ErrorKind.INVALID_STATUS

    def test_playoffs_before_setup(self):
        result = dispatch(TournamentState(), GeneratePlayoffs())

        assert result.notice.kind == ErrorKind.INVALID_STATUS

    def test_tied_playoff(self, playoff_state):
        action = UpdateMatchScore(101, MatchScore.from_goals(1, 1), MatchType.PLAYOFF)

        result = dispatch(playoff_state, action)

        assert result.state is playoff_state
        assert result.notice.kind == ErrorKind.TIED_PLAYOFF

    def test_unassigned_playoff_match(self, playoff_state):
        action = UpdateMatchScore(107, MatchScore.from_goals(1, 0), MatchType.PLAYOFF)

        result = dispatch(playoff_state, action)

        assert result.notice.kind == ErrorKind.SLOTS_NOT_ASSIGNED

    def test_override_non_participant(self, playoff_state):
        result = dispatch(playoff_state, OverridePlayoffWinner(100, 2))

        assert result.state is playoff_state
        assert result.notice.kind == ErrorKind.INVALID_OVERRIDE

    def test_blank_rename(self, group_stage_state):
        result = dispatch(group_stage_state, EditTeamName(1, " "))

        assert result.state is group_stage_state
        assert result.notice.kind == ErrorKind.EMPTY_NAME

    def test_blank_tournament_name(self, group_stage_state):
        result = dispatch(group_stage_state, EditTournamentDetails("", Sport.GENERAL))

        assert result.notice.kind == ErrorKind.EMPTY_NAME
