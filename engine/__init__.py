"""
Torneo Tournament Engine

Pure state transitions for a six-group, eight-team-playoff tournament.
This module contains no GUI or database dependencies.
"""

from engine.state import (
    Sport,
    TournamentStatus,
    PlayoffRound,
    MatchType,
    Team,
    Match,
    MatchScore,
    Group,
    Playoff,
    TournamentState,
    state_to_dict,
    state_from_dict,
)
from engine.standings import GreenCardOrder, rank
from engine.errors import ErrorKind, TournamentError
from engine.actions import (
    SetupTournament,
    UpdateMatchScore,
    GeneratePlayoffs,
    EditTeamName,
    EditTournamentDetails,
    OverridePlayoffWinner,
    ActionNotice,
    ActionResult,
    dispatch,
)

__all__ = [
    "Sport",
    "TournamentStatus",
    "PlayoffRound",
    "MatchType",
    "Team",
    "Match",
    "MatchScore",
    "Group",
    "Playoff",
    "TournamentState",
    "state_to_dict",
    "state_from_dict",
    "GreenCardOrder",
    "rank",
    "ErrorKind",
    "TournamentError",
    "SetupTournament",
    "UpdateMatchScore",
    "GeneratePlayoffs",
    "EditTeamName",
    "EditTournamentDetails",
    "OverridePlayoffWinner",
    "ActionNotice",
    "ActionResult",
    "dispatch",
]
