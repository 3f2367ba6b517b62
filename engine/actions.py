"""
Action dispatch.

Callers never mutate a TournamentState; they submit one of the actions
below to ``dispatch`` and get back the next snapshot. Engine errors are
caught here and reported as an ``ActionNotice`` alongside the unchanged
state.

Usage:
    result = dispatch(TournamentState(), SetupTournament(names, Sport.GENERAL))
    result = dispatch(result.state, UpdateMatchScore(1, MatchScore.from_goals(3, 1)))
    if result.notice:
        print(result.notice.message)
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Union

from engine.errors import ErrorKind, TournamentError
from engine.playoff import apply_playoff_result, generate_playoffs, override_winner
from engine.state import MatchScore, MatchType, Sport, TournamentState
from engine.tournament import (
    apply_group_result,
    edit_tournament_details,
    rename_team,
    setup_tournament,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetupTournament:
    team_names: tuple[str, ...]
    sport: Sport = Sport.GENERAL
    name: Optional[str] = None


@dataclass(frozen=True)
class UpdateMatchScore:
    match_id: int
    score: MatchScore
    match_type: MatchType = MatchType.GROUP


@dataclass(frozen=True)
class GeneratePlayoffs:
    pass


@dataclass(frozen=True)
class EditTeamName:
    team_id: int
    new_name: str


@dataclass(frozen=True)
class EditTournamentDetails:
    name: str
    sport: Sport


@dataclass(frozen=True)
class OverridePlayoffWinner:
    match_id: int
    winner_id: int


Action = Union[
    SetupTournament,
    UpdateMatchScore,
    GeneratePlayoffs,
    EditTeamName,
    EditTournamentDetails,
    OverridePlayoffWinner,
]


@dataclass(frozen=True)
class ActionNotice:
    """A condition the caller should surface to the user."""
    level: str
    message: str
    kind: ErrorKind


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a dispatch: the next state and an optional notice."""
    state: TournamentState
    notice: Optional[ActionNotice] = None

    @property
    def ok(self) -> bool:
        return self.notice is None


def _setup(state: TournamentState, action: SetupTournament, rng) -> TournamentState:
    return setup_tournament(state, action.team_names, action.sport, name=action.name, rng=rng)


def _update_score(state: TournamentState, action: UpdateMatchScore, rng) -> TournamentState:
    if action.match_type == MatchType.GROUP:
        return apply_group_result(state, action.match_id, action.score)
    return apply_playoff_result(state, action.match_id, action.score)


def _generate(state: TournamentState, action: GeneratePlayoffs, rng) -> TournamentState:
    return generate_playoffs(state)


def _rename(state: TournamentState, action: EditTeamName, rng) -> TournamentState:
    return rename_team(state, action.team_id, action.new_name)


def _edit_details(state: TournamentState, action: EditTournamentDetails, rng) -> TournamentState:
    return edit_tournament_details(state, action.name, action.sport)


def _override(state: TournamentState, action: OverridePlayoffWinner, rng) -> TournamentState:
    return override_winner(state, action.match_id, action.winner_id)


_HANDLERS: dict[type, Callable] = {
    SetupTournament: _setup,
    UpdateMatchScore: _update_score,
    GeneratePlayoffs: _generate,
    EditTeamName: _rename,
    EditTournamentDetails: _edit_details,
    OverridePlayoffWinner: _override,
}


def dispatch(
    state: TournamentState,
    action: Action,
    rng: Optional[random.Random] = None
) -> ActionResult:
    """
    Apply an action to a state.

    Args:
        state: The current snapshot (never modified)
        action: One of the action dataclasses in this module
        rng: Random source for the group draw (SetupTournament only)

    Returns:
        ActionResult with the next state, or the same state and a notice
        if the engine rejected the action
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown action: {action!r}")

    try:
        next_state = handler(state, action, rng)
    except TournamentError as exc:
        logger.warning("%s rejected: %s", type(action).__name__, exc)
        return ActionResult(
            state=state,
            notice=ActionNotice(level="warning", message=str(exc), kind=exc.kind),
        )

    return ActionResult(state=next_state)
