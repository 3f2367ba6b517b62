"""
Engine error types.

Transitions raise these; ``engine.actions.dispatch`` turns them into an
``ActionNotice`` so that no engine exception reaches the caller.
"""

import enum
from typing import Optional


class ErrorKind(enum.Enum):
    """Machine-readable reason attached to every engine error."""
    EMPTY_NAME = "empty_name"
    WRONG_TEAM_COUNT = "wrong_team_count"
    INVALID_STATUS = "invalid_status"
    NOT_ENOUGH_TEAMS = "not_enough_teams"
    INVALID_OVERRIDE = "invalid_override"
    SLOTS_NOT_ASSIGNED = "slots_not_assigned"
    TIED_PLAYOFF = "tied_playoff"


class TournamentError(Exception):
    """Base class for engine errors."""
    kind: ErrorKind = ErrorKind.INVALID_STATUS

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class SetupError(TournamentError):
    """The team list cannot start a tournament."""
    kind = ErrorKind.WRONG_TEAM_COUNT


class PlayoffGenerationError(TournamentError):
    """The bracket cannot be seeded from the current standings."""
    kind = ErrorKind.NOT_ENOUGH_TEAMS


class InvalidMatchResult(TournamentError):
    """A playoff result cannot be applied."""
    kind = ErrorKind.SLOTS_NOT_ASSIGNED


class InvalidOverride(TournamentError):
    """The forced winner is not a participant of the match."""
    kind = ErrorKind.INVALID_OVERRIDE


class InvalidEdit(TournamentError):
    """A metadata edit was rejected."""
    kind = ErrorKind.EMPTY_NAME
