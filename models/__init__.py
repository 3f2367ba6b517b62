"""
Torneo Database Models

SQLAlchemy ORM models and pydantic input schemas.
"""

from models.base import Base, configure_database, get_session, init_db, reset_db
from models.tournament import TournamentRecord
from models.schemas import (
    TournamentSetup,
    TournamentDetails,
    TeamRename,
    TournamentSummary,
    GoalScoreEntry,
    SetScoreEntry,
)

__all__ = [
    "Base",
    "configure_database",
    "get_session",
    "init_db",
    "reset_db",
    "TournamentRecord",
    "TournamentSetup",
    "TournamentDetails",
    "TeamRename",
    "TournamentSummary",
    "GoalScoreEntry",
    "SetScoreEntry",
]
