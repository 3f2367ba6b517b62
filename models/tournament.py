"""
Tournament model for persistence.

One row per tournament. The full engine snapshot is kept as JSON for exact
recovery on reload; name, sport, status and champion are mirrored into
columns for listing.
"""

import json
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Integer, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from engine.state import TournamentState, TournamentStatus, state_from_dict, state_to_dict
from models.base import Base


class TournamentRecord(Base):
    """
    A stored tournament.

    ``state_json`` holds ``engine.state.state_to_dict`` output.
    """
    __tablename__ = "tournaments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    sport: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Winner
    champion_team_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    champion_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc)
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # State persistence (JSON)
    state_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

    def __repr__(self) -> str:
        return f"<TournamentRecord(id='{self.id}', name='{self.name}', status={self.status})>"

    @property
    def state(self) -> dict:
        """Get the stored snapshot as a plain record."""
        if self.state_json:
            return json.loads(self.state_json)
        return {}

    @state.setter
    def state(self, value: dict) -> None:
        """Set the stored snapshot."""
        self.state_json = json.dumps(value)

    @classmethod
    def from_state(cls, state: TournamentState) -> "TournamentRecord":
        record = cls(id=state.id)
        record.update_from_state(state)
        return record

    def to_state(self) -> TournamentState:
        """Reconstruct the engine snapshot."""
        return state_from_dict(self.state)

    def update_from_state(self, state: TournamentState) -> None:
        """
        Update the row from an engine snapshot.

        Args:
            state: TournamentState with the current tournament data
        """
        self.name = state.name
        self.sport = state.sport.value
        self.status = state.status.value
        self.state = state_to_dict(state)
        self.updated_at = datetime.now(timezone.utc)

        if state.playoff and state.playoff.champion_id is not None:
            self.champion_team_id = state.playoff.champion_id
            self.champion_name = state.team_name(state.playoff.champion_id)
        else:
            self.champion_team_id = None
            self.champion_name = None

        if state.status == TournamentStatus.FINISHED:
            if self.completed_at is None:
                self.completed_at = datetime.now(timezone.utc)
        else:
            self.completed_at = None
