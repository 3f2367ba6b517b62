"""
Tournament Service

Keeps every stored tournament, applies actions to them and announces the
results on the EventBus. This is the only place where engine snapshots
meet the database.
"""

import logging
import random
import threading
import uuid
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from engine.actions import (
    Action,
    ActionResult,
    EditTeamName,
    EditTournamentDetails,
    GeneratePlayoffs,
    OverridePlayoffWinner,
    SetupTournament,
    UpdateMatchScore,
    dispatch,
)
from engine.state import MatchScore, MatchType, Sport, TournamentState, TournamentStatus
from models.base import get_session
from models.schemas import TournamentSummary
from models.tournament import TournamentRecord
from services.event_bus import EventBus

logger = logging.getLogger(__name__)


class TournamentService:
    """
    Registry of tournaments backed by the database.

    Each ``dispatch`` loads a snapshot, applies one action and saves the
    result while holding a lock, so two callers can never overwrite each
    other's update to the same tournament.

    Usage:
        service = TournamentService(EventBus())
        state = service.create_tournament("Copa", names, Sport.GENERAL)
        service.record_result(state.id, 1, MatchScore.from_goals(2, 0))
        service.generate_playoffs(state.id)
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus or EventBus()
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def create_tournament(
        self,
        name: str,
        team_names: Sequence[str],
        sport: Sport = Sport.GENERAL,
        rng: Optional[random.Random] = None
    ) -> TournamentState:
        """
        Set up and store a new tournament.

        Raises:
            ValueError: if the engine rejects the team list
        """
        initial = TournamentState(id=uuid.uuid4().hex, name=name, sport=sport)
        result = dispatch(initial, SetupTournament(tuple(team_names), sport, name=name), rng=rng)
        if result.notice:
            raise ValueError(result.notice.message)

        state = result.state
        with self._lock:
            self._save(state, create=True)

        logger.info("Created tournament %s (%s)", state.name, state.id)
        self.event_bus.tournament_created.emit({
            "id": state.id,
            "name": state.name,
            "sport": state.sport.value,
        })
        self.event_bus.state_changed.emit(state)
        return state

    def list_tournaments(self) -> list[TournamentSummary]:
        """Summaries of all stored tournaments, oldest first."""
        with get_session() as session:
            records = session.scalars(
                select(TournamentRecord).order_by(TournamentRecord.created_at)
            ).all()
            return [TournamentSummary.model_validate(r) for r in records]

    def get_tournament(self, tournament_id: str) -> TournamentState:
        """
        Load a tournament snapshot.

        Raises:
            ValueError: if no such tournament exists
        """
        with get_session() as session:
            record = session.get(TournamentRecord, tournament_id)
            if not record:
                raise ValueError(f"Tournament {tournament_id} not found")
            return record.to_state()

    def delete_tournament(self, tournament_id: str) -> None:
        with self._lock:
            with get_session() as session:
                record = session.get(TournamentRecord, tournament_id)
                if not record:
                    raise ValueError(f"Tournament {tournament_id} not found")
                session.delete(record)

        logger.info("Deleted tournament %s", tournament_id)
        self.event_bus.tournament_deleted.emit(tournament_id)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def dispatch(self, tournament_id: str, action: Action) -> ActionResult:
        """
        Apply an action to a stored tournament.

        Notices are forwarded to ``system_message``; the stored state only
        changes when the engine accepted the action.
        """
        with self._lock:
            previous = self.get_tournament(tournament_id)
            result = dispatch(previous, action)

            if result.notice:
                self.event_bus.emit_message(result.notice.level, result.notice.message)
                return result

            if result.state == previous:
                return result

            self._save(result.state)

        self._announce(previous, result.state, action)
        return result

    def record_result(
        self,
        tournament_id: str,
        match_id: int,
        score: MatchScore,
        match_type: MatchType = MatchType.GROUP
    ) -> ActionResult:
        return self.dispatch(tournament_id, UpdateMatchScore(match_id, score, match_type))

    def generate_playoffs(self, tournament_id: str) -> ActionResult:
        return self.dispatch(tournament_id, GeneratePlayoffs())

    def override_winner(self, tournament_id: str, match_id: int, winner_id: int) -> ActionResult:
        return self.dispatch(tournament_id, OverridePlayoffWinner(match_id, winner_id))

    def rename_team(self, tournament_id: str, team_id: int, new_name: str) -> ActionResult:
        return self.dispatch(tournament_id, EditTeamName(team_id, new_name))

    def edit_details(self, tournament_id: str, name: str, sport: Sport) -> ActionResult:
        return self.dispatch(tournament_id, EditTournamentDetails(name, sport))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _save(self, state: TournamentState, create: bool = False) -> None:
        try:
            with get_session() as session:
                if create:
                    session.add(TournamentRecord.from_state(state))
                    return

                record = session.get(TournamentRecord, state.id)
                if not record:
                    raise ValueError(f"Tournament {state.id} not found")
                record.update_from_state(state)
        except SQLAlchemyError as exc:
            logger.error("Could not save tournament %s: %s", state.id, exc)
            self.event_bus.database_error.emit(str(exc))
            raise

    def _announce(self, previous: TournamentState, state: TournamentState, action: Action) -> None:
        if isinstance(action, UpdateMatchScore):
            self.event_bus.match_updated.emit({
                "tournament_id": state.id,
                "match_id": action.match_id,
                "match_type": action.match_type.value,
            })
        elif isinstance(action, OverridePlayoffWinner):
            self.event_bus.match_updated.emit({
                "tournament_id": state.id,
                "match_id": action.match_id,
                "match_type": MatchType.PLAYOFF.value,
            })

        if previous.status != TournamentStatus.PLAYOFFS and state.status == TournamentStatus.PLAYOFFS:
            self.event_bus.playoffs_generated.emit(state.id)

        if previous.status != TournamentStatus.FINISHED and state.status == TournamentStatus.FINISHED:
            champion_id = state.playoff.champion_id
            self.event_bus.tournament_finished.emit({
                "id": state.id,
                "champion_id": champion_id,
                "champion_name": state.team_name(champion_id),
            })

        self.event_bus.state_changed.emit(state)
