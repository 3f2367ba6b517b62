"""
Torneo Application Controller

Top-level controller that wires together all application components.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject

from config import PATHS
from engine.state import TournamentState
from models.base import configure_database, init_db
from services.csv_io import export_filename, export_tournament_csv, read_setup_csv
from services.event_bus import EventBus
from services.tournament_service import TournamentService

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class TorneoApp(QObject):
    """
    Top-level application controller.
    Wires the event bus, the database and the tournament service.
    """

    def __init__(self, database_url: Optional[str] = None):
        super().__init__()

        # Initialize database
        configure_database(database_url)
        init_db()

        # Core services
        self.event_bus = EventBus()
        self.tournaments = TournamentService(self.event_bus)

        self.event_bus.system_message.connect(self._on_system_message)
        self.event_bus.tournament_finished.connect(self._on_tournament_finished)

    def _on_system_message(self, level: str, message: str) -> None:
        logger.log(LOG_LEVELS.get(level, logging.INFO), message)

    def _on_tournament_finished(self, data: dict) -> None:
        logger.info("Tournament %s finished, champion: %s", data["id"], data["champion_name"])

    def import_csv(self, filepath: str) -> TournamentState:
        """
        Create a tournament from a setup CSV.

        Raises:
            CsvImportError: if the file is malformed
        """
        setup = read_setup_csv(filepath)
        return self.tournaments.create_tournament(setup.name, setup.team_names, setup.sport)

    def export_csv(self, tournament_id: str, filepath: Optional[str] = None) -> Optional[Path]:
        """
        Export a tournament to CSV.

        Args:
            tournament_id: Stored tournament id
            filepath: Output path; defaults to the exports directory

        Returns:
            The written path, or None if the export failed
        """
        state = self.tournaments.get_tournament(tournament_id)
        if filepath is None:
            PATHS.exports.mkdir(parents=True, exist_ok=True)
            path = PATHS.exports / export_filename(state)
        else:
            path = Path(filepath)

        if export_tournament_csv(state, path):
            return path
        return None
