"""
Torneo Services

Application services for event handling, storage and CSV exchange.
"""

from services.event_bus import EventBus
from services.tournament_service import TournamentService
from services.csv_io import (
    CsvImportError,
    parse_setup_csv,
    read_setup_csv,
    export_tournament_csv,
)

__all__ = [
    "EventBus",
    "TournamentService",
    "CsvImportError",
    "parse_setup_csv",
    "read_setup_csv",
    "export_tournament_csv",
]
