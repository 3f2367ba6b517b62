"""
Event Bus - Central signal hub for inter-module communication.

The tournament service emits here after every successful change so that
views, exporters and loggers stay decoupled from the engine.
"""

from PySide6.QtCore import QObject, Signal


class EventBus(QObject):
    """
    Central signal hub for Torneo.

    Usage:
        # In TournamentService
        self.event_bus.state_changed.emit(state)

        # In a view
        self.event_bus.state_changed.connect(self._on_state_changed)
    """

    # ============ Tournament Lifecycle ============
    tournament_created = Signal(dict)     # {id, name, sport}
    tournament_deleted = Signal(str)      # tournament_id
    playoffs_generated = Signal(str)      # tournament_id
    tournament_finished = Signal(dict)    # {id, champion_id, champion_name}

    # ============ State Events ============
    state_changed = Signal(object)        # TournamentState
    match_updated = Signal(dict)          # {tournament_id, match_id, match_type}

    # ============ System Events ============
    database_error = Signal(str)          # Database error message
    system_message = Signal(str, str)     # (level, message) - e.g., ("warning", "...")

    def __init__(self):
        super().__init__()

    def emit_message(self, level: str, message: str) -> None:
        """Emit a system message (info, warning, error)."""
        self.system_message.emit(level, message)
