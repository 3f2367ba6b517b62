"""
Torneo Configuration

Centralized settings, paths, and constants for the application.
"""

import logging
import logging.handlers
from pathlib import Path
from dataclasses import dataclass
import appdirs


# Application info
APP_NAME = "Torneo"
APP_AUTHOR = "Torneo"
APP_VERSION = "1.0.0"


@dataclass(frozen=True)
class Paths:
    """Application paths."""
    # Data directory (stores database)
    data_dir: Path = Path(appdirs.user_data_dir(APP_NAME, APP_AUTHOR))

    # Config directory (stores user preferences)
    config_dir: Path = Path(appdirs.user_config_dir(APP_NAME, APP_AUTHOR))

    # Log directory
    log_dir: Path = Path(appdirs.user_log_dir(APP_NAME, APP_AUTHOR))

    @property
    def database(self) -> Path:
        return self.data_dir / "torneo.db"

    @property
    def log_file(self) -> Path:
        return self.log_dir / "torneo.log"

    @property
    def exports(self) -> Path:
        return self.data_dir / "exports"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        for dir_path in [self.data_dir, self.config_dir,
                         self.log_dir, self.exports]:
            dir_path.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class TournamentSettings:
    """Fixed tournament format."""
    num_groups: int = 6
    teams_per_group: int = 3

    # Playoff match ids start here so they never collide with group ids
    playoff_match_id_start: int = 100

    # League points
    points_for_win: int = 3
    points_for_draw: int = 1

    # Net-set sports
    max_sets: int = 5

    # Green-card direction for ranking group winners and runners-up
    # against each other. "more_is_better" reproduces the old placement table.
    seeding_green_card_order: str = "fewer_is_better"

    @property
    def team_count(self) -> int:
        return self.num_groups * self.teams_per_group


# Singleton instances
PATHS = Paths()
TOURNAMENT_SETTINGS = TournamentSettings()

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Handlers installed by init_logging, replaced on every call
_log_handlers: list[logging.Handler] = []


def init_config() -> None:
    """Initialize configuration and create required directories."""
    PATHS.ensure_directories()


def init_logging(level: int = logging.INFO, log_to_file: bool = True) -> None:
    """
    Configure the root logger with a console and a rotating file handler.

    Safe to call again: handlers from an earlier call are removed first, so
    log lines are never duplicated.
    """
    root = logging.getLogger()
    root.setLevel(level)

    while _log_handlers:
        handler = _log_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)
    _log_handlers.append(console)

    if log_to_file:
        PATHS.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            PATHS.log_file, maxBytes=1_000_000, backupCount=3
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
        _log_handlers.append(file_handler)
