"""
CSV Import / Export

Import format (one value per line, blank lines ignored):
    line 1      tournament name
    line 2      sport: "general" or "volleyball"
    lines 3-20  the 18 team names

Export writes the group tables in standing order followed by the playoff
results, for spreadsheets and archiving.
"""

import csv
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from config import TOURNAMENT_SETTINGS
from engine.standings import green_card_ranking, rank
from engine.state import Match, Sport, TournamentState
from models.schemas import TournamentSetup

logger = logging.getLogger(__name__)


class CsvImportError(ValueError):
    """The setup file does not follow the import format."""


PLAYOFF_ROUND_LABELS = [
    ("quarterfinals", "Quarterfinal"),
    ("semifinals", "Semifinal"),
    ("third_place", "Third place"),
    ("final", "Final"),
]


def parse_setup_csv(text: str) -> TournamentSetup:
    """
    Parse a tournament setup file.

    Raises:
        CsvImportError: if the file is too short, names an unknown sport,
            or has blank team names
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]

    needed = 2 + TOURNAMENT_SETTINGS.team_count
    if len(lines) < needed:
        raise CsvImportError(
            f"The file needs at least {needed} lines "
            f"(1 name, 1 sport, {TOURNAMENT_SETTINGS.team_count} teams); found {len(lines)}"
        )

    name = lines[0]
    sport_value = lines[1].lower()
    try:
        sport = Sport(sport_value)
    except ValueError:
        allowed = " or ".join(f"'{s.value}'" for s in Sport)
        raise CsvImportError(f"Line 2 must name the sport ({allowed}), got '{lines[1]}'") from None

    # Team names may be quoted or carry trailing columns
    team_names = [next(csv.reader([line]), [""])[0] for line in lines[2:needed]]

    try:
        return TournamentSetup(name=name, sport=sport, team_names=team_names)
    except ValidationError as exc:
        raise CsvImportError(f"Invalid tournament data: {exc.errors()[0]['msg']}") from exc


def read_setup_csv(filepath: Union[str, Path]) -> TournamentSetup:
    """Read and parse a setup file from disk."""
    with open(filepath, "r", encoding="utf-8-sig") as f:
        return parse_setup_csv(f.read())


def _group_header(sport: Sport) -> list[str]:
    if sport == Sport.VOLLEYBALL:
        return ["Team", "Pts", "P", "W", "L", "Set diff", "Point diff", "Green cards"]
    return ["Team", "Pts", "P", "W", "D", "L", "GD", "GF", "GA", "Green cards"]


def _group_row(team, sport: Sport) -> list:
    if sport == Sport.VOLLEYBALL:
        return [team.name, team.points, team.played, team.wins, team.losses,
                team.set_difference, team.points_difference, team.green_cards]
    return [team.name, team.points, team.played, team.wins, team.draws, team.losses,
            team.goal_difference, team.goals_for, team.goals_against, team.green_cards]


def _match_row(state: TournamentState, match: Match, label: str) -> list:
    team1 = state.team_name(match.team1_id)
    team2 = state.team_name(match.team2_id)
    result = f"{match.team1_score} - {match.team2_score}" if match.played else "Pending"
    return [label, f"{team1} vs {team2}", result]


def tournament_rows(state: TournamentState) -> list[list]:
    """Build every row of the export, in file order."""
    rows: list[list] = [["GROUP STAGE"], []]

    for group in state.groups:
        rows.append([group.id])
        rows.append(_group_header(state.sport))
        for team in rank(state.group_teams(group), state.sport):
            rows.append(_group_row(team, state.sport))
        rows.append([])

    if state.playoff:
        rows.append(["PLAYOFFS"])
        rows.append([])
        rows.append(["Round", "Match", "Result"])
        for attr, label in PLAYOFF_ROUND_LABELS:
            value = getattr(state.playoff, attr)
            matches = value if isinstance(value, tuple) else (value,)
            for match in matches:
                # Slots not filled yet are left out
                if match.is_ready:
                    rows.append(_match_row(state, match, label))

        if state.playoff.champion_id is not None:
            rows.append([])
            rows.append(["CHAMPION", state.team_name(state.playoff.champion_id)])
        if state.playoff.third_place_id is not None:
            rows.append(["THIRD PLACE", state.team_name(state.playoff.third_place_id)])

    rows.append([])
    rows.append(["FAIR PLAY"])
    rows.append(["Team", "Green cards"])
    for team in green_card_ranking(state.teams):
        rows.append([team.name, team.green_cards])

    return rows


def export_filename(state: TournamentState) -> str:
    """Default file name for an export: spaces become underscores."""
    return f"{(state.name or 'tournament').replace(' ', '_')}_data.csv"


def export_tournament_csv(state: TournamentState, filepath: Union[str, Path]) -> bool:
    """
    Export standings and playoff results to CSV.

    Args:
        state: Tournament snapshot
        filepath: Output file path

    Returns:
        True if export successful, False otherwise
    """
    try:
        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(tournament_rows(state))
        logger.info("Exported %s to %s", state.name, filepath)
        return True
    except OSError as exc:
        logger.error("CSV export failed: %s", exc)
        return False
