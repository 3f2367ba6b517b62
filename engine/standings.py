"""
Standings Engine

Rebuilds team records from played matches and ranks teams.

Tiebreaker order:
1. Points (desc)
2. Net-set sports: set difference, point difference, points scored (desc)
   General sports: goal difference, goals scored (desc)
3. Green cards (fewer is better unless told otherwise)
4. Name, then id, so the order is always total
"""

import enum
from dataclasses import replace
from typing import Iterable, Sequence

from config import TOURNAMENT_SETTINGS
from engine.state import Match, Sport, Team


POINTS_FOR_WIN = TOURNAMENT_SETTINGS.points_for_win
POINTS_FOR_DRAW = TOURNAMENT_SETTINGS.points_for_draw


class GreenCardOrder(enum.Enum):
    """Direction of the fair-play tiebreaker."""
    FEWER_IS_BETTER = "fewer_is_better"
    MORE_IS_BETTER = "more_is_better"


def _sort_key(team: Team, sport: Sport, green_cards: GreenCardOrder) -> tuple:
    if sport == Sport.VOLLEYBALL:
        secondary = (-team.set_difference, -team.points_difference, -team.points_for)
    else:
        secondary = (-team.goal_difference, -team.goals_for)

    if green_cards == GreenCardOrder.FEWER_IS_BETTER:
        fair_play = team.green_cards
    else:
        fair_play = -team.green_cards

    return (-team.points, *secondary, fair_play, team.name.casefold(), team.id)


def rank(
    teams: Iterable[Team],
    sport: Sport,
    green_cards: GreenCardOrder = GreenCardOrder.FEWER_IS_BETTER
) -> tuple[Team, ...]:
    """
    Rank teams best first.

    Pure and deterministic: the same input always yields the same order.
    """
    return tuple(sorted(teams, key=lambda t: _sort_key(t, sport, green_cards)))


def match_points(match: Match, sport: Sport) -> tuple[int, int]:
    """League points each side earns from a played match."""
    if match.team1_score > match.team2_score:
        return POINTS_FOR_WIN, 0
    if sport == Sport.VOLLEYBALL:
        # No draws in net-set sports: the set count decides
        return 0, POINTS_FOR_WIN
    if match.team1_score < match.team2_score:
        return 0, POINTS_FOR_WIN
    return POINTS_FOR_DRAW, POINTS_FOR_DRAW


def _apply_match(team: Team, match: Match, sport: Sport, is_team1: bool) -> Team:
    own_score, other_score = match.team1_score, match.team2_score
    own_sets, other_sets = match.team1_set_scores, match.team2_set_scores
    if not is_team1:
        own_score, other_score = other_score, own_score
        own_sets, other_sets = other_sets, own_sets

    team1_points, team2_points = match_points(match, sport)
    earned = team1_points if is_team1 else team2_points

    if earned == POINTS_FOR_WIN:
        result = {"wins": team.wins + 1}
    elif earned == POINTS_FOR_DRAW:
        result = {"draws": team.draws + 1}
    else:
        result = {"losses": team.losses + 1}

    if sport == Sport.VOLLEYBALL:
        metrics = {
            "sets_won": team.sets_won + own_score,
            "sets_lost": team.sets_lost + other_score,
            "points_for": team.points_for + sum(own_sets),
            "points_against": team.points_against + sum(other_sets),
        }
    else:
        metrics = {
            "goals_for": team.goals_for + own_score,
            "goals_against": team.goals_against + other_score,
        }

    return replace(
        team,
        played=team.played + 1,
        points=team.points + earned,
        **result,
        **metrics,
    )


def compute_records(
    teams: Iterable[Team],
    matches: Sequence[Match],
    sport: Sport
) -> list[Team]:
    """
    Rebuild each team's record from scratch.

    Every record is reset and then every played match is applied in the
    given order, so re-scoring a match can never count it twice.
    Green cards are left untouched; see ``count_green_cards``.
    """
    records = {t.id: t.reset() for t in teams}

    for match in matches:
        if not match.played:
            continue
        if match.team1_id in records:
            records[match.team1_id] = _apply_match(
                records[match.team1_id], match, sport, is_team1=True
            )
        if match.team2_id in records:
            records[match.team2_id] = _apply_match(
                records[match.team2_id], match, sport, is_team1=False
            )

    return list(records.values())


def count_green_cards(team_id: int, matches: Iterable[Match]) -> int:
    """Sum a team's green cards over every played match it appears in."""
    total = 0
    for match in matches:
        if not match.played:
            continue
        if match.team1_id == team_id:
            total += match.team1_green_cards
        elif match.team2_id == team_id:
            total += match.team2_green_cards
    return total


def refresh_green_cards(teams: Iterable[Team], matches: Iterable[Match]) -> tuple[Team, ...]:
    """Recompute the fair-play counter of every team over all matches."""
    matches = list(matches)
    return tuple(
        replace(t, green_cards=count_green_cards(t.id, matches))
        for t in teams
    )


def green_card_ranking(teams: Iterable[Team]) -> tuple[Team, ...]:
    """Fair-play table: most green cards first, then by name."""
    return tuple(sorted(teams, key=lambda t: (-t.green_cards, t.name.casefold(), t.id)))
