"""
Tournament setup, group results and metadata edits.

Each function takes a TournamentState and returns the next one. Unknown
match or team ids leave the state untouched; rejected input raises a
``TournamentError`` subclass.
"""

import logging
import random
import uuid
from dataclasses import replace
from typing import Optional, Sequence

from config import TOURNAMENT_SETTINGS
from engine.errors import ErrorKind, InvalidEdit, SetupError
from engine.standings import compute_records, rank, refresh_green_cards
from engine.state import (
    Group,
    Match,
    MatchScore,
    Sport,
    Team,
    TournamentState,
    TournamentStatus,
)

logger = logging.getLogger(__name__)


# Round robin for three teams, as indices into the group's team list
ROUND_ROBIN_PAIRS = [(0, 1), (0, 2), (1, 2)]


def group_label(index: int) -> str:
    """Human label for the group at ``index``: Group A, Group B, ..."""
    return f"Group {chr(ord('A') + index)}"


def validate_team_names(team_names: Sequence[str]) -> None:
    """Reject a team list that cannot fill every group."""
    expected = TOURNAMENT_SETTINGS.team_count
    if len(team_names) != expected:
        raise SetupError(
            f"Expected {expected} teams, got {len(team_names)}",
            ErrorKind.WRONG_TEAM_COUNT,
        )

    for position, name in enumerate(team_names, start=1):
        if not name or not name.strip():
            raise SetupError(
                f"Team {position} has an empty name",
                ErrorKind.EMPTY_NAME,
            )


def setup_tournament(
    state: TournamentState,
    team_names: Sequence[str],
    sport: Sport,
    name: Optional[str] = None,
    rng: Optional[random.Random] = None
) -> TournamentState:
    """
    Create the teams, draw the groups and schedule group play.

    Teams get ids 1..N in the order given. The draw shuffles them with
    ``rng`` (a fresh ``random.Random`` if omitted) and deals consecutive
    blocks into groups. Match ids run from 1 across all groups.
    """
    validate_team_names(team_names)
    rng = rng or random.Random()

    teams = tuple(Team(id=i, name=team_name) for i, team_name in enumerate(team_names, start=1))

    drawn = list(teams)
    rng.shuffle(drawn)

    per_group = TOURNAMENT_SETTINGS.teams_per_group
    groups = []
    match_id = 1
    for index in range(TOURNAMENT_SETTINGS.num_groups):
        group_teams = drawn[index * per_group:(index + 1) * per_group]
        matches = []
        for first, second in ROUND_ROBIN_PAIRS:
            matches.append(Match(
                id=match_id,
                team1_id=group_teams[first].id,
                team2_id=group_teams[second].id,
            ))
            match_id += 1

        groups.append(Group(
            id=group_label(index),
            team_ids=tuple(t.id for t in group_teams),
            matches=tuple(matches),
        ))

    logger.info("Drew %d teams into %d groups (%s)", len(teams), len(groups), sport.value)

    return replace(
        state,
        id=state.id or uuid.uuid4().hex,
        name=name if name is not None else state.name,
        sport=sport,
        teams=teams,
        groups=tuple(groups),
        playoff=None,
        status=TournamentStatus.GROUP_STAGE,
    )


def find_group_for_match(state: TournamentState, match_id: int) -> Optional[Group]:
    return next((g for g in state.groups if g.find_match(match_id)), None)


def apply_group_result(
    state: TournamentState,
    match_id: int,
    score: MatchScore
) -> TournamentState:
    """
    Record a group match result and rebuild the owning group's standings.

    The group's records are recomputed from all of its played matches, green
    cards are recounted across the whole tournament, and the group's team
    order is replaced with the fresh ranking.
    """
    group = find_group_for_match(state, match_id)
    if group is None:
        logger.debug("No group match with id %s", match_id)
        return state

    matches = tuple(
        m.with_score(score) if m.id == match_id else m
        for m in group.matches
    )
    group = replace(group, matches=matches)
    groups = tuple(group if g.id == group.id else g for g in state.groups)

    # Cards first: the ranking uses them as a tiebreaker
    all_matches = [m for g in groups for m in g.matches]
    if state.playoff:
        all_matches.extend(state.playoff.matches)
    teams = refresh_green_cards(state.teams, all_matches)

    by_id = {t.id: t for t in teams}
    records = compute_records(
        [by_id[team_id] for team_id in group.team_ids],
        group.matches,
        state.sport,
    )
    for record in records:
        by_id[record.id] = record

    ranked = rank(records, state.sport)
    group = replace(group, team_ids=tuple(t.id for t in ranked))
    groups = tuple(group if g.id == group.id else g for g in groups)

    return replace(
        state,
        teams=tuple(by_id[t.id] for t in teams),
        groups=groups,
    )


def is_group_stage_complete(state: TournamentState) -> bool:
    """Check if every group match has been played."""
    return bool(state.groups) and all(g.is_complete for g in state.groups)


def rename_team(state: TournamentState, team_id: int, new_name: str) -> TournamentState:
    """Rename a team. Groups hold ids, so the team store is the only copy."""
    if not new_name or not new_name.strip():
        raise InvalidEdit("Team name cannot be empty", ErrorKind.EMPTY_NAME)

    if state.get_team(team_id) is None:
        return state

    teams = tuple(
        replace(t, name=new_name.strip()) if t.id == team_id else t
        for t in state.teams
    )
    return replace(state, teams=teams)


def edit_tournament_details(state: TournamentState, name: str, sport: Sport) -> TournamentState:
    """
    Change the tournament name and sport.

    Already played matches are not rescored; the new sport applies the next
    time a group is recomputed.
    """
    if not name or not name.strip():
        raise InvalidEdit("Tournament name cannot be empty", ErrorKind.EMPTY_NAME)

    return replace(state, name=name.strip(), sport=sport)
