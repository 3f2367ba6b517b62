"""
Playoff Bracket Engine

Seeds the eight-team bracket from the group standings and moves winners
and losers through it:

    QF1 ─┐
         ├─ SF1 ─┐
    QF2 ─┘       ├─ Final (winners)
    QF3 ─┐       └─ Third place (losers)
         ├─ SF2 ─┘
    QF4 ─┘
"""

import logging
from dataclasses import replace
from typing import Optional

from config import TOURNAMENT_SETTINGS
from engine.errors import (
    ErrorKind,
    InvalidMatchResult,
    InvalidOverride,
    PlayoffGenerationError,
)
from engine.standings import GreenCardOrder, rank, refresh_green_cards
from engine.state import (
    Match,
    MatchScore,
    Playoff,
    PlayoffRound,
    Team,
    TournamentState,
    TournamentStatus,
)

logger = logging.getLogger(__name__)


NUM_WILDCARDS = 2

# Quarterfinal pairings as (side, rank) with 0-indexed ranks among
# group winners ("W") or best runners-up ("X").
QUARTERFINAL_SEEDING = [
    (("W", 0), ("X", 1)),   # 1 vs 8
    (("W", 3), ("W", 4)),   # 4 vs 5
    (("W", 1), ("X", 0)),   # 2 vs 7
    (("W", 2), ("W", 5)),   # 3 vs 6
]


def qualifiers(state: TournamentState) -> tuple[tuple[Team, ...], tuple[Team, ...]]:
    """
    Rank group winners and runners-up across groups.

    Returns (ranked winners, ranked runners-up). The cross-group ranking
    uses the configured green-card direction.
    """
    winners = []
    runners_up = []
    for group in state.groups:
        standing = rank(state.group_teams(group), state.sport)
        if len(standing) > 0:
            winners.append(standing[0])
        if len(standing) > 1:
            runners_up.append(standing[1])

    order = GreenCardOrder(TOURNAMENT_SETTINGS.seeding_green_card_order)
    return (
        rank(winners, state.sport, green_cards=order),
        rank(runners_up, state.sport, green_cards=order),
    )


def generate_playoffs(state: TournamentState) -> TournamentState:
    """
    Seed the bracket and move the tournament into the playoffs.

    Group play completeness is not checked here; see
    ``engine.tournament.is_group_stage_complete``.
    """
    if state.status != TournamentStatus.GROUP_STAGE:
        raise PlayoffGenerationError(
            f"Playoffs can only be generated during the group stage (status: {state.status.value})",
            ErrorKind.INVALID_STATUS,
        )

    winners, runners_up = qualifiers(state)
    wildcards = runners_up[:NUM_WILDCARDS]
    if len(winners) < TOURNAMENT_SETTINGS.num_groups or len(wildcards) < NUM_WILDCARDS:
        raise PlayoffGenerationError(
            "Not enough ranked teams to generate the playoffs",
            ErrorKind.NOT_ENOUGH_TEAMS,
        )

    seeds = {"W": winners, "X": wildcards}
    match_id = TOURNAMENT_SETTINGS.playoff_match_id_start

    quarterfinals = []
    for (side1, rank1), (side2, rank2) in QUARTERFINAL_SEEDING:
        quarterfinals.append(Match(
            id=match_id,
            team1_id=seeds[side1][rank1].id,
            team2_id=seeds[side2][rank2].id,
            round=PlayoffRound.QUARTER_FINAL,
        ))
        match_id += 1

    semifinals = []
    for _ in range(2):
        semifinals.append(Match(id=match_id, team1_id=None, team2_id=None,
                                round=PlayoffRound.SEMI_FINAL))
        match_id += 1

    third_place = Match(id=match_id, team1_id=None, team2_id=None,
                        round=PlayoffRound.THIRD_PLACE)
    final = Match(id=match_id + 1, team1_id=None, team2_id=None,
                  round=PlayoffRound.FINAL)

    playoff = Playoff(
        quarterfinals=tuple(quarterfinals),
        semifinals=tuple(semifinals),
        third_place=third_place,
        final=final,
    )

    logger.info(
        "Playoffs seeded: %s",
        ", ".join(
            f"{state.team_name(m.team1_id)} vs {state.team_name(m.team2_id)}"
            for m in quarterfinals
        ),
    )
    return replace(state, playoff=playoff, status=TournamentStatus.PLAYOFFS)


def _set_slot(match: Match, slot: int, team_id: int) -> Match:
    if slot == 0:
        return replace(match, team1_id=team_id)
    return replace(match, team2_id=team_id)


def advance(
    state: TournamentState,
    decided: Match,
    winner_id: int,
    loser_id: int
) -> TournamentState:
    """
    Store a decided playoff match and propagate its outcome.

    QF i feeds SF i // 2 (slot i % 2). SF i feeds the final and the
    third-place match in slot i. Deciding the final finishes the tournament.
    """
    playoff = state.playoff
    status = state.status

    quarterfinals = list(playoff.quarterfinals)
    semifinals = list(playoff.semifinals)
    third_place = playoff.third_place
    final = playoff.final
    champion_id = playoff.champion_id
    third_place_id = playoff.third_place_id

    if decided.round == PlayoffRound.QUARTER_FINAL:
        index = next(i for i, m in enumerate(quarterfinals) if m.id == decided.id)
        quarterfinals[index] = decided
        semifinals[index // 2] = _set_slot(semifinals[index // 2], index % 2, winner_id)

    elif decided.round == PlayoffRound.SEMI_FINAL:
        index = next(i for i, m in enumerate(semifinals) if m.id == decided.id)
        semifinals[index] = decided
        final = _set_slot(final, index, winner_id)
        third_place = _set_slot(third_place, index, loser_id)

    elif decided.round == PlayoffRound.THIRD_PLACE:
        third_place = decided
        third_place_id = winner_id

    elif decided.round == PlayoffRound.FINAL:
        final = decided
        champion_id = winner_id
        status = TournamentStatus.FINISHED
        logger.info("Champion decided: %s", state.team_name(winner_id))

    playoff = Playoff(
        quarterfinals=tuple(quarterfinals),
        semifinals=tuple(semifinals),
        third_place=third_place,
        final=final,
        champion_id=champion_id,
        third_place_id=third_place_id,
    )
    teams = refresh_green_cards(
        state.teams,
        [*(m for g in state.groups for m in g.matches), *playoff.matches],
    )
    return replace(state, teams=teams, playoff=playoff, status=status)


def _find_ready_match(state: TournamentState, match_id: int) -> Optional[Match]:
    if state.playoff is None:
        return None

    match = state.playoff.find_match(match_id)
    if match is None:
        logger.debug("No playoff match with id %s", match_id)
        return None

    if not match.is_ready:
        raise InvalidMatchResult(
            f"Match {match_id} does not have both teams yet",
            ErrorKind.SLOTS_NOT_ASSIGNED,
        )
    return match


def apply_playoff_result(
    state: TournamentState,
    match_id: int,
    score: MatchScore
) -> TournamentState:
    """
    Record a playoff result and advance the winner (and SF loser).

    A tied score cannot decide a knockout match: it is rejected and the
    state is left as it was.
    """
    match = _find_ready_match(state, match_id)
    if match is None:
        return state

    if score.team1_score == score.team2_score:
        raise InvalidMatchResult(
            f"Match {match_id} ended level; record the winner with an override",
            ErrorKind.TIED_PLAYOFF,
        )

    decided = match.with_score(score)
    if decided.team1_score > decided.team2_score:
        winner_id, loser_id = decided.team1_id, decided.team2_id
    else:
        winner_id, loser_id = decided.team2_id, decided.team1_id

    return advance(state, decided, winner_id, loser_id)


def override_winner(state: TournamentState, match_id: int, winner_id: int) -> TournamentState:
    """
    Force the winner of a playoff match, e.g. after a disqualification.

    The match gets a symbolic 1-0 in favour of ``winner_id``, keeps its
    green cards, and the normal advancement applies.
    """
    match = _find_ready_match(state, match_id)
    if match is None:
        return state

    if not match.involves(winner_id):
        raise InvalidOverride(
            f"Team {winner_id} does not play in match {match_id}",
            ErrorKind.INVALID_OVERRIDE,
        )

    if winner_id == match.team1_id:
        loser_id = match.team2_id
        team1_score, team2_score = 1, 0
    else:
        loser_id = match.team1_id
        team1_score, team2_score = 0, 1

    decided = replace(
        match,
        played=True,
        team1_score=team1_score,
        team2_score=team2_score,
        team1_set_scores=(),
        team2_set_scores=(),
    )
    logger.info("Override: %s wins match %s", state.team_name(winner_id), match_id)
    return advance(state, decided, winner_id, loser_id)
