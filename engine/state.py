"""
Tournament state model.

Every value here is frozen. Actions never mutate a snapshot; they build the
next one with ``dataclasses.replace`` on the sub-structure that changed (the
team tuple, a single group, or the playoff).

Teams live in a single store on ``TournamentState.teams``; groups and matches
refer to them by id only.
"""

import enum
from dataclasses import dataclass, replace
from typing import Iterator, Optional


class Sport(enum.Enum):
    """Supported scoring schemes."""
    GENERAL = "general"         # goals, win/draw/loss
    VOLLEYBALL = "volleyball"   # net-set sport, decided by sets won


class TournamentStatus(enum.Enum):
    """Tournament lifecycle, strictly in this order."""
    SETUP = "setup"
    GROUP_STAGE = "group_stage"
    PLAYOFFS = "playoffs"
    FINISHED = "finished"


class PlayoffRound(enum.Enum):
    """Playoff round tags."""
    QUARTER_FINAL = "QF"
    SEMI_FINAL = "SF"
    THIRD_PLACE = "3P"
    FINAL = "F"


class MatchType(enum.Enum):
    """Which phase a match belongs to."""
    GROUP = "group"
    PLAYOFF = "playoff"


@dataclass(frozen=True)
class Team:
    """A team and its record, rebuilt from played matches."""
    id: int
    name: str
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    points: int = 0

    # General sports
    goals_for: int = 0
    goals_against: int = 0

    # Net-set sports
    sets_won: int = 0
    sets_lost: int = 0
    points_for: int = 0
    points_against: int = 0

    # Fair play, across group and playoff matches
    green_cards: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def set_difference(self) -> int:
        return self.sets_won - self.sets_lost

    @property
    def points_difference(self) -> int:
        return self.points_for - self.points_against

    def reset(self) -> "Team":
        """Return a copy with an empty record, keeping identity and cards."""
        return Team(id=self.id, name=self.name, green_cards=self.green_cards)


@dataclass(frozen=True)
class MatchScore:
    """
    A result as submitted by the caller.

    For net-set sports ``team1_score``/``team2_score`` hold the number of
    sets won and the set sequences hold the points of every set.
    """
    team1_score: int = 0
    team2_score: int = 0
    team1_green_cards: int = 0
    team2_green_cards: int = 0
    team1_set_scores: tuple[int, ...] = ()
    team2_set_scores: tuple[int, ...] = ()

    @classmethod
    def from_goals(
        cls,
        team1_score: int,
        team2_score: int,
        team1_green_cards: int = 0,
        team2_green_cards: int = 0
    ) -> "MatchScore":
        """Build a general-sport result from a goal pair."""
        return cls(
            team1_score=team1_score,
            team2_score=team2_score,
            team1_green_cards=team1_green_cards,
            team2_green_cards=team2_green_cards,
        )

    @classmethod
    def from_sets(
        cls,
        team1_set_scores: list[int],
        team2_set_scores: list[int],
        team1_green_cards: int = 0,
        team2_green_cards: int = 0
    ) -> "MatchScore":
        """
        Build a net-set result from per-set points.

        Only sets present on both sides count. A set goes to team 1 only when
        it scored strictly more points in it.
        """
        team1_sets = 0
        team2_sets = 0
        for team1_points, team2_points in zip(team1_set_scores, team2_set_scores):
            if team1_points > team2_points:
                team1_sets += 1
            else:
                team2_sets += 1

        return cls(
            team1_score=team1_sets,
            team2_score=team2_sets,
            team1_green_cards=team1_green_cards,
            team2_green_cards=team2_green_cards,
            team1_set_scores=tuple(team1_set_scores),
            team2_set_scores=tuple(team2_set_scores),
        )


@dataclass(frozen=True)
class Match:
    """A fixture between two teams. Playoff slots may still be unassigned."""
    id: int
    team1_id: Optional[int]
    team2_id: Optional[int]
    played: bool = False
    team1_score: int = 0
    team2_score: int = 0
    team1_green_cards: int = 0
    team2_green_cards: int = 0
    team1_set_scores: tuple[int, ...] = ()
    team2_set_scores: tuple[int, ...] = ()
    round: Optional[PlayoffRound] = None

    @property
    def is_ready(self) -> bool:
        """Both slots have a team."""
        return self.team1_id is not None and self.team2_id is not None

    def involves(self, team_id: int) -> bool:
        return team_id in (self.team1_id, self.team2_id)

    def with_score(self, score: MatchScore) -> "Match":
        """Return the match marked played with the given result."""
        return replace(
            self,
            played=True,
            team1_score=score.team1_score,
            team2_score=score.team2_score,
            team1_green_cards=score.team1_green_cards,
            team2_green_cards=score.team2_green_cards,
            team1_set_scores=tuple(score.team1_set_scores),
            team2_set_scores=tuple(score.team2_set_scores),
        )


@dataclass(frozen=True)
class Group:
    """Three teams (ids, in current standing order) and their round robin."""
    id: str
    team_ids: tuple[int, ...]
    matches: tuple[Match, ...]

    def find_match(self, match_id: int) -> Optional[Match]:
        return next((m for m in self.matches if m.id == match_id), None)

    @property
    def is_complete(self) -> bool:
        return all(m.played for m in self.matches)


@dataclass(frozen=True)
class Playoff:
    """Single-elimination bracket: QF x4, SF x2, third place and final."""
    quarterfinals: tuple[Match, ...]
    semifinals: tuple[Match, ...]
    third_place: Match
    final: Match
    champion_id: Optional[int] = None
    third_place_id: Optional[int] = None

    @property
    def matches(self) -> tuple[Match, ...]:
        """All playoff matches in bracket order."""
        return (*self.quarterfinals, *self.semifinals, self.third_place, self.final)

    def find_match(self, match_id: int) -> Optional[Match]:
        return next((m for m in self.matches if m.id == match_id), None)


@dataclass(frozen=True)
class TournamentState:
    """The single unit of truth handed between actions."""
    id: str = ""
    name: str = ""
    sport: Sport = Sport.GENERAL
    teams: tuple[Team, ...] = ()
    groups: tuple[Group, ...] = ()
    playoff: Optional[Playoff] = None
    status: TournamentStatus = TournamentStatus.SETUP

    def get_team(self, team_id: Optional[int]) -> Optional[Team]:
        if team_id is None:
            return None
        return next((t for t in self.teams if t.id == team_id), None)

    def team_name(self, team_id: Optional[int], default: str = "") -> str:
        team = self.get_team(team_id)
        return team.name if team else default

    def group_teams(self, group: Group) -> list[Team]:
        """Resolve a group's team ids against the team store, in order."""
        by_id = {t.id: t for t in self.teams}
        return [by_id[team_id] for team_id in group.team_ids]

    def group_of(self, team_id: int) -> Optional[Group]:
        return next((g for g in self.groups if team_id in g.team_ids), None)

    def iter_matches(self) -> Iterator[Match]:
        """Every match of the tournament, group play first."""
        for group in self.groups:
            yield from group.matches
        if self.playoff:
            yield from self.playoff.matches


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _team_to_dict(team: Team) -> dict:
    return {
        "id": team.id,
        "name": team.name,
        "played": team.played,
        "wins": team.wins,
        "draws": team.draws,
        "losses": team.losses,
        "points": team.points,
        "goals_for": team.goals_for,
        "goals_against": team.goals_against,
        "goal_difference": team.goal_difference,
        "sets_won": team.sets_won,
        "sets_lost": team.sets_lost,
        "set_difference": team.set_difference,
        "points_for": team.points_for,
        "points_against": team.points_against,
        "points_difference": team.points_difference,
        "green_cards": team.green_cards,
    }


def _team_from_dict(data: dict) -> Team:
    return Team(
        id=data["id"],
        name=data["name"],
        played=data.get("played", 0),
        wins=data.get("wins", 0),
        draws=data.get("draws", 0),
        losses=data.get("losses", 0),
        points=data.get("points", 0),
        goals_for=data.get("goals_for", 0),
        goals_against=data.get("goals_against", 0),
        sets_won=data.get("sets_won", 0),
        sets_lost=data.get("sets_lost", 0),
        points_for=data.get("points_for", 0),
        points_against=data.get("points_against", 0),
        green_cards=data.get("green_cards", 0),
    )


def _match_to_dict(match: Match) -> dict:
    return {
        "id": match.id,
        "team1_id": match.team1_id,
        "team2_id": match.team2_id,
        "played": match.played,
        "team1_score": match.team1_score,
        "team2_score": match.team2_score,
        "team1_green_cards": match.team1_green_cards,
        "team2_green_cards": match.team2_green_cards,
        "team1_set_scores": list(match.team1_set_scores),
        "team2_set_scores": list(match.team2_set_scores),
        "round": match.round.value if match.round else None,
    }


def _match_from_dict(data: dict) -> Match:
    round_value = data.get("round")
    return Match(
        id=data["id"],
        team1_id=data.get("team1_id"),
        team2_id=data.get("team2_id"),
        played=data.get("played", False),
        team1_score=data.get("team1_score", 0),
        team2_score=data.get("team2_score", 0),
        team1_green_cards=data.get("team1_green_cards", 0),
        team2_green_cards=data.get("team2_green_cards", 0),
        team1_set_scores=tuple(data.get("team1_set_scores", ())),
        team2_set_scores=tuple(data.get("team2_set_scores", ())),
        round=PlayoffRound(round_value) if round_value else None,
    )


def state_to_dict(state: TournamentState) -> dict:
    """
    Export the full tournament state as a plain record.

    Suitable for JSON serialization; ``state_from_dict`` reads it back.
    """
    playoff = None
    if state.playoff:
        playoff = {
            "quarterfinals": [_match_to_dict(m) for m in state.playoff.quarterfinals],
            "semifinals": [_match_to_dict(m) for m in state.playoff.semifinals],
            "third_place": _match_to_dict(state.playoff.third_place),
            "final": _match_to_dict(state.playoff.final),
            "champion_id": state.playoff.champion_id,
            "third_place_id": state.playoff.third_place_id,
        }

    return {
        "id": state.id,
        "name": state.name,
        "sport": state.sport.value,
        "status": state.status.value,
        "teams": [_team_to_dict(t) for t in state.teams],
        "groups": [
            {
                "id": g.id,
                "team_ids": list(g.team_ids),
                "matches": [_match_to_dict(m) for m in g.matches],
            }
            for g in state.groups
        ],
        "playoff": playoff,
    }


def state_from_dict(data: dict) -> TournamentState:
    """Reconstruct a TournamentState from ``state_to_dict`` output."""
    playoff = None
    playoff_data = data.get("playoff")
    if playoff_data:
        playoff = Playoff(
            quarterfinals=tuple(_match_from_dict(m) for m in playoff_data["quarterfinals"]),
            semifinals=tuple(_match_from_dict(m) for m in playoff_data["semifinals"]),
            third_place=_match_from_dict(playoff_data["third_place"]),
            final=_match_from_dict(playoff_data["final"]),
            champion_id=playoff_data.get("champion_id"),
            third_place_id=playoff_data.get("third_place_id"),
        )

    return TournamentState(
        id=data.get("id", ""),
        name=data.get("name", ""),
        sport=Sport(data.get("sport", Sport.GENERAL.value)),
        status=TournamentStatus(data.get("status", TournamentStatus.SETUP.value)),
        teams=tuple(_team_from_dict(t) for t in data.get("teams", [])),
        groups=tuple(
            Group(
                id=g["id"],
                team_ids=tuple(g["team_ids"]),
                matches=tuple(_match_from_dict(m) for m in g["matches"]),
            )
            for g in data.get("groups", [])
        ),
        playoff=playoff,
    )
