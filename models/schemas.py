"""
Pydantic schemas for data validation.

Input coming from forms, files or the command line is validated here
before it becomes an engine action.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from config import TOURNAMENT_SETTINGS
from engine.state import MatchScore, Sport, TournamentState, TournamentStatus


# ============ Tournament Schemas ============

class TournamentSetup(BaseModel):
    """Schema for creating a new tournament."""
    name: str = Field(..., min_length=1, max_length=200)
    sport: Sport = Sport.GENERAL
    team_names: list[str]

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Tournament name cannot be empty")
        return v.strip()

    @field_validator("team_names")
    @classmethod
    def full_team_list(cls, v: list[str]) -> list[str]:
        expected = TOURNAMENT_SETTINGS.team_count
        if len(v) != expected:
            raise ValueError(f"Expected {expected} teams, got {len(v)}")

        names = [name.strip() for name in v]
        if any(not name for name in names):
            raise ValueError("All team names must be filled in")
        return names


class TournamentDetails(BaseModel):
    """Schema for editing tournament name and sport."""
    name: str = Field(..., min_length=1, max_length=200)
    sport: Sport

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Tournament name cannot be empty")
        return v.strip()


class TeamRename(BaseModel):
    """Schema for renaming a team."""
    team_id: int = Field(..., ge=1)
    new_name: str = Field(..., min_length=1, max_length=200)

    @field_validator("new_name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class TournamentSummary(BaseModel):
    """Schema for a tournament listing row."""
    id: str
    name: str
    sport: Sport
    status: TournamentStatus
    champion_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_state(cls, state: TournamentState) -> "TournamentSummary":
        champion = None
        if state.playoff and state.playoff.champion_id is not None:
            champion = state.team_name(state.playoff.champion_id)
        return cls(
            id=state.id,
            name=state.name,
            sport=state.sport,
            status=state.status,
            champion_name=champion,
        )


# ============ Score Schemas ============

class GoalScoreEntry(BaseModel):
    """Result of a general-sport match."""
    team1_score: int = Field(..., ge=0)
    team2_score: int = Field(..., ge=0)
    team1_green_cards: int = Field(0, ge=0)
    team2_green_cards: int = Field(0, ge=0)

    def to_match_score(self) -> MatchScore:
        return MatchScore.from_goals(
            self.team1_score,
            self.team2_score,
            self.team1_green_cards,
            self.team2_green_cards,
        )


class SetScoreEntry(BaseModel):
    """Result of a net-set match, as the points of every set."""
    team1_set_scores: list[int] = Field(..., min_length=1)
    team2_set_scores: list[int] = Field(..., min_length=1)
    team1_green_cards: int = Field(0, ge=0)
    team2_green_cards: int = Field(0, ge=0)

    @field_validator("team1_set_scores", "team2_set_scores")
    @classmethod
    def valid_sets(cls, v: list[int]) -> list[int]:
        if len(v) > TOURNAMENT_SETTINGS.max_sets:
            raise ValueError(f"At most {TOURNAMENT_SETTINGS.max_sets} sets")
        if any(points < 0 or points > 99 for points in v):
            raise ValueError("Set scores must be between 0 and 99")
        return v

    @model_validator(mode="after")
    def sets_match_up(self) -> "SetScoreEntry":
        if len(self.team1_set_scores) != len(self.team2_set_scores):
            raise ValueError("Both teams need a score for every set")
        for number, (a, b) in enumerate(zip(self.team1_set_scores, self.team2_set_scores), start=1):
            if a == b:
                raise ValueError(f"Set {number} cannot end level")
        return self

    def to_match_score(self) -> MatchScore:
        return MatchScore.from_sets(
            self.team1_set_scores,
            self.team2_set_scores,
            self.team1_green_cards,
            self.team2_green_cards,
        )
