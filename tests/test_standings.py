"""
Tests for the Standings Engine

Covers record rebuilding, points per result and the ranking tiebreakers.
"""

import pytest

from engine.standings import (
    GreenCardOrder,
    compute_records,
    count_green_cards,
    green_card_ranking,
    match_points,
    rank,
)
from engine.state import Match, Sport, Team


class TestRanking:
    """Tests for rank() ordering."""

    def test_points_first(self):
        """More points rank higher regardless of other metrics."""
        teams = [
            Team(id=1, name="A", points=3, goals_for=10),
            Team(id=2, name="B", points=6, goals_for=0),
        ]

        ranked = rank(teams, Sport.GENERAL)

        assert [t.id for t in ranked] == [2, 1]

    def test_goal_difference_then_goals_for(self):
        """General sports break ties on goal difference, then goals scored."""
        teams = [
            Team(id=1, name="A", points=3, goals_for=2, goals_against=1),
            Team(id=2, name="B", points=3, goals_for=5, goals_against=2),
            Team(id=3, name="C", points=3, goals_for=4, goals_against=1),
        ]

        ranked = rank(teams, Sport.GENERAL)

        # B and C both +3; B scored more
        assert [t.id for t in ranked] == [2, 3, 1]

    def test_volleyball_set_then_point_difference(self):
        """Net-set sports compare set difference, point difference, points for."""
        teams = [
            Team(id=1, name="A", points=3, sets_won=2, sets_lost=1, points_for=70, points_against=60),
            Team(id=2, name="B", points=3, sets_won=3, sets_lost=1, points_for=80, points_against=79),
            Team(id=3, name="C", points=3, sets_won=2, sets_lost=1, points_for=75, points_against=65),
            Team(id=4, name="D", points=3, sets_won=2, sets_lost=1, points_for=60, points_against=50),
        ]

        ranked = rank(teams, Sport.VOLLEYBALL)

        # B best set diff; A, C, D tie on sets and on +10 points; C scored most
        assert [t.id for t in ranked] == [2, 3, 1, 4]

    def test_volleyball_ignores_goals(self):
        teams = [
            Team(id=1, name="A", points=3, goals_for=9),
            Team(id=2, name="B", points=3, sets_won=1),
        ]

        assert rank(teams, Sport.VOLLEYBALL)[0].id == 2

    def test_fewer_green_cards_rank_higher(self):
        """Fair play breaks a tie on every numeric metric."""
        teams = [
            Team(id=1, name="A", points=3, green_cards=4),
            Team(id=2, name="B", points=3, green_cards=1),
        ]

        assert [t.id for t in rank(teams, Sport.GENERAL)] == [2, 1]

    def test_more_green_cards_when_configured(self):
        teams = [
            Team(id=1, name="A", points=3, green_cards=4),
            Team(id=2, name="B", points=3, green_cards=1),
        ]

        ranked = rank(teams, Sport.GENERAL, green_cards=GreenCardOrder.MORE_IS_BETTER)

        assert [t.id for t in ranked] == [1, 2]

    def test_alphabetical_fallback(self):
        """Identical records fall back to the team name."""
        teams = [
            Team(id=1, name="zeta"),
            Team(id=2, name="Alfa"),
            Team(id=3, name="beta"),
        ]

        assert [t.name for t in rank(teams, Sport.GENERAL)] == ["Alfa", "beta", "zeta"]

    def test_identical_names_ordered_by_id(self):
        teams = [Team(id=5, name="Same"), Team(id=2, name="Same")]

        assert [t.id for t in rank(teams, Sport.GENERAL)] == [2, 5]

    def test_rank_is_deterministic(self):
        """Same input, same order, every time."""
        teams = [
            Team(id=i, name=f"Team {i % 4}", points=(i % 3) * 3, goals_for=i % 2)
            for i in range(1, 10)
        ]

        assert rank(teams, Sport.GENERAL) == rank(list(teams), Sport.GENERAL)
        assert rank(teams, Sport.GENERAL) == rank(list(reversed(teams)), Sport.GENERAL)


class TestMatchPoints:
    """Tests for points awarded per match."""

    @pytest.mark.parametrize("score,expected", [
        ((3, 1), (3, 0)),
        ((0, 2), (0, 3)),
        ((2, 2), (1, 1)),
        ((0, 0), (1, 1)),
    ])
    def test_general_sport_split(self, score, expected):
        match = Match(id=1, team1_id=1, team2_id=2, played=True,
                      team1_score=score[0], team2_score=score[1])

        assert match_points(match, Sport.GENERAL) == expected

    def test_volleyball_has_no_draws(self):
        match = Match(id=1, team1_id=1, team2_id=2, played=True, team1_score=1, team2_score=3)

        assert match_points(match, Sport.VOLLEYBALL) == (0, 3)


class TestComputeRecords:
    """Tests for rebuilding records from matches."""

    def test_rebuild_general(self):
        teams = [Team(id=1, name="A"), Team(id=2, name="B"), Team(id=3, name="C")]
        matches = [
            Match(id=1, team1_id=1, team2_id=2, played=True, team1_score=3, team2_score=1),
            Match(id=2, team1_id=1, team2_id=3, played=True, team1_score=0, team2_score=0),
            Match(id=3, team1_id=2, team2_id=3),  # not played
        ]

        records = {t.id: t for t in compute_records(teams, matches, Sport.GENERAL)}

        assert records[1].played == 2
        assert records[1].wins == 1
        assert records[1].draws == 1
        assert records[1].points == 4
        assert records[1].goals_for == 3
        assert records[1].goal_difference == 2

        assert records[2].played == 1
        assert records[2].losses == 1
        assert records[2].points == 0
        assert records[2].goal_difference == -2

        assert records[3].played == 1
        assert records[3].points == 1

    def test_rebuild_discards_previous_record(self):
        """Stale records are replaced, not added to."""
        teams = [Team(id=1, name="A", played=7, points=21), Team(id=2, name="B")]
        matches = [Match(id=1, team1_id=1, team2_id=2, played=True, team1_score=1, team2_score=0)]

        records = {t.id: t for t in compute_records(teams, matches, Sport.GENERAL)}

        assert records[1].played == 1
        assert records[1].points == 3

    def test_rebuild_volleyball(self):
        teams = [Team(id=1, name="A"), Team(id=2, name="B")]
        matches = [Match(
            id=1, team1_id=1, team2_id=2, played=True,
            team1_score=2, team2_score=1,
            team1_set_scores=(25, 23, 15), team2_set_scores=(20, 25, 10),
        )]

        records = {t.id: t for t in compute_records(teams, matches, Sport.VOLLEYBALL)}

        assert records[1].points == 3
        assert records[1].sets_won == 2
        assert records[1].sets_lost == 1
        assert records[1].points_for == 63
        assert records[1].points_against == 55
        assert records[2].losses == 1
        assert records[2].set_difference == -1
        assert records[2].points_difference == -8


class TestGreenCards:
    """Tests for fair-play counters."""

    def test_count_only_played_matches(self):
        matches = [
            Match(id=1, team1_id=1, team2_id=2, played=True, team1_green_cards=2),
            Match(id=2, team1_id=3, team2_id=1, played=True, team2_green_cards=1),
            Match(id=3, team1_id=1, team2_id=3, played=False, team1_green_cards=5),
        ]

        assert count_green_cards(1, matches) == 3
        assert count_green_cards(2, matches) == 0

    def test_green_card_ranking_most_first(self):
        teams = [
            Team(id=1, name="A", green_cards=1),
            Team(id=2, name="B", green_cards=5),
            Team(id=3, name="C", green_cards=1),
        ]

        assert [t.id for t in green_card_ranking(teams)] == [2, 1, 3]
