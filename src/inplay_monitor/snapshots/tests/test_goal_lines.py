"""
Tests for goal-line market recognition.
"""
import pytest
from decimal import Decimal

from inplay_monitor.snapshots import (
    goal_line_outcomes,
    is_goal_line_market,
    parse_goal_line,
    resolve_home_side,
    split_teams,
    to_goal_line_outcome,
)


class TestSplitTeams:
    def test_v_delimiter(self):
        assert split_teams("Arsenal v Chelsea") == ("Arsenal", "Chelsea")

    def test_vs_delimiter(self):
        assert split_teams("Arsenal vs Chelsea") == ("Arsenal", "Chelsea")

    def test_blank(self):
        assert split_teams("  ") == ("", "")


class TestRecognition:
    @pytest.mark.parametrize("market_type,market_name", [
        ("TEAM_A_OVER_UNDER_15", ""),
        ("TEAM_B_OVER_UNDER_25", ""),
        ("", "Arsenal Over/Under 1.5 Goals"),
    ])
    def test_goal_line_markets(self, market_type, market_name):
        assert is_goal_line_market(market_type, market_name)

    def test_other_markets(self):
        assert not is_goal_line_market("MATCH_ODDS", "Match Odds")
        assert not is_goal_line_market("", "Over/Under 2.5 Cards")


class TestParseGoalLine:
    @pytest.mark.parametrize("suffix,line", [
        ("05", "0.5"), ("15", "1.5"), ("25", "2.5"), ("35", "3.5"), ("45", "4.5"),
    ])
    def test_type_suffix(self, suffix, line):
        assert parse_goal_line(f"TEAM_A_OVER_UNDER_{suffix}", "") == Decimal(line)

    def test_number_in_name(self):
        assert parse_goal_line("", "Chelsea Over/Under 2.5 Goals") == Decimal("2.5")

    def test_no_line(self):
        assert parse_goal_line("", "Over/Under Goals") is None


class TestResolveHomeSide:
    def test_type_prefix(self):
        assert resolve_home_side("", "", "TEAM_A_OVER_UNDER_15") is True
        assert resolve_home_side("", "", "TEAM_B_OVER_UNDER_15") is False

    def test_team_a_b_in_name(self):
        assert resolve_home_side("", "Team A Over/Under 1.5 Goals", "") is True
        assert resolve_home_side("", "Team B Over/Under 1.5 Goals", "") is False

    def test_team_name_match(self):
        event = "Arsenal v Chelsea"
        assert resolve_home_side(event, "Arsenal Over/Under 1.5 Goals", "") is True
        assert resolve_home_side(event, "Chelsea Over/Under 1.5 Goals", "") is False

    def test_unresolvable(self):
        assert resolve_home_side("Arsenal v Chelsea", "Over/Under 1.5 Goals", "") is None


class TestToGoalLineOutcome:
    def test_closed_over(self, goal_line_market):
        market = goal_line_market("TEAM_A_OVER_UNDER_15", winner="Over")
        outcome = to_goal_line_outcome(market)

        assert outcome.home_side is True
        assert outcome.line == Decimal("1.5")
        assert outcome.closed is True
        assert outcome.winner_is_over is True
        assert outcome.event_id == "31000"

    def test_closed_under_by_name(self, goal_line_market):
        market = goal_line_market(market_name="Chelsea Over/Under 2.5 Goals", winner="Under")
        outcome = to_goal_line_outcome(market)

        assert outcome.home_side is False
        assert outcome.winner_is_over is False

    def test_open_market_has_no_verdict(self, goal_line_market):
        outcome = to_goal_line_outcome(goal_line_market("TEAM_B_OVER_UNDER_05", closed=False))
        assert outcome.closed is False
        assert outcome.winner_is_over is None

    def test_closed_without_winner(self, goal_line_market):
        outcome = to_goal_line_outcome(goal_line_market("TEAM_A_OVER_UNDER_25", winner=None))
        assert outcome.winner_is_over is None

    def test_unknown_side_yields_nothing(self, goal_line_market):
        market = goal_line_market(market_name="Over/Under 1.5 Goals")
        assert to_goal_line_outcome(market) is None

    def test_event_name_argument_used(self, goal_line_market):
        market = goal_line_market(market_name="Arsenal Over/Under 1.5 Goals", event_name="")
        assert to_goal_line_outcome(market) is None
        assert to_goal_line_outcome(market, "Arsenal v Chelsea").home_side is True

    def test_outcomes_skip_unrecognised(self, goal_line_market):
        markets = [
            goal_line_market("TEAM_A_OVER_UNDER_15"),
            goal_line_market("MATCH_ODDS", "Match Odds"),
            goal_line_market("TEAM_B_OVER_UNDER_05", winner="Under"),
        ]
        outcomes = goal_line_outcomes(markets)

        assert [o.home_side for o in outcomes] == [True, False]
