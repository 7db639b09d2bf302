"""
Tests for the live match classifier.

Highlights:
    ORANGE  first goal within the first hour
    YELLOW  still 0-0 at minute 60
    GREEN   goal after a scoreless hour
    RED     finished 0-0

Side effects fire at most once per match, however often a tick is replayed.
"""
import pytest
from unittest.mock import MagicMock

from inplay_monitor.live import Highlight, LiveMatchClassifier, LiveObservation, MatchKey


class TestHighlights:
    """Tests for highlight transitions."""

    def test_early_goal_is_orange(self, classifier, observe, hooks):
        result = classifier.classify(observe(10, home=1))

        assert result.highlight is Highlight.ORANGE
        assert classifier.store.get(result.key).first_goal_minute == 10
        hooks[0].assert_not_called()

    def test_goal_at_minute_zero_counts_as_first_minute(self, classifier, observe):
        result = classifier.classify(observe(0, away=1))

        assert result.highlight is Highlight.ORANGE
        assert classifier.store.get(result.key).first_goal_minute == 1

    def test_orange_suppresses_hour_mark_rules(self, classifier, observe, hooks):
        classifier.classify(observe(30, home=1))
        result = classifier.classify(observe(75, home=1))

        assert result.highlight is Highlight.ORANGE
        hooks[0].assert_not_called()

    def test_scoreless_first_half_has_no_highlight(self, classifier, observe):
        assert classifier.classify(observe(30)).highlight is Highlight.NONE

    def test_scoreless_at_sixty_is_yellow(self, classifier, observe):
        result = classifier.classify(observe(60))

        assert result.highlight is Highlight.YELLOW
        assert classifier.store.get(result.key).zero_zero_at_60

    def test_goal_after_scoreless_hour_is_green(self, classifier, observe):
        classifier.classify(observe(62))
        result = classifier.classify(observe(70, away=1))

        assert result.highlight is Highlight.GREEN
        state = classifier.store.get(result.key)
        assert state.first_goal_minute == 70

    def test_first_seen_after_late_goal_is_not_green(self, classifier, observe):
        # Never observed 0-0 at the hour mark
        result = classifier.classify(observe(75, home=1))
        assert result.highlight is Highlight.NONE

    def test_finished_scoreless_is_red(self, classifier, observe):
        classifier.classify(observe(62))
        result = classifier.classify(observe(90, finished=True))
        assert result.highlight is Highlight.RED

    def test_finished_with_goals_keeps_highlight(self, classifier, observe):
        classifier.classify(observe(62))
        classifier.classify(observe(80, home=1))
        result = classifier.classify(observe(90, home=1, finished=True))
        assert result.highlight is Highlight.GREEN

    def test_unknown_score_is_not_red(self, classifier, key):
        observation = LiveObservation(key=key, minute=90, finished=True)
        result = classifier.classify(observation)
        assert result.highlight is not Highlight.RED


class TestZeroZeroAfterHalfTime:
    @pytest.mark.parametrize("minute,home,finished,expected", [
        (46, 0, False, True),
        (45, 0, False, False),
        (70, 1, False, False),
        (90, 0, True, False),
    ])
    def test_flag(self, classifier, observe, minute, home, finished, expected):
        result = classifier.classify(observe(minute, home=home, finished=finished))
        assert result.zero_zero_after_half_time is expected

    def test_unknown_score_not_flagged(self, classifier, key):
        result = classifier.classify(LiveObservation(key=key, minute=70))
        assert result.zero_zero_after_half_time is False


class TestSideEffects:
    """Tests for one-shot side effects."""

    def test_sixty_minute_snapshot_once(self, classifier, observe, hooks):
        on_sixty, _ = hooks
        first = classifier.classify(observe(60))
        classifier.classify(observe(61))
        classifier.classify(observe(60))

        on_sixty.assert_called_once()
        assert first.fired == ("sixty_minute_snapshot",)
        assert on_sixty.call_args[0][0].minute == 60

    def test_sixty_minute_snapshot_not_before_sixty(self, classifier, observe, hooks):
        classifier.classify(observe(59))
        hooks[0].assert_not_called()

    def test_finished_scoreless_fires_once(self, classifier, observe, hooks):
        _, on_finished = hooks
        for _ in range(3):
            result = classifier.classify(observe(90, finished=True))

        on_finished.assert_called_once()
        assert result.highlight is Highlight.RED
        assert result.fired == ()

    def test_replaying_a_tick_is_idempotent(self, classifier, observe, hooks):
        observation = observe(65)
        results = [classifier.classify(observation) for _ in range(5)]

        assert {r.highlight for r in results} == {Highlight.YELLOW}
        hooks[0].assert_called_once()

    def test_failed_side_effect_not_retried_by_default(self, classifier, observe, hooks, caplog):
        on_sixty, _ = hooks
        on_sixty.side_effect = RuntimeError("sink down")

        classifier.classify(observe(60))
        result = classifier.classify(observe(61))

        assert on_sixty.call_count == 1
        assert result.highlight is Highlight.YELLOW
        assert "sink down" in caplog.text

    def test_failed_side_effect_retried_when_enabled(self, observe):
        flaky = MagicMock(side_effect=[RuntimeError("x"), None])
        classifier = LiveMatchClassifier(on_sixty_minutes=flaky, retry_failed_side_effects=True)

        classifier.classify(observe(60))
        classifier.classify(observe(61))
        classifier.classify(observe(62))

        assert flaky.call_count == 2

    def test_matches_tracked_independently(self, classifier, observe, hooks):
        other = MatchKey("1.200", "e200")
        classifier.classify(observe(60))
        classifier.classify(observe(60, match_key=other))

        assert hooks[0].call_count == 2
        assert len(classifier.store) == 2

    def test_finished_match_marked_in_store(self, classifier, observe, clock):
        result = classifier.classify(observe(90, finished=True))

        clock.advance(31 * 60)
        classifier.store.evict_expired()

        assert result.key not in classifier.store
