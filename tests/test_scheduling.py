"""
Tests for the interval calculator and success rate.
"""

import random
from datetime import timedelta

import pytest

from deckstudy.constants import DEFAULT_INTERVALS, DEFAULT_MULTIPLIERS, MAX_INTERVAL, ResponseType
from deckstudy.scheduling import (
    adjusted_multiplier,
    calculate_interval,
    calculate_next_review_date,
    calculate_success_rate,
    consecutive_correct,
    logs_for_card,
)


def _seconds(td):
    return td.total_seconds()


class TestFirstExposure:
    """Cards with no history always get the base interval."""

    @pytest.mark.parametrize("response_type", list(ResponseType))
    def test_empty_history_uses_base_interval(self, now, response_type):
        result = calculate_next_review_date("c1", response_type, [], now=now)
        assert result == now + DEFAULT_INTERVALS[response_type]

    def test_custom_intervals(self, now):
        intervals = {rt: timedelta(minutes=10 * (i + 1)) for i, rt in enumerate(ResponseType)}
        result = calculate_next_review_date(
            "c1", ResponseType.HARD, [], intervals=intervals, multipliers=DEFAULT_MULTIPLIERS, now=now
        )
        assert result == now + timedelta(minutes=30)

    def test_logs_of_other_cards_are_ignored(self, now, make_log):
        other = make_log("c2", now - timedelta(days=40), now - timedelta(days=1))
        result = calculate_next_review_date("c1", ResponseType.EASY, [other], now=now)
        assert result == now + DEFAULT_INTERVALS[ResponseType.EASY]

    def test_accepts_string_response_type(self, now):
        result = calculate_next_review_date("c1", "hard", [], now=now)
        assert result == now + timedelta(days=1)

    def test_rejects_unknown_response_type(self, now):
        with pytest.raises(ValueError):
            calculate_next_review_date("c1", "perfect", [], now=now)


class TestWrongResets:

    def test_wrong_resets_long_history(self, now, make_log):
        logs = [
            make_log("c1", now - timedelta(days=100), now - timedelta(days=40), ResponseType.EASY),
            make_log("c1", now - timedelta(days=40), now - timedelta(days=1), ResponseType.EASY),
        ]
        result = calculate_next_review_date("c1", ResponseType.WRONG, logs, now=now)
        assert result - now == DEFAULT_INTERVALS[ResponseType.WRONG]

    def test_wrong_uses_configured_wrong_interval(self, now, make_log):
        intervals = dict(DEFAULT_INTERVALS)
        intervals[ResponseType.WRONG] = timedelta(minutes=5)
        logs = [make_log("c1", now - timedelta(days=3), now)]
        result = calculate_next_review_date("c1", ResponseType.WRONG, logs, intervals=intervals, now=now)
        assert result - now == timedelta(minutes=5)


class TestMultiplierChain:

    def test_on_time_review_scales_previous_interval(self, now, make_log):
        # HARD breaks any streak; reviewed exactly when due
        logs = [make_log("c1", now - timedelta(days=4), now, ResponseType.HARD)]
        interval = calculate_interval("c1", ResponseType.CORRECT, logs, now=now)
        assert _seconds(interval) == pytest.approx(_seconds(timedelta(days=4) * 2.0))

    def test_early_review_penalty(self, now, make_log):
        logs = [make_log("c1", now - timedelta(days=2), now + timedelta(days=1), ResponseType.HARD)]
        multiplier = adjusted_multiplier(ResponseType.CORRECT, logs, DEFAULT_MULTIPLIERS, now)
        assert multiplier == pytest.approx(2.0 * 0.9)

        interval = calculate_interval("c1", ResponseType.CORRECT, logs, now=now)
        assert _seconds(interval) == pytest.approx(_seconds(timedelta(days=3)) * 1.8)

    def test_overdue_more_than_a_week_penalty(self, now, make_log):
        # Scenario D: answered 10 days after the scheduled date
        logs = [make_log("c1", now - timedelta(days=13), now - timedelta(days=10), ResponseType.HARD)]
        multiplier = adjusted_multiplier(ResponseType.CORRECT, logs, DEFAULT_MULTIPLIERS, now)
        assert multiplier == pytest.approx(2.0 * 0.7)

        interval = calculate_interval("c1", ResponseType.CORRECT, logs, now=now)
        assert _seconds(interval) == pytest.approx(_seconds(timedelta(days=3)) * 1.4)

    def test_overdue_within_grace_has_no_penalty(self, now, make_log):
        logs = [make_log("c1", now - timedelta(days=8), now - timedelta(days=5), ResponseType.HARD)]
        multiplier = adjusted_multiplier(ResponseType.CORRECT, logs, DEFAULT_MULTIPLIERS, now)
        assert multiplier == pytest.approx(2.0)

    def test_three_correct_streak_bonus(self, now, make_log):
        # Scenario C: three CORRECT answers, the fourth also CORRECT
        logs = [
            make_log("c1", now - timedelta(days=9), now - timedelta(days=6)),
            make_log("c1", now - timedelta(days=6), now - timedelta(days=3)),
            make_log("c1", now - timedelta(days=3), now),
        ]
        newest_first = logs_for_card("c1", logs)
        assert consecutive_correct(newest_first) == 3

        multiplier = adjusted_multiplier(ResponseType.CORRECT, newest_first, DEFAULT_MULTIPLIERS, now)
        assert multiplier == pytest.approx(2.0 * 1.3)

        interval = calculate_interval("c1", ResponseType.CORRECT, logs, now=now)
        assert _seconds(interval) == pytest.approx(_seconds(timedelta(days=3)) * 2.6)

    def test_streak_stops_at_first_miss(self, now, make_log):
        logs = [
            make_log("c1", now - timedelta(days=20), now - timedelta(days=17), ResponseType.EASY),
            make_log("c1", now - timedelta(days=17), now - timedelta(days=16), ResponseType.WRONG),
            make_log("c1", now - timedelta(days=6), now - timedelta(days=3), ResponseType.CORRECT),
            make_log("c1", now - timedelta(days=3), now, ResponseType.EASY),
        ]
        assert consecutive_correct(logs_for_card("c1", logs)) == 2

    def test_history_order_does_not_matter(self, now, make_log):
        logs = [
            make_log("c1", now - timedelta(days=30), now - timedelta(days=27), ResponseType.AGAIN),
            make_log("c1", now - timedelta(days=27), now - timedelta(days=20), ResponseType.CORRECT),
            make_log("c1", now - timedelta(days=20), now - timedelta(days=2), ResponseType.EASY),
        ]
        expected = calculate_next_review_date("c1", ResponseType.EASY, logs, now=now)

        shuffled = list(logs)
        random.Random(7).shuffle(shuffled)
        assert calculate_next_review_date("c1", ResponseType.EASY, shuffled, now=now) == expected
        assert calculate_next_review_date("c1", ResponseType.EASY, logs[::-1], now=now) == expected


class TestClamps:

    @pytest.mark.parametrize(
        "response_type",
        [ResponseType.AGAIN, ResponseType.HARD, ResponseType.CORRECT, ResponseType.EASY],
    )
    def test_floor_is_base_interval(self, now, make_log, response_type):
        # Tiny previous interval, answered early: scaled value is far below the floor
        logs = [make_log("c1", now - timedelta(minutes=30), now + timedelta(minutes=30), ResponseType.WRONG)]
        interval = calculate_interval("c1", response_type, logs, now=now)
        assert interval == DEFAULT_INTERVALS[response_type]

    def test_zero_multiplier_falls_back_to_floor(self, now, make_log):
        multipliers = {rt: 0.0 for rt in ResponseType}
        logs = [make_log("c1", now - timedelta(days=50), now, ResponseType.CORRECT)]
        interval = calculate_interval("c1", ResponseType.CORRECT, logs, multipliers=multipliers, now=now)
        assert interval == DEFAULT_INTERVALS[ResponseType.CORRECT]

    def test_ceiling(self, now, make_log):
        logs = [make_log("c1", now - timedelta(days=170), now, ResponseType.EASY)]
        result = calculate_next_review_date("c1", ResponseType.EASY, logs, now=now)
        assert result - now == MAX_INTERVAL

    def test_ceiling_applies_to_base_interval(self, now):
        intervals = dict(DEFAULT_INTERVALS)
        intervals[ResponseType.EASY] = timedelta(days=365)
        result = calculate_next_review_date("c1", ResponseType.EASY, [], intervals=intervals, now=now)
        assert result - now == MAX_INTERVAL

    def test_repeated_easy_never_exceeds_ceiling(self, now, make_log):
        logs = []
        current = now
        for _ in range(12):
            next_date = calculate_next_review_date("c1", ResponseType.EASY, logs, now=current)
            assert timedelta(0) < next_date - current <= MAX_INTERVAL
            logs.append(make_log("c1", current, next_date, ResponseType.EASY))
            current = next_date
        assert logs[-1].interval == MAX_INTERVAL


class TestSuccessRate:

    @pytest.mark.parametrize(
        "response_type, expected",
        [
            (ResponseType.WRONG, 0.0),
            (ResponseType.AGAIN, 20.0),
            (ResponseType.HARD, 40.0),
            (ResponseType.CORRECT, 60.0),
            (ResponseType.EASY, 100.0),
        ],
    )
    def test_fast_answers(self, response_type, expected):
        assert calculate_success_rate(response_type, 2000) == pytest.approx(expected)

    def test_slow_answer(self):
        assert calculate_success_rate(ResponseType.CORRECT, 15_000) == pytest.approx(54.0)

    def test_very_slow_answer_replaces_slow_factor(self):
        assert calculate_success_rate(ResponseType.CORRECT, 25_000) == pytest.approx(42.0)

    def test_thresholds_are_exclusive(self):
        assert calculate_success_rate(ResponseType.EASY, 10_000) == pytest.approx(100.0)
        assert calculate_success_rate(ResponseType.EASY, 20_000) == pytest.approx(90.0)


class TestResponseTypeOrdering:

    def test_ordered_worst_to_best(self):
        assert sorted(ResponseType, reverse=True)[0] == ResponseType.EASY
        assert ResponseType.WRONG < ResponseType.AGAIN < ResponseType.HARD
        assert ResponseType.CORRECT <= ResponseType.CORRECT

    @pytest.mark.parametrize("other", ["easy", "wrong", 3])
    def test_ordering_against_other_types_raises(self, other):
        with pytest.raises(TypeError):
            ResponseType.HARD < other
        with pytest.raises(TypeError):
            ResponseType.HARD >= other

    def test_equality_with_value_still_works(self):
        assert ResponseType.HARD == "hard"
