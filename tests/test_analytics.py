"""
Tests for study statistics.
"""

from datetime import timedelta

import pytest

from deckstudy import Card, Deck, ResponseType
from deckstudy.analytics import (
    DeckDueCount,
    build_deck_due_counts,
    build_study_stats,
    build_today_overview,
    load_study_stats,
)
from deckstudy.analytics.types import TodayOverview


def _cards(*card_ids):
    return [Card(id=card_id, word=card_id) for card_id in card_ids]


class TestStudyStats:

    def test_empty_history(self, now):
        stats = build_study_stats(_cards("c1", "c2"), [], now=now)
        assert stats.total_cards == 2
        assert stats.learned_cards == 0
        assert stats.reviewed_count == 0
        assert stats.completed_cards == 0
        assert stats.streak_days == 0
        assert stats.today_learned == 0
        assert stats.weekly_learning == [0] * 7
        assert set(stats.response_counts) == set(ResponseType)
        assert sum(stats.response_counts.values()) == 0

    def test_counts(self, now, make_log):
        logs = [
            make_log("c1", now - timedelta(days=2), response_type=ResponseType.HARD),
            make_log("c1", now - timedelta(days=1), response_type=ResponseType.CORRECT),
            make_log("c2", now - timedelta(days=1), response_type=ResponseType.WRONG),
            make_log("c1", now, response_type=ResponseType.EASY),
            make_log("c2", now, response_type=ResponseType.CORRECT),
        ]
        stats = build_study_stats(_cards("c1", "c2", "c3"), logs, now=now)

        assert stats.learned_cards == 2
        assert stats.reviewed_count == 5
        assert stats.streak_days == 3
        assert stats.today_learned == 2
        assert stats.weekly_learning == [0, 0, 0, 0, 1, 2, 2]
        assert stats.response_counts[ResponseType.CORRECT] == 2
        assert stats.response_counts[ResponseType.AGAIN] == 0

    def test_no_answer_today_breaks_streak(self, now, make_log):
        logs = [make_log("c1", now - timedelta(days=day)) for day in (1, 2, 3)]
        stats = build_study_stats(_cards("c1"), logs, now=now)
        assert stats.streak_days == 0
        assert stats.today_learned == 0

    def test_completed_uses_latest_log(self, now, make_log):
        logs = [
            make_log("c1", now - timedelta(days=1), now + timedelta(days=45)),
            make_log("c1", now, now + timedelta(hours=1), ResponseType.WRONG),
            make_log("c2", now, now + timedelta(days=31), ResponseType.EASY),
        ]
        stats = build_study_stats(_cards("c1", "c2"), logs, now=now)
        assert stats.completed_cards == 1

    @pytest.mark.parametrize("period, expected", [("week", 1), ("month", 2), ("all", 3)])
    def test_period_limits_reviewed_count(self, now, make_log, period, expected):
        logs = [
            make_log("c1", now - timedelta(days=60)),
            make_log("c1", now - timedelta(days=20)),
            make_log("c1", now - timedelta(days=1)),
        ]
        stats = build_study_stats(_cards("c1"), logs, period=period, now=now)
        assert stats.reviewed_count == expected
        assert stats.learned_cards == 1
        assert stats.period == period

    def test_unknown_period(self, now):
        with pytest.raises(ValueError):
            build_study_stats([], [], period="year", now=now)

    def test_load_from_store(self, seeded_store, now, make_log):
        seeded_store.save_log(make_log("c1", now))
        stats = load_study_stats(seeded_store, now=now)
        assert stats.total_cards == 5
        assert stats.learned_cards == 1
        assert stats.today_learned == 1


class TestTodayOverview:

    def test_overview(self, now, make_log):
        logs = [
            make_log("c1", now),
            make_log("c2", now - timedelta(days=4), now - timedelta(days=1)),
            make_log("c3", now - timedelta(days=1), now + timedelta(days=2)),
        ]
        overview = build_today_overview(_cards("c1", "c2", "c3", "c4"), logs, now=now)
        assert overview == TodayOverview(total_cards=4, completed_today=1, due=2)
        assert overview.completion_ratio == pytest.approx(1 / 3)

    def test_ratio_with_nothing_planned(self):
        assert TodayOverview(total_cards=0, completed_today=0, due=0).completion_ratio == 0.0


def test_deck_due_counts(now, make_log):
    decks = [
        Deck(id="d1", name="One", card_ids=["c1", "c2"]),
        Deck(id="d2", name="Two", card_ids=["c3"]),
    ]
    logs = [
        make_log("c1", now - timedelta(days=1), now + timedelta(days=2)),
        make_log("c3", now - timedelta(days=5), now - timedelta(days=2)),
    ]
    assert build_deck_due_counts(decks, logs, now=now) == {
        "d1": DeckDueCount(total=2, due=1),
        "d2": DeckDueCount(total=1, due=1),
    }
