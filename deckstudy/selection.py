"""
Daily queue selection.

Partitions a card pool into today's "new" and "review" work queues under
the learner's daily caps. Pure functions over the log history.

"Today" is the local calendar day containing `now`: [midnight, midnight + 24h).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional

from deckstudy.schemas import StudyLog, as_aware

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodayCards:
    """
    Card ids to study today.

    new_card_ids keep the scope's order; review_card_ids are oldest-due first.
    """
    new_card_ids: list[str] = field(default_factory=list)
    review_card_ids: list[str] = field(default_factory=list)

    @property
    def all_card_ids(self) -> list[str]:
        return self.new_card_ids + self.review_card_ids

    def __len__(self) -> int:
        return len(self.new_card_ids) + len(self.review_card_ids)


def today_window(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """
    Get [start, end) of the local day containing `now`.

    Args:
        now: Reference instant (defaults to now). Aware values are converted to
            the local timezone; naive values are taken as local time.

    Returns:
        Tuple of aware datetimes (start of day, start of day + 24h)
    """
    now = as_aware(now)
    local_now = now.astimezone()
    start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def studied_in_window(log: StudyLog, start: datetime, end: datetime) -> bool:
    return start <= log.studied_at < end


def latest_logs(logs: Iterable[StudyLog]) -> dict[str, StudyLog]:
    """Most recent log per card id."""
    latest: dict[str, StudyLog] = {}
    for log in logs:
        current = latest.get(log.card_id)
        if current is None or log.studied_at > current.studied_at:
            latest[log.card_id] = log
    return latest


def is_due(latest_log: StudyLog, now: datetime) -> bool:
    """Whether a card whose most recent log is `latest_log` is due at `now`."""
    return latest_log.next_review_date <= as_aware(now)


def _clamp_cap(name: str, value: int) -> int:
    if value < 0:
        logger.warning("Negative %s (%d) clamped to 0", name, value)
        return 0
    return value


def select_today_cards(
    logs: Iterable[StudyLog],
    new_cards_per_day: int,
    review_cards_per_day: int,
    card_ids: Iterable[str],
    now: Optional[datetime] = None
) -> TodayCards:
    """
    Select today's new and review cards.

    New cards: ids in `card_ids` with no log at all, in input order.
    Review cards: ids with at least one log whose next review date has
    passed, excluding any card already answered today. Sorted by their
    earliest overdue next review date; ties keep first-seen log order.

    Args:
        logs: All study logs
        new_cards_per_day: Cap on new cards (negative values count as 0)
        review_cards_per_day: Cap on review cards (negative values count as 0)
        card_ids: Cards in scope (e.g. a deck's card ids)
        now: Reference instant (defaults to now, UTC; naive values are local time)

    Returns:
        TodayCards with both lists truncated to their caps
    """
    now = as_aware(now)

    new_cap = _clamp_cap("new_cards_per_day", new_cards_per_day)
    review_cap = _clamp_cap("review_cards_per_day", review_cards_per_day)

    logs = list(logs)
    start, end = today_window(now)

    studied_ids = {log.card_id for log in logs}

    new_candidates: list[str] = []
    seen: set[str] = set()
    for card_id in card_ids:
        if card_id in studied_ids or card_id in seen:
            continue
        seen.add(card_id)
        new_candidates.append(card_id)

    studied_today = {log.card_id for log in logs if studied_in_window(log, start, end)}

    # Earliest overdue date per card; dict keeps first-seen order for ties
    oldest_due: dict[str, datetime] = {}
    for log in logs:
        if log.next_review_date > now or log.card_id in studied_today:
            continue
        current = oldest_due.get(log.card_id)
        if current is None or log.next_review_date < current:
            oldest_due[log.card_id] = log.next_review_date

    review_candidates = sorted(oldest_due, key=oldest_due.__getitem__)

    return TodayCards(
        new_card_ids=new_candidates[:new_cap],
        review_card_ids=review_candidates[:review_cap],
    )


def due_card_ids(
    logs: Iterable[StudyLog],
    card_ids: Iterable[str],
    now: Optional[datetime] = None
) -> set[str]:
    """
    Cards waiting to be studied, with no daily caps applied.

    A card is waiting if it has never been studied, or its latest log is
    due and it has not been answered today.
    """
    now = as_aware(now)

    logs = list(logs)
    start, end = today_window(now)
    latest = latest_logs(logs)
    studied_today = {log.card_id for log in logs if studied_in_window(log, start, end)}

    due: set[str] = set()
    for card_id in card_ids:
        last_log = latest.get(card_id)
        if last_log is None:
            due.add(card_id)
        elif is_due(last_log, now) and card_id not in studied_today:
            due.add(card_id)
    return due
