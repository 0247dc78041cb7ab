"""
Scheduling - Interval Calculator

Pure functions mapping a card's log history and a new response to the
card's next review date. No database calls.

Main workflow:
1. Start from the response type's base interval
2. If the card has history, scale the previous interval by an adjusted
   multiplier (early/late review correction, correct-streak bonus)
3. WRONG restarts the schedule; other responses never drop below their base
4. Clamp to the maximum interval

Ease is implicit in the accumulated interval, so there is no per-card
ease factor to store or repair.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Mapping, Optional

from deckstudy.constants import (
    DEFAULT_INTERVALS,
    DEFAULT_MULTIPLIERS,
    EARLY_REVIEW_FACTOR,
    EASE_VALUES,
    LATE_REVIEW_FACTOR,
    LATE_REVIEW_GRACE,
    MAX_EASE,
    MAX_INTERVAL,
    SLOW_RESPONSE_FACTOR,
    SLOW_RESPONSE_MS,
    STREAK_BONUS_PER_CORRECT,
    STREAK_RESPONSES,
    VERY_SLOW_RESPONSE_FACTOR,
    VERY_SLOW_RESPONSE_MS,
    ResponseType,
)
from deckstudy.schemas import StudyLog, as_aware


def logs_for_card(card_id: str, logs: Iterable[StudyLog]) -> list[StudyLog]:
    """
    Return the card's logs, most recent first.

    Ties on studied_at keep their input order.
    """
    card_logs = [log for log in logs if log.card_id == card_id]
    card_logs.sort(key=lambda log: log.studied_at, reverse=True)
    return card_logs


def consecutive_correct(logs_newest_first: Iterable[StudyLog]) -> int:
    """
    Count the run of CORRECT/EASY answers at the head of the history.

    Args:
        logs_newest_first: One card's logs, most recent first

    Returns:
        Length of the current correct streak (0 if the latest answer missed)
    """
    streak = 0
    for log in logs_newest_first:
        if log.response_type not in STREAK_RESPONSES:
            break
        streak += 1
    return streak


def adjusted_multiplier(
    response_type: ResponseType,
    logs_newest_first: list[StudyLog],
    multipliers: Mapping[ResponseType, float],
    now: datetime
) -> float:
    """
    Multiplier for the previous interval after timing and streak corrections.

    - Reviewed before it was due: x0.9
    - Reviewed more than 7 days after it was due: x0.7
    - Correct streak of n answers: x(1 + 0.1n)

    Args:
        response_type: The answer being recorded
        logs_newest_first: The card's prior logs, most recent first (non-empty)
        multipliers: Multiplier per response type
        now: Time of the answer

    Returns:
        The adjusted multiplier
    """
    last_log = logs_newest_first[0]
    multiplier = multipliers[response_type]

    if now < last_log.next_review_date:
        multiplier *= EARLY_REVIEW_FACTOR
    elif now > last_log.next_review_date + LATE_REVIEW_GRACE:
        multiplier *= LATE_REVIEW_FACTOR

    streak = consecutive_correct(logs_newest_first)
    if streak > 0:
        multiplier *= 1 + streak * STREAK_BONUS_PER_CORRECT

    return multiplier


def calculate_interval(
    card_id: str,
    response_type: ResponseType,
    previous_logs: Iterable[StudyLog] = (),
    intervals: Optional[Mapping[ResponseType, timedelta]] = None,
    multipliers: Optional[Mapping[ResponseType, float]] = None,
    now: Optional[datetime] = None
) -> timedelta:
    """
    Compute the interval until the card's next review.

    Args:
        card_id: Card being answered
        response_type: The user's answer
        previous_logs: Prior logs in any order; logs of other cards are ignored
        intervals: Base interval per response type (defaults to DEFAULT_INTERVALS)
        multipliers: Multiplier per response type (defaults to DEFAULT_MULTIPLIERS)
        now: Time of the answer (defaults to now, UTC)

    Returns:
        Positive interval, at most MAX_INTERVAL
    """
    if intervals is None:
        intervals = DEFAULT_INTERVALS
    if multipliers is None:
        multipliers = DEFAULT_MULTIPLIERS
    now = as_aware(now)

    response_type = ResponseType(response_type)
    interval = intervals[response_type]

    card_logs = logs_for_card(card_id, previous_logs)

    if card_logs:
        if response_type == ResponseType.WRONG:
            # Forgetting restarts the schedule
            interval = intervals[ResponseType.WRONG]
        else:
            last_log = card_logs[0]
            previous_interval = last_log.next_review_date - last_log.studied_at
            multiplier = adjusted_multiplier(response_type, card_logs, multipliers, now)
            interval = max(previous_interval * multiplier, intervals[response_type])

    return min(interval, MAX_INTERVAL)


def calculate_next_review_date(
    card_id: str,
    response_type: ResponseType,
    previous_logs: Iterable[StudyLog] = (),
    intervals: Optional[Mapping[ResponseType, timedelta]] = None,
    multipliers: Optional[Mapping[ResponseType, float]] = None,
    now: Optional[datetime] = None
) -> datetime:
    """
    Compute the next review date for a card given a new response.

    First exposure always uses the base interval. See calculate_interval
    for the rules applied once the card has history.

    Returns:
        now + interval
    """
    now = as_aware(now)

    interval = calculate_interval(
        card_id,
        response_type,
        previous_logs,
        intervals=intervals,
        multipliers=multipliers,
        now=now
    )
    return now + interval


def calculate_success_rate(response_type: ResponseType, response_time_ms: int) -> float:
    """
    Score an answer from 0 to 100.

    Base score is ease/5 * 100. Slow answers are scaled by 0.9 past 10 s,
    and by 0.7 (instead, not on top) past 20 s.

    Informational only; the interval calculator does not use it.
    """
    response_type = ResponseType(response_type)

    time_factor = 1.0
    if response_time_ms > SLOW_RESPONSE_MS:
        time_factor = SLOW_RESPONSE_FACTOR
    if response_time_ms > VERY_SLOW_RESPONSE_MS:
        time_factor = VERY_SLOW_RESPONSE_FACTOR

    success_rate = EASE_VALUES[response_type] / MAX_EASE * 100 * time_factor
    return max(0.0, min(100.0, success_rate))
