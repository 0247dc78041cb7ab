"""
Print today's study queue and overall progress.

Shows, for each deck, how many new and review cards a session started now
would contain, followed by the stats-screen figures.

Usage:
    python -m scripts.maintenance.show_today [--period week|month|all]
"""

from __future__ import annotations

import argparse

from deckstudy import SqlRecordStore, select_today_cards
from deckstudy.analytics import PERIOD_LABELS, build_deck_due_counts, build_study_stats


def main():
    parser = argparse.ArgumentParser(description="Show today's study queue")
    parser.add_argument(
        "--period",
        choices=sorted(PERIOD_LABELS),
        default="week",
        help="Period for answer counts (default: week)"
    )
    args = parser.parse_args()

    store = SqlRecordStore()
    settings = store.get_settings()
    decks = store.get_all_decks()
    logs = store.get_all_logs()

    print("=" * 60)
    print("Today's Queue")
    print("=" * 60)

    due_counts = build_deck_due_counts(decks, logs)
    for deck in decks:
        scope = set(deck.card_ids)
        today = select_today_cards(
            [log for log in logs if log.card_id in scope],
            settings.new_cards_per_day,
            settings.review_cards_per_day,
            deck.card_ids
        )
        counts = due_counts[deck.id]
        print(
            f"{deck.name:<30} new={len(today.new_card_ids):>4}  "
            f"review={len(today.review_card_ids):>4}  "
            f"waiting={counts.due:>4}/{counts.total}"
        )

    if not decks:
        print("No decks yet.")

    stats = build_study_stats(store.get_all_cards(), logs, period=args.period)

    print()
    print(f"Stats ({PERIOD_LABELS[args.period]})")
    print("-" * 60)
    print(f"Cards:          {stats.total_cards}")
    print(f"Learned:        {stats.learned_cards}")
    print(f"Completed:      {stats.completed_cards}")
    print(f"Answers:        {stats.reviewed_count}")
    print(f"Today:          {stats.today_learned}")
    print(f"Streak:         {stats.streak_days} days")
    print(f"Last 7 days:    {stats.weekly_learning}")
    for response_type, count in stats.response_counts.items():
        print(f"  {response_type.value:<10} {count}")


if __name__ == "__main__":
    main()
