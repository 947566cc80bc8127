"""
Print today's due cards for a user.

Usage:
    python -m scripts.maintenance.show_due_cards [--user USER_ID]
"""

import argparse

from revisit import reviews
from revisit.due_refresh import get_next_due_refresh
from revisit.fsrs import database


def main():
    parser = argparse.ArgumentParser(description="Show cards due today")
    parser.add_argument(
        "--user",
        default=database.get_default_user_id(),
        help="User id to show due cards for (default: DEFAULT_USER_ID)",
    )
    args = parser.parse_args()

    now = reviews.utc_now()
    due_cards = reviews.get_due_cards(args.user, clock=lambda: now)

    print(f"Due cards for {args.user}: {len(due_cards)}")
    print("-" * 60)
    for card in due_cards:
        print(f"  {card.due:%Y-%m-%d %H:%M} UTC  [{card.difficulty.value:<6}] {card.title}")

    refresh = get_next_due_refresh([card.due for card in due_cards], now)
    print(f"\nCheck again in {int(refresh.total_seconds())} seconds")


if __name__ == "__main__":
    main()
