"""
Drop and recreate the review tables.

Shows how many problems, cards and review logs would be lost before
asking for confirmation. Pass --yes to skip the prompt.

Usage:
    python -m scripts.maintenance.reset_review_db [--yes]
"""

import argparse

from revisit.fsrs import database


def main():
    parser = argparse.ArgumentParser(description="Reset the review database")
    parser.add_argument("--yes", action="store_true", help="Reset without asking")
    args = parser.parse_args()

    database.init_db()
    counts = database.count_rows()

    print(f"Database: {'test' if database.is_test_mode() else 'production'}")
    for table, rows in counts.items():
        print(f"  {table:<12} {rows:>8} rows")

    if not any(counts.values()):
        print("Nothing to delete.")
        return

    if not args.yes:
        response = input(f"Delete all {sum(counts.values())} rows? (type 'yes' to confirm): ")
        if response.lower() != "yes":
            print("Cancelled. No changes made.")
            return

    database.reset_db()
    print("✓ Review tables recreated empty")


if __name__ == "__main__":
    main()
