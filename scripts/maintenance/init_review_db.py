"""
Create the review database tables if they don't exist.

Safe to run repeatedly.

Usage:
    python -m scripts.maintenance.init_review_db
"""

import logging

from revisit.fsrs import database


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    mode = "test" if database.is_test_mode() else "production"
    print(f"Initializing {mode} review database...")
    database.init_db()
    print("✓ Tables ready: problems, cards, review_logs")


if __name__ == "__main__":
    main()
