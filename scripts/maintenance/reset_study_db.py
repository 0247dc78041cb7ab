"""
Reset the study database.

DANGEROUS: This deletes all cards, decks, settings and study history!
Only use when you want to start fresh for testing.

Usage:
    python -m scripts.maintenance.reset_study_db
"""

from deckstudy import SqlRecordStore


def main():
    store = SqlRecordStore()

    print("=" * 60)
    print("WARNING: Reset Study Database")
    print("=" * 60)
    print()
    print(f"Database: {store.engine.url}")
    print("This will DELETE:")
    print("  - All cards and decks")
    print("  - All study logs (every recorded answer)")
    print("  - User settings")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() == "yes":
        print("\nResetting database...")
        store.reset_db()
        print("✓ Database reset complete!")
    else:
        print("\nCancelled. No changes made.")


if __name__ == "__main__":
    main()
