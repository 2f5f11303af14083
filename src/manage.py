"""Canteen database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from canteen.domain import canteen
    from canteen.utils.db import setup_db

    print("Initializing canteen domain...")
    canteen.init()
    print("Creating canteen database schema...")
    setup_db(canteen)
    print("Done.")


def drop_database():
    from canteen.domain import canteen
    from canteen.utils.db import drop_db

    print("Initializing canteen domain...")
    canteen.init()
    print("Dropping canteen database schema...")
    drop_db(canteen)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Canteen database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
