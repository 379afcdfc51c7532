#!/usr/bin/env python3
"""Create a user account from the command line.

Usage:
    python scripts/create_user.py --email ann@example.com --name Ann
    DATABASE_URL=postgresql://... python scripts/create_user.py --email ... --name ...

The password is prompted for unless --password is given.
"""

import argparse
import getpass
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from useraccounts.database import init_db, session_scope
from useraccounts.services.exceptions import ConflictError
from useraccounts.services.passwords import hash_password
from useraccounts.services.users import UserStore


def create_user(email: str, name: str, password: str) -> int:
    """Create the user and return its id."""
    init_db()
    with session_scope() as session:
        user = UserStore(session).create(email, name, hash_password(password))
        return user.id


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty.", file=sys.stderr)
        return 1

    try:
        user_id = create_user(args.email, args.name, password)
    except ConflictError:
        print(f"Email already registered: {args.email}", file=sys.stderr)
        return 1

    print(f"Created user {user_id} ({args.email})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
