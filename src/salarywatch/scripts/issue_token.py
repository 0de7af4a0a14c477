"""Mint a bearer token for local development.

Production tokens come from the identity service; this script signs one
with the locally configured secret so the API can be exercised by hand.
"""
from __future__ import annotations

import argparse
import uuid

from salarywatch.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development access token")
    parser.add_argument(
        "--user-id",
        default=None,
        help="User UUID to embed (random when omitted)",
    )
    parser.add_argument(
        "--role",
        action="append",
        default=[],
        help="Role to grant; repeat for several (e.g. --role MODERATOR)",
    )
    args = parser.parse_args()

    user_id = uuid.UUID(args.user_id) if args.user_id else uuid.uuid4()
    token = create_access_token(user_id, roles=args.role or None)
    print(f"user_id={user_id}")
    print(token)


if __name__ == "__main__":
    main()
