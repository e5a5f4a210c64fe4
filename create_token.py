#!/usr/bin/env python3
"""
Mint a session token for a username.

Useful for calling the review endpoints from curl while developing.
The token is signed with ``SECRET_KEY`` from the environment, so the
server must run with the same key.  Users are held in memory by the
server; the token only proves the username, it does not register it.

Usage:
    python create_token.py alice --minutes 60
"""

import argparse

from bookstore_api.app.core.config import settings
from bookstore_api.app.core.security import create_access_token


def main(argv=None) -> None:
    ap = argparse.ArgumentParser(description="Create a bookstore session token.")
    ap.add_argument("username", help="Username to embed in the token")
    ap.add_argument(
        "--minutes",
        type=int,
        default=settings.access_token_expire_minutes,
        help="Token lifetime in minutes (default: %(default)s)",
    )
    args = ap.parse_args(argv)
    print(create_access_token({"sub": args.username}, expires_delta=args.minutes * 60))


if __name__ == "__main__":
    main()
