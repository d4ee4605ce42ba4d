#!/usr/bin/env python3
"""
Mint an access token for an existing account without logging in.

Handy for scripting against the admin API.  The token is signed with
``JWT_SECRET`` from the environment and carries the account's current
role.

Usage:
    python create_token.py --username admin --hours 24
"""

import argparse
import sys

from clinic_api.app.core.config import settings
from clinic_api.app.core.store import DocumentStore
from clinic_api.app.core.security import create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a bearer token for a clinic account.")
    ap.add_argument("--username", required=True, help="Account to issue the token for")
    ap.add_argument("--hours", type=int, default=6, help="Token lifetime in hours (default: 6)")
    ap.add_argument("--data-dir", default=settings.data_dir, help="Directory holding users.json")
    args = ap.parse_args()

    if not settings.secret_key:
        print("[!] JWT_SECRET is not set.", file=sys.stderr)
        sys.exit(1)

    users = DocumentStore(args.data_dir).records("users")
    user = next((u for u in users if u.get("username") == args.username), None)
    if user is None:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        sys.exit(2)

    claims = {"sub": user["username"], "id": user["id"], "username": user["username"], "role": user.get("role")}
    print(create_access_token(claims, settings.secret_key, args.hours * 60))


if __name__ == "__main__":
    main()
