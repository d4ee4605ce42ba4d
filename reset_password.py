#!/usr/bin/env python3
"""
Reset a staff account's password in ``users.json``.

This script DOES NOT read or reveal any existing passwords.  It simply
sets a new PBKDF2 hash (format "salthex$hashhex") for the given
username.  Use it to recover access when no administrator can log in.

Usage:
    python reset_password.py --data-dir ./data --username admin --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import sys

from clinic_api.app.core.security import hash_password
from clinic_api.app.core.store import DocumentStore
from clinic_api.app.services.collection_service import utc_now


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset a clinic user's password.")
    ap.add_argument("--data-dir", default="data", help="Directory holding users.json (default: ./data)")
    ap.add_argument("--username", required=True, help="Account to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    store = DocumentStore(args.data_dir)
    if not store.path("users").exists():
        print(f"[!] users.json not found in: {args.data_dir}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    with store.mutate("users") as users:
        user = next((u for u in users if u.get("username") == args.username), None)
        if user is None:
            print(f"[!] No user found with username: {args.username}", file=sys.stderr)
            sys.exit(2)
        user["password_hash"] = hash_password(new_password)
        user["updated_at"] = utc_now()
    print(f"[+] Password updated for user: {args.username}")


if __name__ == "__main__":
    main()
