#!/usr/bin/env python3
"""
Create a user account with the Admin role (needed for /admin-all-sellers).

Usage:
  python scripts/create_admin.py --email admin@example.com --name "Store Admin" [--password ...]
"""
from __future__ import annotations

import argparse
import getpass
import sys

from shop_api.core.config import get_settings
from shop_api.core.security import hash_password
from shop_api.db.create_tables import create_all
from shop_api.repositories.shop_repository import EmailTakenError, ShopRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="Create an admin user")
    ap.add_argument("--email", required=True, help="Admin email (unique)")
    ap.add_argument("--name", default="Admin", help="Display name")
    ap.add_argument("--password", help="Password (prompted when omitted)")
    ap.add_argument("--role", default="Admin", help="Role to assign (default: Admin)")
    args = ap.parse_args()

    settings = get_settings()
    create_all(settings.database_url)
    repo = ShopRepository(settings.database_url)
    email = (args.email or "").strip()
    if not email:
        raise SystemExit("Invalid email")
    if repo.get_user_by_email(email):
        raise SystemExit(f"User '{email}' already exists")
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        raise SystemExit("Password must have at least 8 characters")

    try:
        user = repo.create_user(name=args.name, email=email, password_hash=hash_password(password), role=args.role)
    except EmailTakenError:
        raise SystemExit(f"User '{email}' already exists")
    print("OK: user created")
    print(f"  ID: {user.id}")
    print(f"  Email: {user.email}")
    print(f"  Role: {user.role}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
