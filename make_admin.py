#!/usr/bin/env python3
"""
Provision the first admin account.
Usage: python make_admin.py admin@example.com [--first-name Ada] [--last-name Admin]

The password is read from ADMIN_PASSWORD or prompted for. Nothing is created
when an admin already exists.
"""

import argparse
import asyncio
import getpass
import os
import sys

from pydantic import ValidationError

from shoutmarket.application.use_cases.auth_use_cases import bootstrap_admin
from shoutmarket.core.logging_config import configure_logging


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the first admin account")
    parser.add_argument("email")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    args = parser.parse_args()

    configure_logging()
    password = os.environ.get("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")

    try:
        admin = asyncio.run(bootstrap_admin(args.email, password, args.first_name, args.last_name))
    except ValidationError as e:
        print(f"❌ Invalid input: {e}")
        return 1

    if admin is None:
        print("ℹ️  An admin account already exists; nothing to do.")
        return 0

    print(f"✅ Created admin {admin.email} ({admin.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
