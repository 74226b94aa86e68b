#!/usr/bin/env python3
"""
Password Checker -- command-line companion to the REST API.

Usage:
  python main.py check 'correct horse battery staple'
  python main.py check 'Tr0ub4dor&3' --pwned
  python main.py check 'hunter2' --json
  python main.py check 'hunter2' --color | less -R
  python main.py seed
  python main.py create-admin ops@example.com --name "Ops Team"

The check subcommand runs fully offline unless --pwned is given, and does not
need SECRET_KEY. seed and create-admin write to DATABASE_URL and load the same
Settings as the API server.
"""

import argparse
import getpass
import sys

from core.fetcher import check_pwned
from core.formatter import disable_color, enable_color, print_strength, to_json
from core.strength import check_password

# Demo accounts created by `seed`. Change the passwords before exposing the
# server anywhere but localhost.
_SEED_USERS = [
    {"email": "admin@example.com", "password": "Admin123!", "name": "Admin User", "role": "ADMIN"},
    {"email": "user@example.com", "password": "User123!", "name": "Regular User", "role": "USER"},
]


def _open_store():
    """Import the auth stack lazily so `check` works without SECRET_KEY."""
    from auth.store import UserStore
    from core.config import get_settings

    return UserStore(get_settings().database_url)


def cmd_check(args: argparse.Namespace) -> int:
    if args.no_color:
        disable_color()
    elif args.color:
        enable_color()
    strength = check_password(args.password)
    pwned = check_pwned(args.password) if args.pwned else None
    if args.json:
        print(to_json(strength, pwned))
    else:
        print_strength(strength, pwned)
    return 0


def cmd_seed(args: argparse.Namespace) -> int:
    from auth import service
    from auth.errors import ConflictError

    store = _open_store()
    try:
        for entry in _SEED_USERS:
            try:
                service.register(store, entry["email"], entry["password"], entry["name"], role=entry["role"])
            except ConflictError:
                print(f"  {entry['email']} already exists, skipped.")
                continue
            print(f"  Created {entry['role']:<5} {entry['email']}  (password: {entry['password']})")
    finally:
        store.close()
    return 0


def cmd_create_admin(args: argparse.Namespace) -> int:
    from auth import service
    from auth.errors import ConflictError
    from auth.tokens import BCRYPT_MAX_BYTES, exceeds_bcrypt_limit

    password = getpass.getpass("Password: ")
    if len(password) < 8:
        print("  [!] Password must be at least 8 characters.")
        return 1
    if exceeds_bcrypt_limit(password):
        print(f"  [!] Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded.")
        return 1
    if getpass.getpass("Repeat password: ") != password:
        print("  [!] Passwords do not match.")
        return 1

    strength = check_password(password)
    if strength.score < 3 or strength.is_common:
        print(f"  [!] Weak password (score {strength.score}/4). Choose a stronger one for an admin account.")
        return 1

    store = _open_store()
    try:
        user = service.register(store, args.email.strip().lower(), password, args.name, role="ADMIN")
    except ConflictError:
        print(f"  [!] {args.email} is already registered.")
        return 1
    finally:
        store.close()
    print(f"  Created ADMIN {user.email} ({user.id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="password-checker",
        description="Password strength checks and account administration.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    check = sub.add_parser("check", help="Evaluate a password's strength")
    check.add_argument("password", help="Password to evaluate (quote it to protect shell metacharacters)")
    check.add_argument(
        "--pwned",
        action="store_true",
        help="Also query Have I Been Pwned (only a 5-char hash prefix is sent)",
    )
    check.add_argument("--json", action="store_true", help="Output structured JSON")
    color = check.add_mutually_exclusive_group()
    color.add_argument("--no-color", action="store_true", help="Disable ANSI color codes in terminal output")
    color.add_argument("--color", action="store_true", help="Force ANSI color codes even when stdout is not a TTY")
    check.set_defaults(func=cmd_check)

    seed = sub.add_parser("seed", help="Create the demo admin and user accounts if missing")
    seed.set_defaults(func=cmd_seed)

    admin = sub.add_parser("create-admin", help="Create an ADMIN account (prompts for the password)")
    admin.add_argument("email", help="Email address for the new admin")
    admin.add_argument("--name", default=None, help="Display name")
    admin.set_defaults(func=cmd_create_admin)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
