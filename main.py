#!/usr/bin/env python3
"""
Profile Directory -- command-line client.

Usage:
  python main.py register alice --email a@x.com
  python main.py login alice
  python main.py whoami
  python main.py list --search dev --category Designer
  python main.py open /home
  python main.py logout

Passwords are prompted for unless --password is given. The session (token and
public user view) is kept in --session-file between runs, the way the browser
client keeps it in localStorage.

Environment variables:
  PROFILE_DIRECTORY_API_URL  Base URL of the API (default http://127.0.0.1:8000/api)
"""

import argparse
import getpass
import os
import re
import sys
from pathlib import Path
from typing import Optional

from client.api import DEFAULT_API_URL, ApiError, ProfileDirectoryClient
from client.guard import Decision, navigate
from client.session import ClientSessionState, LocalSessionStore

_DEFAULT_SESSION_FILE = Path.home() / ".profile_directory_session.json"
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _validate_credentials(username: str, password: str, email: Optional[str] = None) -> list[str]:
    """Return form-level validation messages. Empty list means valid."""
    errors: list[str] = []
    if not username:
        errors.append("Username is required")
    elif len(username) < 3:
        errors.append("Username must be at least 3 characters")
    if not password:
        errors.append("Password is required")
    elif len(password) < 6:
        errors.append("Password must be at least 6 characters")
    if email is not None:
        if not email:
            errors.append("Email is required")
        elif not _EMAIL_RE.match(email):
            errors.append("Please enter a valid email address")
    return errors


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def _print_signed_in(state: ClientSessionState) -> None:
    user = state.user
    print(f"  Signed in as {user.username} ({user.role} at {user.company}).")


def cmd_register(args, client: ProfileDirectoryClient, store: LocalSessionStore) -> int:
    password = _password(args)
    errors = _validate_credentials(args.username, password, args.email)
    if errors:
        for message in errors:
            print(f"  [!] {message}")
        return 2
    try:
        state = client.register(args.username, password, args.email)
    except ApiError as e:
        print(f"  [!] {e.message}")
        return 1
    store.save(state)
    print("  Registration successful.")
    _print_signed_in(state)
    return 0


def cmd_login(args, client: ProfileDirectoryClient, store: LocalSessionStore) -> int:
    password = _password(args)
    errors = _validate_credentials(args.username, password)
    if errors:
        for message in errors:
            print(f"  [!] {message}")
        return 2
    try:
        state = client.login(args.username, password)
    except ApiError as e:
        print(f"  [!] {e.message}")
        return 1
    store.save(state)
    _print_signed_in(state)
    return 0


def cmd_logout(args, client: ProfileDirectoryClient, store: LocalSessionStore) -> int:
    store.clear()
    print("  Logged out.")
    return 0


def cmd_whoami(args, client: ProfileDirectoryClient, store: LocalSessionStore) -> int:
    state = store.load()
    if state is None:
        print("  Not signed in.")
        return 1
    _print_signed_in(state)
    return 0


def cmd_list(args, client: ProfileDirectoryClient, store: LocalSessionStore) -> int:
    nav = navigate("/home", store)
    state = store.load()
    if nav.decision is not Decision.SHOW_PROTECTED_VIEW or state is None:
        print("  [!] Please log in first.")
        return 1
    try:
        users = client.list_profiles(state.token, search=args.search, category=args.category)
    except ApiError as e:
        print(f"  [!] {e.message}")
        return 1
    if not users:
        print("  No profiles match.")
        return 0
    for user in users:
        print(f"  {user['username']:<14} {user['role']:<14} {user['company']}")
    return 0


def cmd_open(args, client: ProfileDirectoryClient, store: LocalSessionStore) -> int:
    nav = navigate(args.path, store)
    print(f"  {nav.decision.value} -> {nav.target}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="profile-directory",
        description="Register, log in, and browse the professional profile directory.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--api-url",
        default=os.environ.get("PROFILE_DIRECTORY_API_URL") or DEFAULT_API_URL,
        help=f"Base URL of the API (default: {DEFAULT_API_URL})",
    )
    parser.add_argument(
        "--session-file",
        type=Path,
        default=_DEFAULT_SESSION_FILE,
        metavar="PATH",
        help="Where the local session is stored",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_register = sub.add_parser("register", help="Create an account and sign in")
    p_register.add_argument("username")
    p_register.add_argument("--email", required=True)
    p_register.add_argument("--password", help="Password (prompted if omitted)")
    p_register.set_defaults(func=cmd_register)

    p_login = sub.add_parser("login", help="Sign in")
    p_login.add_argument("username")
    p_login.add_argument("--password", help="Password (prompted if omitted)")
    p_login.set_defaults(func=cmd_login)

    sub.add_parser("logout", help="Forget the local session").set_defaults(func=cmd_logout)
    sub.add_parser("whoami", help="Show the signed-in user").set_defaults(func=cmd_whoami)

    p_list = sub.add_parser("list", help="Browse the directory")
    p_list.add_argument("--search", help="Match username, role, or company")
    p_list.add_argument("--category", help="Role category, e.g. Designer (default: All)")
    p_list.set_defaults(func=cmd_list)

    p_open = sub.add_parser("open", help="Show what the route guard does for a path")
    p_open.add_argument("path")
    p_open.set_defaults(func=cmd_open)

    args = parser.parse_args(argv)
    client = ProfileDirectoryClient(args.api_url)
    store = LocalSessionStore(args.session_file.expanduser())
    return args.func(args, client, store)


if __name__ == "__main__":
    sys.exit(main())
