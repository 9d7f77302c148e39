# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Command line front end for the rental client session."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from pydantic import ValidationError

from rentalclient.application import SessionStore
from rentalclient.container import Container
from rentalclient.domain import UserProfile
from rentalclient.infrastructure import StorageError
from rentalclient.shared.errors import ApiError
from rentalclient.shared.logging import setup_logging

T = TypeVar("T")


def _make_container() -> Container:
    return Container()


def _describe(user: UserProfile) -> str:
    return f"{user.username} ({user.full_name}, {user.email})"


def _secret(value: str | None, prompt: str) -> str:
    return value if value is not None else getpass.getpass(prompt)


def _run(container: Container, action: Callable[[SessionStore], Awaitable[T]]) -> T:
    """Restore the stored session, then run ``action`` against it."""

    async def _main() -> T:
        try:
            store = container.session_store
            await store.initialize()
            return await action(store)
        finally:
            await container.aclose()

    return asyncio.run(_main())


def _login(container: Container, args: argparse.Namespace) -> int:
    password = _secret(args.password, "Password: ")
    user = _run(container, lambda store: store.login({"username": args.username, "password": password}))
    print(f"Logged in as {_describe(user)}")
    return 0


def _register(container: Container, args: argparse.Namespace) -> int:
    payload = {
        "username": args.username,
        "email": args.email,
        "password": _secret(args.password, "Password: "),
        "first_name": args.first_name,
        "last_name": args.last_name,
        "phone_number": args.phone,
    }
    user = _run(container, lambda store: store.register(payload))
    print(f"Account created, logged in as {_describe(user)}")
    return 0


def _logout(container: Container, args: argparse.Namespace) -> int:
    _run(container, lambda store: store.logout())
    print("Logged out")
    return 0


def _whoami(container: Container, args: argparse.Namespace) -> int:
    async def _current(store: SessionStore) -> UserProfile | None:
        return store.state.user

    user = _run(container, _current)
    if user is None:
        print("Not logged in")
        return 1
    print(_describe(user))
    return 0


def _status(container: Container, args: argparse.Namespace) -> int:
    async def _state(store: SessionStore):
        return store.state

    state = _run(container, _state)
    print(f"Phase: {state.phase.value}")
    print(f"User: {state.user.username if state.user else '-'}")
    if state.last_error:
        print(f"Last error: {state.last_error}")
    return 0


def _refresh(container: Container, args: argparse.Namespace) -> int:
    user = _run(container, lambda store: store.refresh_session())
    print(f"Session refreshed for {user.username}")
    return 0


def _change_password(container: Container, args: argparse.Namespace) -> int:
    old_password = _secret(args.old_password, "Current password: ")
    new_password = _secret(args.new_password, "New password: ")
    _run(container, lambda store: store.change_password(old_password, new_password))
    print("Password changed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rentalclient",
        description="Manage your session with the rental backend",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and store the session")
    login.add_argument("-u", "--username", required=True)
    login.add_argument("-p", "--password", help="Prompted for when omitted")
    login.set_defaults(handler=_login)

    register = commands.add_parser("register", help="Create an account and log in with it")
    register.add_argument("-u", "--username", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--first-name", required=True)
    register.add_argument("--last-name", required=True)
    register.add_argument("--phone", default=None)
    register.add_argument("-p", "--password", help="Prompted for when omitted")
    register.set_defaults(handler=_register)

    commands.add_parser("logout", help="Log out and forget the stored session").set_defaults(
        handler=_logout
    )
    commands.add_parser("whoami", help="Print the user of the stored session").set_defaults(
        handler=_whoami
    )
    commands.add_parser("status", help="Show the session state").set_defaults(handler=_status)
    commands.add_parser("refresh", help="Exchange the stored token for a fresh one").set_defaults(
        handler=_refresh
    )

    change = commands.add_parser("change-password", help="Change the password of the logged in user")
    change.add_argument("--old-password", help="Prompted for when omitted")
    change.add_argument("--new-password", help="Prompted for when omitted")
    change.set_defaults(handler=_change_password)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    container = _make_container()

    try:
        config = container.config
    except ValidationError as exc:
        print(f"Error: invalid configuration\n{exc}", file=sys.stderr)
        return 1
    setup_logging("DEBUG" if args.verbose else config.log_level, config.log_file)

    try:
        return args.handler(container, args)
    except (ApiError, StorageError) as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
