"""
User Directory Console Entry Point.

Bootstraps the dependency graph via constructor injection, mounts the
directory store against the configured user store, and prints the
resulting directory.  Every subsystem is wired here; no module-level
globals.

Usage::

    python main.py
    python main.py --search anna --org Acme
    python main.py --demo
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional

from directory_console.config import get_config
from directory_console.gateway import HttpUserGateway, InMemoryUserGateway, UserGateway
from directory_console.logger import StructuredLogger, get_logger
from directory_console.services import DirectoryStore, create_console
from directory_console.services.presenters import user_row

_DEMO_RECORDS: list[dict[str, object]] = [
    {
        "userUid": "demo-1",
        "username": "ahoffmann",
        "firstname": "Anna",
        "lastname": "Hoffmann",
        "mail": "anna.hoffmann@acme.example",
        "organisations": [{"orgName": "Acme", "roles": [{"roleName": "ADMIN"}]}],
    },
    {
        "userUid": "demo-2",
        "username": "bkrause",
        "firstName": "Ben",
        "lastName": "Krause",
        "email": "ben.krause@acme.example",
        "organisations": [{"orgName": "Acme", "roles": []}],
    },
    {
        "userUid": "demo-3",
        "username": "cweber",
        "firstname": "Clara",
        "lastname": "Weber",
        "mail": "clara.weber@example.org",
        "phone": "+49 30 1234567",
        "organisations": [],
    },
]


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User directory console")
    parser.add_argument("--search", default="", help="Filter by name, username or e-mail")
    parser.add_argument("--org", default="", help="Filter by organisation name")
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use built-in sample users instead of the remote store",
    )
    return parser.parse_args(argv)


def _print_directory(store: DirectoryStore) -> None:
    print(f"Organisations: {', '.join(store.organisations) or '-'}")
    for row in (user_row(u) for u in store.users):
        print(
            f"{row.username:<16} {row.first_name} {row.last_name:<20} "
            f"{row.email:<32} {row.organisation:<12} {row.role}"
        )
    if store.error:
        print(f"Error: {store.error}", file=sys.stderr)


async def run(args: argparse.Namespace) -> int:
    """Wire dependencies, load the directory, print it, and tear down."""
    logger: StructuredLogger = get_logger("main")
    config = get_config()

    gateway: UserGateway
    if args.demo:
        gateway = InMemoryUserGateway(_DEMO_RECORDS)
    else:
        gateway = HttpUserGateway(
            base_url=config.API_BASE_URL,
            logger=get_logger("gateway"),
        )

    store = create_console(config, gateway=gateway, logger=get_logger("directory"))
    async with store:
        if args.search or args.org:
            await store.apply_filters(args.search, args.org)
        _print_directory(store)
        exit_code = 1 if store.error else 0

    logger.info("Directory console shut down.")
    return exit_code


def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point."""
    return asyncio.run(run(_parse_args(argv)))


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass
