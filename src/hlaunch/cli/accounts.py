"""`hlaunch accounts` command implementation."""

import argparse

from hlaunch.auth import FileAccountStore
from hlaunch.cli.shared import configure_logging
from hlaunch.uuids import uuids_match


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hlaunch accounts",
        description="List stored accounts",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    return parser


def run(argv: list[str]) -> int:
    """List stored accounts, marking the primary one."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    store = FileAccountStore()
    accounts = store.list_accounts()
    if not accounts:
        print("No accounts stored. Use `hlaunch login` to add one.")
        return 0

    primary = store.get_primary_account()
    primary_id = primary.profile_id if primary is not None else None
    for account in accounts:
        marker = "*" if uuids_match(account.profile_id, primary_id) else " "
        print(f"{marker} {account.name}  {account.profile_id}")
    return 0
