"""`hlaunch login` command implementation."""

import argparse
import sys

from hlaunch.auth import FileAccountStore
from hlaunch.auth.profile_client import ProfileFetchError, fetch_profile
from hlaunch.cli.shared import configure_logging, print_error
from hlaunch.models import StoredAccount
from hlaunch.uuids import format_uuid

ACCESS_TOKEN_CLI_WARNING = (
    "Warning: --access-token may leak secrets via shell history and process lists."
)


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the login command."""
    parser = argparse.ArgumentParser(
        prog="hlaunch login",
        description="Store an account from an existing access token",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--access-token", required=True, help="Access token for the account")
    parser.add_argument("--name", help="Display name for the account (default: profile name)")
    parser.add_argument("--xuid", help="Xbox user id belonging to the account")
    parser.add_argument(
        "--primary",
        action="store_true",
        help="Use this account when no --account is given",
    )
    return parser


def run(argv: list[str]) -> int:
    """Execute the login command."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    print(ACCESS_TOKEN_CLI_WARNING, file=sys.stderr)

    try:
        profile = fetch_profile(args.access_token)
    except ProfileFetchError as e:
        print_error(f"Failed to fetch profile from access token: {e}")
        return 1

    account = StoredAccount(
        name=args.name or profile.name,
        profile_id=format_uuid(profile.id),
        profile_name=profile.name,
        access_token=args.access_token,
        xuid=args.xuid,
    )
    try:
        FileAccountStore().add_account(account, primary=args.primary)
    except OSError as e:
        print_error(f"Failed to save account: {e}")
        return 1

    print(f"Logged in as {account.profile_name} ({account.profile_id}).")
    return 0
