"""`hlaunch launch` command implementation."""

import argparse
import logging
import shlex
import subprocess
import sys

from hlaunch.auth import AccountResolver, FileAccountStore
from hlaunch.auth.resolver import ACCESS_TOKEN_FLAG, ACCOUNT_FLAG
from hlaunch.cli.shared import configure_logging, print_error
from hlaunch.config import game_dir, load_config
from hlaunch.errors import CommandError
from hlaunch.exit import ExitManager
from hlaunch.launch import ProcessFactory, find_version
from hlaunch.models import LaunchRequest

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the launch command."""
    parser = argparse.ArgumentParser(
        prog="hlaunch launch",
        description="Launch the game",
        allow_abbrev=False,
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "version",
        metavar="version/id",
        help="Name or id of the version to launch. Ids require the -id flag.",
    )
    parser.add_argument(
        "-id",
        dest="by_id",
        action="store_true",
        help="Use if you specified an id instead of a version name",
    )
    parser.add_argument("--account", help="Account name or uuid to use for this launch")
    parser.add_argument(
        "--accessToken",
        dest="access_token",
        help="Access token to use for this launch",
    )
    parser.add_argument("--jvm", default="", help="Additional JVM arguments")
    parser.add_argument(
        "-offline",
        dest="offline",
        action="store_true",
        help="Fall back to an offline account when no account is stored",
    )
    parser.add_argument(
        "-noout",
        dest="no_output",
        action="store_true",
        help="Don't print the game's output to the console",
    )
    parser.add_argument(
        "-quit",
        dest="quit",
        action="store_true",
        help="Quit hlaunch after launching the game",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=0,
        help="How many times to restart the game if it exits with an error",
    )
    return parser


def resolver_args(args: argparse.Namespace) -> list[str]:
    """Rebuild the account flags from parsed args, so ``--account=X`` is honored."""
    tokens = []
    if args.account is not None:
        tokens += [ACCOUNT_FLAG, args.account]
    if args.access_token is not None:
        tokens += [ACCESS_TOKEN_FLAG, args.access_token]
    return tokens


def watch_game(
    process: subprocess.Popen,
    factory: ProcessFactory,
    request: LaunchRequest,
    retries: int,
) -> int:
    """Wait for the game, restarting it up to ``retries`` times on failure."""
    attempt = 0
    while True:
        returncode = process.wait()
        log.debug("game exited with code %d", returncode)
        if returncode == 0 or attempt >= retries:
            break
        attempt += 1
        print(
            f"Game exited with code {returncode}, retrying ({attempt}/{retries})...",
            file=sys.stderr,
        )
        try:
            process = factory.run(request)
        except CommandError as e:
            print_error(str(e))
            return 1
    if returncode != 0:
        print(f"Game exited with code {returncode}", file=sys.stderr)
    return returncode


def _watch_and_report(
    exit_manager: ExitManager,
    process: subprocess.Popen,
    factory: ProcessFactory,
    request: LaunchRequest,
    retries: int,
) -> None:
    returncode = watch_game(process, factory, request, retries)
    if returncode != 0:
        # Off the main thread SystemExit only ends this thread; main() reads exit_code.
        exit_manager.terminate(returncode)


def run(argv: list[str], exit_manager: ExitManager | None = None) -> int:
    """Execute the launch command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)
    if exit_manager is None:
        exit_manager = ExitManager()
    if args.retries < 0:
        print_error("--retries must not be negative")
        return 2

    config = load_config()
    if args.offline:
        config = config.model_copy(update={"offline": True})

    try:
        jvm_args = config.jvm_args + shlex.split(args.jvm)
    except ValueError as e:
        print_error(f"Invalid --jvm arguments: {e}")
        return 2

    factory = ProcessFactory()
    try:
        store = FileAccountStore(offline=config.offline)
        account = AccountResolver(store, config).resolve(resolver_args(args))
        directory = game_dir(config)
        version = find_version(directory, args.version, by_id=args.by_id)
        request = LaunchRequest(
            account=account,
            version=version,
            game_dir=directory,
            java=config.java,
            jvm_args=jvm_args,
            no_output=args.no_output,
        )
        process = factory.run(request)
    except CommandError as e:
        print_error(str(e))
        return 1

    print(f"Launched {version.id} as {account.name}.")
    if args.quit:
        exit_manager.terminate(0)
        return 0

    exit_manager.spawn(
        _watch_and_report,
        exit_manager,
        process,
        factory,
        request,
        args.retries,
        name="hlaunch-game",
    )
    return 0
