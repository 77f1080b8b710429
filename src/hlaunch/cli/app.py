"""Top-level CLI router."""

import sys

from hlaunch import __version__
from hlaunch.exit import ExitManager

from . import accounts as accounts_cmd
from . import launch as launch_cmd
from . import login as login_cmd

USAGE = """usage: hlaunch <command> [options]

commands:
  launch     Launch the game
  accounts   List stored accounts
  login      Store an account from an access token
"""


def dispatch(args: list[str], exit_manager: ExitManager) -> int:
    """Route to the subcommand named by the first argument."""
    if args and args[0] in {"-V", "--version"}:
        print(f"hlaunch {__version__}")
        return 0
    if not args or args[0] in {"-h", "--help"}:
        print(USAGE, end="")
        return 0 if args else 2

    command, rest = args[0], args[1:]
    if command == "launch":
        return launch_cmd.run(rest, exit_manager=exit_manager)
    if command == "accounts":
        return accounts_cmd.run(rest)
    if command == "login":
        return login_cmd.run(rest)

    print(f"Error: unknown command '{command}'", file=sys.stderr)
    print(USAGE, end="", file=sys.stderr)
    return 2


def main(argv: list[str] | None = None, exit_manager: ExitManager | None = None) -> int:
    """Run a command, then let the exit manager wait for tracked tasks."""
    args = list(sys.argv[1:] if argv is None else argv)
    if exit_manager is None:
        exit_manager = ExitManager()
    try:
        code = dispatch(args, exit_manager)
    except BaseException as e:
        exit_manager.on_end(e)
        raise
    exit_manager.on_end(None)
    if code == 0 and exit_manager.exit_code:
        return exit_manager.exit_code
    return code


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
