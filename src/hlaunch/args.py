"""Lookup helpers for raw launch argument tokens."""

from collections.abc import Sequence


def get_option(flag: str, args: Sequence[str]) -> str | None:
    """Return the token following ``flag``, or None if absent or last."""
    for index, token in enumerate(args):
        if token == flag:
            if index + 1 < len(args):
                return args[index + 1]
            return None
    return None
