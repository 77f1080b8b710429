"""Account resolution and storage."""

from hlaunch.auth.resolver import AccountResolver
from hlaunch.auth.store import AccountStore, FileAccountStore

__all__ = [
    "AccountResolver",
    "AccountStore",
    "FileAccountStore",
]
