"""Resolve the account to launch with from raw launch arguments.

Resolution walks an ordered tuple of strategies. Each strategy returns a
LaunchAccount when it applies, None to hand over to the next strategy, or
raises ResolutionError to abort. The default order is:

1. ``--accessToken``: exchange the token for a profile (optionally checked
   against ``--account``).
2. ``--account``: look the account up by display name or profile id.
3. Neither: use the store's primary account, falling back to an offline
   account when the store allows it.

Stored accounts found by (2) and (3) pass through the refresh step, which is
controlled by ``refresh_on_launch`` and ``fail_launch_on_refresh_failure``.
"""

import logging
from collections.abc import Callable, Sequence

from hlaunch.args import get_option
from hlaunch.auth.profile_client import ProfileFetchError, fetch_profile
from hlaunch.auth.store import AccountStore
from hlaunch.errors import AuthError, ResolutionError
from hlaunch.models import LaunchAccount, LauncherConfig, Profile, StoredAccount
from hlaunch.models.launch_account import MSA_KIND, OFFLINE_KIND
from hlaunch.uuids import format_uuid, uuids_match

log = logging.getLogger(__name__)

ACCOUNT_FLAG = "--account"
ACCESS_TOKEN_FLAG = "--accessToken"

Strategy = Callable[[Sequence[str]], LaunchAccount | None]


def to_launch_account(account: StoredAccount) -> LaunchAccount:
    """Convert a stored account into the value handed to the process factory."""
    return LaunchAccount(
        kind=OFFLINE_KIND if account.offline else MSA_KIND,
        name=account.profile_name,
        id=account.profile_id,
        access_token=account.access_token,
        xuid=account.xuid or "",
    )


def matches_account_arg(account: LaunchAccount, account_arg: str) -> bool:
    """Return whether a token-derived account is the one named by ``--account``."""
    if account.name.lower() == account_arg.lower():
        return True
    return uuids_match(account_arg, account.id)


def find_account(accounts: Sequence[StoredAccount], account_arg: str) -> StoredAccount | None:
    """Find an account by display name, profile id, or hyphen-insensitive id."""
    wanted = account_arg.lower()
    for account in accounts:
        if account.name.lower() == wanted:
            return account
        if account.profile_id.lower() == wanted:
            return account
        if uuids_match(account_arg, account.profile_id):
            return account
    return None


class AccountResolver:
    """Turn launch arguments into exactly one launch-ready account."""

    def __init__(
        self,
        store: AccountStore,
        config: LauncherConfig,
        profile_fetcher: Callable[[str], Profile] = fetch_profile,
    ) -> None:
        self.store = store
        self.config = config
        self._fetch_profile = profile_fetcher
        self.strategies: tuple[Strategy, ...] = (
            self.from_access_token,
            self.from_account_arg,
            self.from_primary_account,
        )

    def resolve(self, args: Sequence[str]) -> LaunchAccount:
        for strategy in self.strategies:
            account = strategy(args)
            if account is not None:
                log.debug("resolved %r via %s", account, strategy.__name__)
                return account
        raise ResolutionError("No account could be resolved for this launch.")

    def from_access_token(self, args: Sequence[str]) -> LaunchAccount | None:
        access_token = get_option(ACCESS_TOKEN_FLAG, args)
        if access_token is None:
            return None

        account = self._fetch_account_for_token(access_token)
        account_arg = get_option(ACCOUNT_FLAG, args)
        if account_arg is not None and not matches_account_arg(account, account_arg):
            raise ResolutionError(f"Access token does not match account '{account_arg}'!")
        return account

    def from_account_arg(self, args: Sequence[str]) -> LaunchAccount | None:
        account_arg = get_option(ACCOUNT_FLAG, args)
        if account_arg is None:
            return None

        account = find_account(self.store.list_accounts(), account_arg)
        if account is None:
            raise ResolutionError(f"Couldn't find account for name or uuid '{account_arg}'!")
        return to_launch_account(self._maybe_refresh(account))

    def from_primary_account(self, args: Sequence[str]) -> LaunchAccount | None:
        account = self.store.get_primary_account()
        if account is None:
            if self.store.is_offline_capable():
                log.info("no account stored, launching offline")
                try:
                    offline = self.store.build_offline_account(self.config)
                except AuthError as e:
                    raise ResolutionError(str(e)) from e
                return to_launch_account(offline)
            raise ResolutionError(
                "You can't play the game without an account! Please use the login command."
            )
        return to_launch_account(self._maybe_refresh(account))

    def _fetch_account_for_token(self, access_token: str) -> LaunchAccount:
        try:
            profile = self._fetch_profile(access_token)
        except ProfileFetchError as e:
            raise ResolutionError(f"Failed to fetch profile from access token: {e}") from e
        return LaunchAccount(
            kind=MSA_KIND,
            name=profile.name,
            id=format_uuid(profile.id),
            access_token=access_token,
            xuid="",
        )

    def _maybe_refresh(self, account: StoredAccount) -> StoredAccount:
        if not self.config.refresh_on_launch:
            return account
        try:
            return self.store.refresh(account, self.config)
        except AuthError as e:
            if self.config.fail_launch_on_refresh_failure:
                raise ResolutionError(str(e)) from e
            log.warning(
                "could not refresh account %s, using stored credentials: %s", account.name, e
            )
        return account
