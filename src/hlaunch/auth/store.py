"""Account storage: the protocol the resolver consumes and a JSON file backend."""

import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field, ValidationError

from hlaunch import config as config_module
from hlaunch.auth.profile_client import ProfileFetchError, fetch_profile
from hlaunch.errors import AuthError
from hlaunch.models import LauncherConfig, Profile, StoredAccount
from hlaunch.uuids import format_uuid, offline_uuid, uuids_match

log = logging.getLogger(__name__)

OFFLINE_ACCESS_TOKEN = "0"
MAX_OFFLINE_USERNAME_LENGTH = 16


class AccountStore(Protocol):
    """What the account resolver needs from persistent account storage."""

    def list_accounts(self) -> Sequence[StoredAccount]: ...

    def get_primary_account(self) -> StoredAccount | None: ...

    def refresh(self, account: StoredAccount, config: LauncherConfig) -> StoredAccount:
        """Return a refreshed copy of ``account``; raise AuthError on failure."""
        ...

    def is_offline_capable(self) -> bool: ...

    def build_offline_account(self, config: LauncherConfig) -> StoredAccount:
        """Return an offline account; raise AuthError if one cannot be built."""
        ...


class _AccountsFile(BaseModel):
    primary: str | None = None
    accounts: list[StoredAccount] = Field(default_factory=list)


def build_offline_account(username: str) -> StoredAccount:
    """Build the offline account for ``username``."""
    name = username.strip()
    if not name:
        raise AuthError("Offline username must not be empty.")
    if len(name) > MAX_OFFLINE_USERNAME_LENGTH or not all(
        ch.isascii() and (ch.isalnum() or ch == "_") for ch in name
    ):
        raise AuthError(f"Invalid offline username '{name}'.")
    return StoredAccount(
        name=name,
        profile_id=offline_uuid(name),
        profile_name=name,
        access_token=OFFLINE_ACCESS_TOKEN,
        offline=True,
    )


class FileAccountStore:
    """Accounts persisted as JSON, by default at ``~/.hlaunch/accounts.json``."""

    def __init__(
        self,
        path: Path | None = None,
        *,
        offline: bool = False,
        profile_fetcher: Callable[[str], Profile] = fetch_profile,
    ) -> None:
        self._path = path or config_module.ACCOUNTS_FILE
        self._offline = offline
        self._fetch_profile = profile_fetcher
        self._lock = threading.Lock()

    def _load(self) -> _AccountsFile:
        payload = config_module.read_json(self._path)
        if payload is None:
            return _AccountsFile()
        try:
            return _AccountsFile.model_validate(payload)
        except ValidationError as e:
            log.warning("ignoring invalid accounts file %s: %s", self._path, e)
            return _AccountsFile()

    def _save(self, data: _AccountsFile) -> None:
        config_module.write_json_atomic(self._path, data.model_dump(mode="json"))

    def list_accounts(self) -> list[StoredAccount]:
        return list(self._load().accounts)

    def get_primary_account(self) -> StoredAccount | None:
        data = self._load()
        if not data.accounts:
            return None
        if data.primary is not None:
            for account in data.accounts:
                if uuids_match(account.profile_id, data.primary):
                    return account
            log.debug("primary %s not found, using first account", data.primary)
        return data.accounts[0]

    def add_account(self, account: StoredAccount, primary: bool = False) -> None:
        """Insert or replace (by profile id) ``account`` and save."""
        with self._lock:
            data = self._load()
            for index, existing in enumerate(data.accounts):
                if uuids_match(existing.profile_id, account.profile_id):
                    data.accounts[index] = account
                    break
            else:
                data.accounts.append(account)
            if primary or data.primary is None:
                data.primary = account.profile_id
            self._save(data)
        log.debug("stored account %s (%s)", account.name, account.profile_id)

    def refresh(self, account: StoredAccount, config: LauncherConfig) -> StoredAccount:
        """Re-validate the stored token and pick up the current profile name."""
        if account.offline:
            return account
        try:
            profile = self._fetch_profile(account.access_token)
        except ProfileFetchError as e:
            raise AuthError(f"Failed to refresh account '{account.name}': {e}") from e
        if not uuids_match(profile.id, account.profile_id):
            raise AuthError(
                f"Failed to refresh account '{account.name}': token now belongs to another profile."
            )
        refreshed = account.model_copy(
            update={
                "profile_name": profile.name,
                "profile_id": format_uuid(profile.id),
                "refreshed_at": datetime.now(timezone.utc),
            }
        )
        try:
            self.add_account(refreshed)
        except OSError as e:
            log.warning("could not save refreshed account %s: %s", account.name, e)
        return refreshed

    def is_offline_capable(self) -> bool:
        return self._offline

    def build_offline_account(self, config: LauncherConfig) -> StoredAccount:
        return build_offline_account(config.offline_username)
