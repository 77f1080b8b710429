"""Persisted account model."""

from datetime import datetime

from pydantic import BaseModel


class StoredAccount(BaseModel):
    """An account known to the account store.

    ``name`` is the display name users refer to the account by; ``profile_name``
    and ``profile_id`` are what the identity provider reports for it.
    """

    name: str
    profile_id: str
    profile_name: str
    access_token: str
    refresh_token: str | None = None
    expires_at: datetime | None = None
    refreshed_at: datetime | None = None
    xuid: str | None = None
    offline: bool = False
