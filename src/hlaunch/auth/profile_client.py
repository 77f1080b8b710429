"""Exchange a bearer access token for the identity profile it belongs to."""

import json
import logging
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from pydantic import ValidationError

from hlaunch import __version__
from hlaunch.models import Profile

log = logging.getLogger(__name__)

PROFILE_URL = "https://api.minecraftservices.com/minecraft/profile"
NETWORK_TIMEOUT_SECONDS = 10.0


class ProfileFetchError(Exception):
    """The profile endpoint could not be reached or returned an unusable payload."""


def fetch_profile(access_token: str, url: str = PROFILE_URL) -> Profile:
    """GET the profile for ``access_token``.

    Raises ProfileFetchError on any transport, HTTP status or decode failure.
    """
    request = Request(
        url,
        headers={
            "Accept": "application/json",
            "Authorization": f"Bearer {access_token}",
            "User-Agent": f"hlaunch/{__version__}",
        },
    )
    log.debug("GET %s", url)
    try:
        with urlopen(request, timeout=NETWORK_TIMEOUT_SECONDS) as response:
            payload = json.load(response)
    except HTTPError as e:
        raise ProfileFetchError(f"HTTP {e.code} {e.reason}") from e
    except (URLError, TimeoutError, OSError) as e:
        raise ProfileFetchError(str(e)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProfileFetchError(f"invalid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ProfileFetchError("expected a JSON object")
    try:
        profile = Profile.model_validate(payload)
    except ValidationError as e:
        raise ProfileFetchError(
            "profile is missing a string 'name' or 'id' "
            f"({e.error_count()} validation error(s))"
        ) from e
    log.debug("token belongs to profile %s (%s)", profile.name, profile.id)
    return profile
