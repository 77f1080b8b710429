"""Model package for hlaunch."""

from hlaunch.models.launch_account import LaunchAccount
from hlaunch.models.launch_request import LaunchRequest
from hlaunch.models.launcher_config import DEFAULT_OFFLINE_USERNAME, LauncherConfig
from hlaunch.models.profile import Profile
from hlaunch.models.stored_account import StoredAccount
from hlaunch.models.version import Version

__all__ = [
    "DEFAULT_OFFLINE_USERNAME",
    "LaunchAccount",
    "LaunchRequest",
    "LauncherConfig",
    "Profile",
    "StoredAccount",
    "Version",
]
