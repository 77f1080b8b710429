"""Game version lookup and process creation."""

from hlaunch.launch.process import ProcessFactory, build_command
from hlaunch.launch.versions import find_version, list_versions

__all__ = [
    "ProcessFactory",
    "build_command",
    "find_version",
    "list_versions",
]
