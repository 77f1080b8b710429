"""Locate installed game versions under the game directory."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from hlaunch.errors import LaunchError
from hlaunch.models import Version

log = logging.getLogger(__name__)


def versions_dir(game_dir: Path) -> Path:
    return game_dir / "versions"


def list_versions(game_dir: Path) -> list[str]:
    """Return the names of installed versions, sorted."""
    root = versions_dir(game_dir)
    if not root.is_dir():
        return []
    return sorted(
        entry.name for entry in root.iterdir() if (entry / f"{entry.name}.json").is_file()
    )


def load_version(game_dir: Path, name: str) -> Version:
    """Load and validate ``versions/<name>/<name>.json``."""
    path = versions_dir(game_dir) / name / f"{name}.json"
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError as e:
        raise LaunchError(f"Couldn't find version '{name}'!") from e
    except (OSError, json.JSONDecodeError) as e:
        raise LaunchError(f"Failed to read version '{name}': {e}") from e
    try:
        return Version.model_validate(payload)
    except ValidationError as e:
        raise LaunchError(f"Invalid version file {path}: {e.error_count()} error(s)") from e


def find_version(game_dir: Path, version_arg: str, by_id: bool = False) -> Version:
    """Find a version by name, or by its index in ``list_versions`` when ``by_id``."""
    if not by_id:
        return load_version(game_dir, version_arg)

    names = list_versions(game_dir)
    try:
        index = int(version_arg)
    except ValueError as e:
        raise LaunchError(f"Version id '{version_arg}' is not a number!") from e
    if index < 0 or index >= len(names):
        raise LaunchError(f"Couldn't find version for id {index}!")
    log.debug("version id %d is %s", index, names[index])
    return load_version(game_dir, names[index])
