"""Configuration loading and persistence for hlaunch."""

import json
import logging
import os
import time
from pathlib import Path

from pydantic import ValidationError

from hlaunch.models import LauncherConfig

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".hlaunch"
CONFIG_FILE = CONFIG_DIR / "config.json"
ACCOUNTS_FILE = CONFIG_DIR / "accounts.json"
DEFAULT_GAME_DIR = CONFIG_DIR / "game"

TRUTHY = {"1", "true", "yes", "on"}


def read_json(path: Path) -> dict | None:
    """Return the JSON object stored at `path`, or None if missing or unreadable."""
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as e:
        log.warning("could not read %s: %s", path, e)
        return None
    if not isinstance(payload, dict):
        log.warning("ignoring %s: expected a JSON object", path)
        return None
    return payload


def write_json_atomic(path: Path, payload: dict) -> None:
    """Write ``payload`` to ``path`` through a private temp file and rename."""
    os.makedirs(path.parent, mode=0o700, exist_ok=True)
    temp_file = path.with_name(f".{path.name}.{os.getpid()}.{time.time_ns()}.tmp")
    fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_file, path)
    except BaseException:
        temp_file.unlink(missing_ok=True)
        raise


def _apply_env_overrides(config: LauncherConfig) -> LauncherConfig:
    updates: dict[str, object] = {}
    game_dir = os.environ.get("HLAUNCH_GAME_DIR", "").strip()
    if game_dir:
        updates["game_dir"] = game_dir
    java = os.environ.get("HLAUNCH_JAVA", "").strip()
    if java:
        updates["java"] = java
    offline = os.environ.get("HLAUNCH_OFFLINE")
    if offline is not None:
        updates["offline"] = offline.strip().lower() in TRUTHY
    if updates:
        log.debug("environment overrides: %s", sorted(updates))
        return config.model_copy(update=updates)
    return config


def load_config(path: Path | None = None) -> LauncherConfig:
    """Load config from disk, falling back to defaults, then apply env overrides."""
    config_path = path or CONFIG_FILE
    payload = read_json(config_path)
    config = LauncherConfig()
    if payload is not None:
        try:
            config = LauncherConfig.model_validate(payload)
        except ValidationError as e:
            log.warning("invalid config in %s, using defaults: %s", config_path, e)
    return _apply_env_overrides(config)


def save_config(config: LauncherConfig, path: Path | None = None) -> None:
    """Persist config as JSON with owner-only permissions."""
    write_json_atomic(path or CONFIG_FILE, config.model_dump())


def game_dir(config: LauncherConfig) -> Path:
    """Return the absolute game directory for ``config``."""
    if config.game_dir:
        return Path(config.game_dir).expanduser().absolute()
    return DEFAULT_GAME_DIR
