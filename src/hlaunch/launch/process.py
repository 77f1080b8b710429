"""Build the game command line and start the game process."""

import logging
import os
import shlex
import shutil
import subprocess
from pathlib import Path

from hlaunch.errors import LaunchError
from hlaunch.models import LaunchRequest

log = logging.getLogger(__name__)

REDACTED = "***"


def build_classpath(request: LaunchRequest) -> str:
    """Return the classpath: every library artifact, then the version jar."""
    libraries = request.game_dir / "libraries"
    entries = [str(libraries / path) for path in request.version.library_paths()]
    version_id = request.version.id
    entries.append(str(request.game_dir / "versions" / version_id / f"{version_id}.jar"))
    return os.pathsep.join(entries)


def build_game_args(request: LaunchRequest) -> list[str]:
    account = request.account
    args = [
        "--username", account.name,
        "--version", request.version.id,
        "--gameDir", str(request.game_dir),
        "--assetsDir", str(request.game_dir / "assets"),
    ]
    if request.version.asset_index is not None:
        args += ["--assetIndex", request.version.asset_index.id]
    args += [
        "--uuid", account.id,
        "--accessToken", account.access_token,
        "--userType", account.kind,
    ]
    if account.xuid:
        args += ["--xuid", account.xuid]
    return args


def build_command(request: LaunchRequest) -> list[str]:
    """Return the full argv for ``request``."""
    return [
        request.java,
        *request.jvm_args,
        "-cp",
        build_classpath(request),
        request.version.main_class,
        *build_game_args(request),
    ]


def _redact(command: list[str], secret: str) -> str:
    return shlex.join(REDACTED if part == secret else part for part in command)


class ProcessFactory:
    """Starts game processes."""

    def run(self, request: LaunchRequest) -> subprocess.Popen:
        java = shutil.which(request.java)
        if java is None:
            raise LaunchError(f"Java executable '{request.java}' not found.")

        command = build_command(request)
        command[0] = java
        log.debug("launching: %s", _redact(command, request.account.access_token))
        output = subprocess.DEVNULL if request.no_output else None
        try:
            os.makedirs(request.game_dir, exist_ok=True)
            return subprocess.Popen(
                command,
                cwd=Path(request.game_dir),
                stdout=output,
                stderr=output,
            )
        except OSError as e:
            raise LaunchError(f"Failed to start game process: {e}") from e
