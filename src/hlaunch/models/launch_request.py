"""Structured request passed to the process factory."""

from dataclasses import dataclass, field
from pathlib import Path

from hlaunch.models.launch_account import LaunchAccount
from hlaunch.models.version import Version


@dataclass
class LaunchRequest:
    """Everything the process factory needs to start one game process."""

    account: LaunchAccount
    version: Version
    game_dir: Path
    java: str
    jvm_args: list[str] = field(default_factory=list)
    no_output: bool = False
