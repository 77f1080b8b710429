"""Configuration model for hlaunch."""

from pydantic import BaseModel, Field

DEFAULT_OFFLINE_USERNAME = "Player"
DEFAULT_JAVA = "java"


class LauncherConfig(BaseModel):
    """Runtime configuration for hlaunch."""

    refresh_on_launch: bool = True
    fail_launch_on_refresh_failure: bool = False
    offline: bool = False
    offline_username: str = DEFAULT_OFFLINE_USERNAME
    game_dir: str | None = None
    java: str = DEFAULT_JAVA
    jvm_args: list[str] = Field(default_factory=list)
