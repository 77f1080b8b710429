"""Exception types raised by hlaunch."""


class HlaunchError(Exception):
    """Base class for all hlaunch errors."""


class CommandError(HlaunchError):
    """A command failed; the message is shown to the user as-is."""


class ResolutionError(CommandError):
    """No launch-ready account could be resolved from the launch arguments."""


class LaunchError(CommandError):
    """The game process could not be started."""


class AuthError(HlaunchError):
    """An account refresh or offline-account construction failed."""
