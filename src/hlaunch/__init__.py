"""hlaunch: headless game launcher core."""

__version__ = "0.1.0"
