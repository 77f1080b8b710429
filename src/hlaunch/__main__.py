"""Allow running hlaunch with ``python -m hlaunch``."""

from hlaunch import cli

raise SystemExit(cli.main())
