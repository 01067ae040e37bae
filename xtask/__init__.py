"""xtask — keep generated files in sync and run the local CI pipeline."""

__version__ = "0.1.0"
