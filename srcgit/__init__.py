"""Building blocks for a Git front end: views, progress, rebase todos, patterns and settings."""

__version__ = "0.1.0"