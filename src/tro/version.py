"""Single source of truth for the tro version string."""

__version__ = "1.30.0"
