"""Story Swap authentication token service."""

__version__ = "1.0.0"
