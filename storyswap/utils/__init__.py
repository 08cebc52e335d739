"""Utilities initialization.

``token_inspector`` is not re-exported; its helpers do not verify tokens and
are imported by module name where used.
"""

from .durations import parse_duration, duration_to_seconds

__all__ = [
    'parse_duration',
    'duration_to_seconds'
]
