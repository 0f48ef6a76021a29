"""
Visit Counter Core Module

Domain layer: the Visit record and the error taxonomy shared by every adapter.
"""

from .errors import VisitCounterError, StoreUnavailable, ConfigError
from .visit import Visit, utc_now

__all__ = [
    "Visit",
    "utc_now",
    "VisitCounterError",
    "StoreUnavailable",
    "ConfigError",
]
