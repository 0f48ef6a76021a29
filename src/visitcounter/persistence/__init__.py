"""
Visit Counter Persistence Module

Store implementations behind the VisitStore interface.
"""

from .base import VisitStore
from .memory import MemoryVisitStore
from .sql import SQLVisitStore, normalize_database_url

__all__ = [
    "VisitStore",
    "MemoryVisitStore",
    "SQLVisitStore",
    "normalize_database_url",
]
