"""
Application Service Layer

Orchestrates store calls for the HTTP adapters.
"""

from .service import CounterService

__all__ = ["CounterService"]
