"""
Visit Counter - counter service, client page and backend proxy

A FastAPI service that appends visit rows and counts them, plus a FastHTML
page that drives it through a path-rewriting proxy.
"""

from .app import CounterService
from .adapters.api import create_api
from .adapters.proxy import BackendProxy
from .client import CounterClient, RequestFailed
from .config import ApplicationConfig, Environment, configure_logging
from .core import Visit, VisitCounterError, StoreUnavailable, ConfigError
from .persistence import VisitStore, MemoryVisitStore, SQLVisitStore
from .ui import create_web, VisitPanel

__all__ = [
    # Core
    "Visit",
    "VisitCounterError",
    "StoreUnavailable",
    "ConfigError",

    # Persistence
    "VisitStore",
    "MemoryVisitStore",
    "SQLVisitStore",

    # Service and adapters
    "CounterService",
    "create_api",
    "BackendProxy",

    # Client application
    "CounterClient",
    "RequestFailed",
    "VisitPanel",
    "create_web",

    # Configuration
    "ApplicationConfig",
    "Environment",
    "configure_logging",
]

__version__ = "0.1.0"
