"""
Client Application UI

Counter page, its Datastar action handlers and the panel state behind them.
"""

from .pages import create_web, counter_page
from .state import VisitPanel

__all__ = ["create_web", "counter_page", "VisitPanel"]
